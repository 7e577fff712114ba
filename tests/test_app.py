"""Tests for app.py - key routing through the Textual app and startup errors."""

import asyncio
import json
import sys
from pathlib import Path

import pytest

# Add scripts to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

import rtasks.app
from rtasks.app import RTasksApp, main
from rtasks.config import get_settings
from rtasks.model import Folder, Task
from rtasks.store import FolderStore
from rtasks.views.main_screen import MainScreen
from rtasks.wizard import AwaitingField, Idle


def press(app: RTasksApp, *keys: str) -> None:
    """Run the app headless and press keys in order."""

    async def drive() -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            for key in keys:
                await pilot.press(key)

    asyncio.run(drive())


@pytest.fixture
def store(tmp_path: Path) -> FolderStore:
    store = FolderStore(tmp_path / ".rtasks" / "tasks.json")
    store.load()
    return store


@pytest.fixture
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    """Fresh settings per test and no logging side effects."""
    calls = []
    monkeypatch.setattr(rtasks.app, "setup_logging", lambda *args: calls.append(args))
    monkeypatch.delenv("RTASKS_LOG_FILE", raising=False)
    get_settings.cache_clear()
    yield calls
    get_settings.cache_clear()


class TestKeyRouting:
    """Keys pressed in the running app reach the wizard."""

    def test_main_screen_pushed(self, store: FolderStore) -> None:
        app = RTasksApp(store, Folder())
        seen = []

        async def drive() -> None:
            async with app.run_test() as pilot:
                await pilot.pause()
                seen.append(isinstance(app.screen, MainScreen))

        asyncio.run(drive())
        assert seen == [True]

    def test_new_folder_flow(self, store: FolderStore) -> None:
        app = RTasksApp(store, Folder())
        press(app, "space", "n", "f", "w", "o", "r", "k", "enter")

        assert [f.name for f in app.wizard.root.folders] == ["work"]
        assert app.wizard.state == Idle()

    def test_tab_cycles_view(self, store: FolderStore) -> None:
        app = RTasksApp(store, Folder())
        press(app, "tab", "tab")
        assert app.wizard.tab == 2

    def test_escape_aborts_prompt(self, store: FolderStore) -> None:
        app = RTasksApp(store, Folder())
        press(app, "space", "n", "f", "a", "b", "escape")

        assert app.wizard.root.folders == []
        assert app.wizard.state == Idle()

    def test_space_inside_prompt_is_text(self, store: FolderStore) -> None:
        app = RTasksApp(store, Folder())
        press(app, "space", "n", "f", "a", "space", "b")

        assert isinstance(app.wizard.state, AwaitingField)
        assert app.wizard.state.buffer.value == "a b"

    def test_navigation_enters_folder(self, store: FolderStore) -> None:
        root = Folder()
        root.add_folder("a").add_task(Task(title="inner"))
        app = RTasksApp(store, root)
        press(app, "right")
        assert app.wizard.path == ["a"]
        assert app.wizard.current_folder().tasks[0].title == "inner"

    def test_save_writes_store(self, store: FolderStore) -> None:
        root = Folder()
        root.add_task(Task(title="saved"))
        app = RTasksApp(store, root)
        press(app, "space", "w")

        data = json.loads(store.path.read_text())
        assert data["tasks"][0]["title"] == "saved"
        assert app.fatal_error is None

    def test_no_autosave(self, store: FolderStore) -> None:
        app = RTasksApp(store, Folder())
        press(app, "space", "n", "f", "x", "enter")

        assert json.loads(store.path.read_text())["folders"] == []

    def test_quit(self, store: FolderStore) -> None:
        app = RTasksApp(store, Folder())
        press(app, "space", "q")
        assert app.return_code == 0
        assert app.fatal_error is None

    def test_builtin_keys_disabled(self, store: FolderStore) -> None:
        """Command palette and the built-in quit key do nothing."""
        app = RTasksApp(store, Folder())
        seen = []

        async def drive() -> None:
            async with app.run_test() as pilot:
                await pilot.pause()
                await pilot.press("ctrl+p", "ctrl+q", "space")
                await pilot.pause()
                seen.append(isinstance(app.screen, MainScreen))
                seen.append(app.wizard.mode)

        asyncio.run(drive())
        assert seen == [True, "help"]

    def test_save_failure_is_fatal(self, tmp_path: Path) -> None:
        store = FolderStore(tmp_path / "missing" / "tasks.json")
        app = RTasksApp(store, Folder())
        press(app, "space", "w")

        assert app.fatal_error is not None
        assert app.return_code == 1


class TestMain:
    """Startup failures reported by main()."""

    def test_corrupt_store(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture,
        clean_settings,
    ) -> None:
        store_path = tmp_path / "tasks.json"
        store_path.write_text("not json")
        monkeypatch.setenv("RTASKS_STORE", str(store_path))

        assert main() == 1
        err = capsys.readouterr().err
        assert err.startswith("rtasks: Invalid JSON")
        assert store_path.read_text() == "not json"

    def test_missing_home(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture,
        clean_settings,
    ) -> None:
        def no_home(cls):
            raise RuntimeError("Could not determine home directory.")

        monkeypatch.delenv("RTASKS_STORE", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(no_home))

        assert main() == 1
        assert "Failed to find user home directory" in capsys.readouterr().err

    def test_log_file_beside_store(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        clean_settings,
    ) -> None:
        store_path = tmp_path / "tasks.json"
        store_path.write_text("{}")
        monkeypatch.setenv("RTASKS_STORE", str(store_path))

        assert main() == 1
        assert clean_settings[0][0] == tmp_path / "rtasks.log"
