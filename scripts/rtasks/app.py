"""
R-Tasks application.

Main entry point for the terminal user interface.
"""

from __future__ import annotations

import logging
import sys

from textual.app import App
from textual.binding import Binding

from rtasks.config import LOG_FILE_NAME, Settings, get_settings
from rtasks.logging_setup import setup_logging
from rtasks.model import Folder
from rtasks.store import FolderStore, StoreError
from rtasks.views.main_screen import MainScreen
from rtasks.wizard import Effect, InputWizard

logger = logging.getLogger(__name__)


class RTasksApp(App):
    """Full-screen folder and task organizer."""

    TITLE = "R-Tasks"
    ENABLE_COMMAND_PALETTE = False

    # Tab and escape would otherwise be taken by focus and screen bindings,
    # ctrl+q by Textual's built-in quit
    BINDINGS = [
        Binding("tab", "forward_key('tab')", "Next Tab", show=False, priority=True),
        Binding("escape", "forward_key('escape')", "Abort", show=False, priority=True),
        Binding("ctrl+q", "forward_key('ctrl+q')", show=False, priority=True),
    ]

    def __init__(
        self,
        store: FolderStore,
        root: Folder,
        redraw_interval: float = 1.5,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._folder_store = store
        self._redraw_interval = redraw_interval
        self.wizard = InputWizard(root)
        self.fatal_error: StoreError | None = None

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.push_screen(MainScreen(self.wizard.snapshot))
        self.set_interval(self._redraw_interval, self.redraw)

    def redraw(self) -> None:
        if isinstance(self.screen, MainScreen):
            self.screen.refresh_view()

    def route_key(self, key: str, character: str | None = None) -> None:
        """Route one key through the wizard and carry out its effect."""
        effect = self.wizard.handle_key(key, character)
        if effect is Effect.QUIT:
            self.exit()
            return
        if effect is Effect.SAVE:
            self.save_tree()
        self.redraw()

    def save_tree(self) -> None:
        try:
            self._folder_store.save(self.wizard.root)
        except StoreError as e:
            logger.error("Save failed: %s", e)
            self.fatal_error = e
            self.exit(return_code=1)
            return
        self.notify("Saved")

    def action_forward_key(self, key: str) -> None:
        self.route_key(key)


def _configure_logging(settings: Settings, store: FolderStore) -> None:
    if not settings.log_enabled:
        setup_logging(None)
        return
    log_file = settings.log_file or store.path.parent / LOG_FILE_NAME
    try:
        setup_logging(log_file, settings.log_level)
    except OSError as e:
        print(f"rtasks: logging disabled, cannot open {log_file}: {e}", file=sys.stderr)
        setup_logging(None)


def main() -> int:
    """Load the store, run the session, report fatal errors."""
    settings = get_settings()
    store = FolderStore(settings.store_path)

    try:
        _configure_logging(settings, store)
        root = store.load()
    except StoreError as e:
        logger.error("Startup failed: %s", e)
        print(f"rtasks: {e}", file=sys.stderr)
        return 1

    app = RTasksApp(store, root, redraw_interval=settings.redraw_interval)
    app.run()

    # Reported only now, after the terminal has been restored
    if app.fatal_error is not None:
        print(f"rtasks: {app.fatal_error}", file=sys.stderr)
        return app.return_code or 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
