"""Main screen: tab bar, folder listing, detail pane and popups."""

from collections.abc import Callable

from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widgets import Header

from rtasks.snapshot import ViewSnapshot
from rtasks.views.widgets import (
    DetailPanel,
    FolderListPanel,
    InputPopup,
    MenuPopup,
    TabBar,
)


class MainScreen(Screen):
    """Paints snapshots and forwards every key to the app."""

    DEFAULT_CSS = """
    MainScreen {
        background: $surface;
    }

    #body {
        height: 1fr;
    }
    """

    def __init__(self, snapshot_source: Callable[[], ViewSnapshot], **kwargs) -> None:
        super().__init__(**kwargs)
        self._snapshot_source = snapshot_source

    def compose(self) -> ComposeResult:
        yield Header()
        yield TabBar(id="tabs")
        with Horizontal(id="body"):
            yield FolderListPanel(id="listing")
            yield DetailPanel(id="detail")
        yield MenuPopup(id="menu")
        yield InputPopup(id="prompt")

    def on_mount(self) -> None:
        self.refresh_view()

    def refresh_view(self) -> None:
        """Repaint every region from a fresh snapshot."""
        snapshot = self._snapshot_source()
        self.app.sub_title = "/" + "/".join(snapshot.path)
        self.query_one(TabBar).show_snapshot(snapshot)
        self.query_one(FolderListPanel).show_snapshot(snapshot)
        self.query_one(DetailPanel).show_snapshot(snapshot)
        self.query_one(MenuPopup).show_snapshot(snapshot)
        self.query_one(InputPopup).show_snapshot(snapshot)

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.app.route_key(event.key, event.character)
