"""Reusable widgets for the main screen."""

from rich.text import Text
from textual.widgets import Static

from rtasks.snapshot import EntryInfo, ViewSnapshot

FOLDER_STYLE = "bright_cyan"
TASK_STYLE = "bright_green"
SELECTED_BG = " on grey35"

HELP_LINES = (" <q> QUIT ", " <n> NEW ", " <e> EDIT ", " <d> DELETE ", " <w> SAVE ")
NEW_LINES = (" <t> TASK ", " <f> FOLDER ")
EDIT_LINES = (" <t> TITLE ", " <d> DETAILS ", " <s> STATUS ")


def listing_text(entries: tuple[EntryInfo, ...], selected: int) -> Text:
    """Unified listing with the selected row highlighted."""
    text = Text()
    if not entries:
        text.append("(empty)", style="dim")
        return text

    for index, entry in enumerate(entries):
        style = FOLDER_STYLE if entry.is_folder else TASK_STYLE
        if index == selected:
            style += SELECTED_BG
        if index:
            text.append("\n")
        text.append(entry.label or " ", style=style)
    return text


class TabBar(Static):
    """View tabs; only List is backed by a view."""

    DEFAULT_CSS = """
    TabBar {
        height: 3;
        border: round $primary;
        padding: 0 1;
    }
    """

    def show_snapshot(self, snapshot: ViewSnapshot) -> None:
        text = Text()
        for index, name in enumerate(snapshot.tabs):
            if index:
                text.append(" │ ", style="white")
            label = f"[TAB]  {name}" if index == 0 else name
            style = "bright_green" if index == snapshot.tab else "cyan"
            text.append(label, style=style)
        self.update(text)


class FolderListPanel(Static):
    """Folders and tasks of the current folder."""

    DEFAULT_CSS = """
    FolderListPanel {
        width: 35%;
        height: 100%;
        border: solid $primary;
        border-title-style: bold;
    }
    """

    def on_mount(self) -> None:
        self.border_title = "Tasks"

    def show_snapshot(self, snapshot: ViewSnapshot) -> None:
        self.update(listing_text(snapshot.entries, snapshot.selected))


class DetailPanel(Static):
    """Selected task details, or a preview of the selected folder."""

    DEFAULT_CSS = """
    DetailPanel {
        width: 65%;
        height: 100%;
        border: double $primary;
        padding: 0 1;
        border-title-style: bold;
    }
    """

    def show_snapshot(self, snapshot: ViewSnapshot) -> None:
        task = snapshot.task
        if task is not None:
            self.border_title = "Task Details"
            text = Text()
            text.append("Status\n", style="bold white")
            text.append(task.status_label, style=f"color({task.status_color})")
            text.append("\n\nDetails\n", style="bold white")
            text.append(task.body)
            text.append("\n\nMisc\n", style="bold white")
            self.update(text)
        elif snapshot.inner_entries is not None:
            self.border_title = "Inner Tasks"
            self.update(listing_text(snapshot.inner_entries, snapshot.inner_selected))
        else:
            self.border_title = ""
            self.update("")


class MenuPopup(Static):
    """Key hints for the help overlay and the new/edit menus."""

    DEFAULT_CSS = """
    MenuPopup {
        dock: right;
        width: 18;
        height: auto;
        margin-top: 3;
        border: solid $accent;
        color: $accent;
        display: none;
    }
    """

    TITLES = {"help": "Controls", "new": "New", "edit": "Edit"}
    LINES = {"help": HELP_LINES, "new": NEW_LINES, "edit": EDIT_LINES}

    def show_snapshot(self, snapshot: ViewSnapshot) -> None:
        lines = self.LINES.get(snapshot.mode)
        self.display = lines is not None
        if lines is None:
            return
        self.border_title = self.TITLES[snapshot.mode]
        self.update("\n".join(lines))


class InputPopup(Static):
    """The active prompt and its text buffer."""

    DEFAULT_CSS = """
    InputPopup {
        dock: bottom;
        width: 100%;
        height: 3;
        border: round $warning;
        display: none;
    }
    """

    def show_snapshot(self, snapshot: ViewSnapshot) -> None:
        self.display = snapshot.prompt is not None
        if snapshot.prompt is None:
            return
        self.border_title = snapshot.prompt
        text = Text(snapshot.buffer)
        # Draw the cursor as a reversed cell, past the end if needed
        text.append(" ")
        text.stylize("reverse", snapshot.buffer_cursor, snapshot.buffer_cursor + 1)
        self.update(text)
