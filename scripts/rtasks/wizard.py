"""
Modal input state machine.

Key names (Textual's spelling: "up", "enter", "escape", "q", ...) go in;
state changes and folder mutations come out. Saving and quitting are
returned as an Effect for the caller to carry out, so the machine never
touches the terminal or the filesystem.

States:
    Idle          navigation; space opens the help overlay
    HelpOverlay   q quit, n new, e edit/rename, w save, d delete
    NewMenu       f folder, t task
    EditMenu      t title, d details, s status
    AwaitingField a text buffer is active; enter commits, escape aborts
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum

from rtasks.model import Folder, Task
from rtasks.snapshot import EntryInfo, TaskView, ViewSnapshot

logger = logging.getLogger(__name__)

TABS = ("List", "Calendar", "Filter")

_COLOR_RE = re.compile(r"\+?[0-9]+")
_WORD_BOUNDARY_RE = re.compile(r"\S*\s*$")


class Effect(Enum):
    """Side effects the caller performs after a key is handled."""

    SAVE = "save"
    QUIT = "quit"


class TaskStep(Enum):
    TITLE = "title"
    DETAILS = "details"
    STATUS = "status"
    STATUS_COLOR = "status_color"

    @property
    def message(self) -> str:
        return {
            TaskStep.TITLE: "Please input title",
            TaskStep.DETAILS: "Please input details",
            TaskStep.STATUS: "Please input status",
            TaskStep.STATUS_COLOR: "Please input ansii color code",
        }[self]


class RequestKind(Enum):
    NEW_FOLDER = "new_folder"
    RENAME_FOLDER = "rename_folder"
    NEW_TASK = "new_task"
    EDIT_TASK = "edit_task"
    CONFIRM_DELETE = "confirm_delete"


@dataclass(frozen=True)
class Request:
    """What an AwaitingField buffer will be committed to."""

    kind: RequestKind
    step: TaskStep | None = None

    @property
    def message(self) -> str:
        if self.kind is RequestKind.NEW_FOLDER:
            return "Enter the name for the folder"
        if self.kind is RequestKind.RENAME_FOLDER:
            return "Enter the new name for the folder"
        if self.kind is RequestKind.NEW_TASK:
            return f"New Task: {self.step.message}"
        if self.kind is RequestKind.EDIT_TASK:
            return f"Edit Task: {self.step.message}"
        return "Are you sure? Y/N"


@dataclass
class LineBuffer:
    """Single-line editable text with a cursor."""

    value: str = ""
    cursor: int = 0

    def insert(self, text: str) -> None:
        self.value = self.value[: self.cursor] + text + self.value[self.cursor :]
        self.cursor += len(text)

    def handle_key(self, key: str, character: str | None = None) -> bool:
        """Apply an editing key. Returns False if the key means nothing here."""
        if key == "backspace":
            if self.cursor > 0:
                self.value = self.value[: self.cursor - 1] + self.value[self.cursor :]
                self.cursor -= 1
        elif key == "delete":
            self.value = self.value[: self.cursor] + self.value[self.cursor + 1 :]
        elif key == "left":
            self.cursor = max(0, self.cursor - 1)
        elif key == "right":
            self.cursor = min(len(self.value), self.cursor + 1)
        elif key == "home":
            self.cursor = 0
        elif key == "end":
            self.cursor = len(self.value)
        elif key == "ctrl+u":
            self.value = self.value[self.cursor :]
            self.cursor = 0
        elif key == "ctrl+k":
            self.value = self.value[: self.cursor]
        elif key == "ctrl+w":
            head = self.value[: self.cursor]
            cut = _WORD_BOUNDARY_RE.search(head)
            start = cut.start() if cut else self.cursor
            self.value = head[:start] + self.value[self.cursor :]
            self.cursor = start
        elif character and character.isprintable():
            self.insert(character)
        else:
            return False
        return True


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class HelpOverlay:
    pass


@dataclass(frozen=True)
class NewMenu:
    pass


@dataclass(frozen=True)
class EditMenu:
    pass


@dataclass
class AwaitingField:
    """A prompt is open; the buffer lives and dies with this state."""

    request: Request
    buffer: LineBuffer = field(default_factory=LineBuffer)


WizardState = Idle | HelpOverlay | NewMenu | EditMenu | AwaitingField


def parse_color_index(text: str) -> int | None:
    """Parse a 0-255 palette index, or None if text is not one."""
    if not _COLOR_RE.fullmatch(text):
        return None
    value = int(text)
    return value if value <= 255 else None


class InputWizard:
    """Routes keys into navigation, prompts and folder mutations."""

    def __init__(self, root: Folder) -> None:
        self.root = root
        self.state: WizardState = Idle()
        self.path: list[str] = []
        self.tab = 0
        self.pending = Task()

    def current_folder(self) -> Folder:
        return self.root.resolve(self.path)

    # -------------------- transitions --------------------

    def handle_key(self, key: str, character: str | None = None) -> Effect | None:
        """Process one key to completion."""
        state = self.state
        if isinstance(state, Idle):
            self._on_idle(key)
        elif isinstance(state, HelpOverlay):
            return self._on_help(key)
        elif isinstance(state, NewMenu):
            self._on_new_menu(key)
        elif isinstance(state, EditMenu):
            self._on_edit_menu(key)
        elif isinstance(state, AwaitingField):
            self._on_field(state, key, character)
        return None

    def _on_idle(self, key: str) -> None:
        folder = self.current_folder()
        if key == "space":
            self.state = HelpOverlay()
        elif key == "down":
            folder.move_selection(1)
        elif key == "up":
            folder.move_selection(-1)
        elif key == "right":
            subfolder = folder.selected_folder()
            if subfolder is not None:
                self.path.append(subfolder.name)
        elif key == "left":
            if self.path:
                self.path.pop()
        elif key == "tab":
            self.tab = (self.tab + 1) % len(TABS)

    def _on_help(self, key: str) -> Effect | None:
        if key == "q":
            return Effect.QUIT
        if key == "n":
            self.state = NewMenu()
        elif key == "e":
            if self.current_folder().selected_folder() is not None:
                self.state = AwaitingField(Request(RequestKind.RENAME_FOLDER))
            else:
                self.state = EditMenu()
        elif key == "w":
            self.state = Idle()
            return Effect.SAVE
        elif key == "d":
            self.state = AwaitingField(Request(RequestKind.CONFIRM_DELETE))
        else:
            self.state = Idle()
        return None

    def _on_new_menu(self, key: str) -> None:
        if key == "f":
            self.state = AwaitingField(Request(RequestKind.NEW_FOLDER))
        elif key == "t":
            self.state = AwaitingField(Request(RequestKind.NEW_TASK, TaskStep.TITLE))
        else:
            self.state = Idle()

    def _on_edit_menu(self, key: str) -> None:
        steps = {"t": TaskStep.TITLE, "d": TaskStep.DETAILS, "s": TaskStep.STATUS}
        step = steps.get(key)
        if step is None:
            self.state = Idle()
        else:
            self.state = AwaitingField(Request(RequestKind.EDIT_TASK, step))

    def _on_field(self, state: AwaitingField, key: str, character: str | None) -> None:
        if key == "escape":
            self.pending = Task()
            self.state = Idle()
        elif key == "enter":
            self.state = self._commit(state.request, state.buffer.value)
        else:
            state.buffer.handle_key(key, character)

    def _commit(self, request: Request, value: str) -> WizardState:
        """Apply a committed buffer and return the next state."""
        folder = self.current_folder()
        kind = request.kind
        logger.debug("Commit %s/%s", kind.value, request.step.value if request.step else "-")

        if kind is RequestKind.NEW_FOLDER:
            folder.add_folder(value)

        elif kind is RequestKind.RENAME_FOLDER:
            subfolder = folder.selected_folder()
            if subfolder is not None:
                subfolder.name = value

        elif kind is RequestKind.NEW_TASK:
            if request.step is TaskStep.TITLE:
                self.pending.title = value
                return AwaitingField(Request(RequestKind.NEW_TASK, TaskStep.DETAILS))
            self.pending.body = value
            folder.add_task(self.pending)
            self.pending = Task()

        elif kind is RequestKind.EDIT_TASK:
            task = folder.selected_task()
            if request.step is TaskStep.STATUS:
                if task is not None:
                    task.status.label = value
                return AwaitingField(Request(RequestKind.EDIT_TASK, TaskStep.STATUS_COLOR))
            if task is not None:
                if request.step is TaskStep.TITLE:
                    task.title = value
                elif request.step is TaskStep.DETAILS:
                    task.body = value
                elif request.step is TaskStep.STATUS_COLOR:
                    color = parse_color_index(value)
                    if color is None:
                        logger.debug("Ignoring invalid color %r", value)
                    else:
                        task.status.color = color

        elif kind is RequestKind.CONFIRM_DELETE:
            if value.upper() == "Y":
                folder.delete_selected()

        return Idle()

    # -------------------- rendering support --------------------

    @property
    def mode(self) -> str:
        return {
            Idle: "idle",
            HelpOverlay: "help",
            NewMenu: "new",
            EditMenu: "edit",
            AwaitingField: "input",
        }[type(self.state)]

    def snapshot(self) -> ViewSnapshot:
        """Freeze the current state for the renderer."""
        folder = self.current_folder()
        task = folder.selected_task()
        subfolder = folder.selected_folder()

        task_view = None
        if task is not None:
            task_view = TaskView(
                title=task.title,
                body=task.body,
                status_label=task.status.label,
                status_color=task.status.color,
            )

        inner_entries = None
        inner_selected = 0
        if subfolder is not None:
            inner_entries = _listing(subfolder)
            inner_selected = subfolder.selected

        prompt = None
        buffer = ""
        buffer_cursor = 0
        if isinstance(self.state, AwaitingField):
            prompt = self.state.request.message
            buffer = self.state.buffer.value
            buffer_cursor = self.state.buffer.cursor

        return ViewSnapshot(
            tabs=TABS,
            tab=self.tab,
            path=tuple(self.path),
            entries=_listing(folder),
            selected=folder.selected,
            mode=self.mode,
            task=task_view,
            inner_entries=inner_entries,
            inner_selected=inner_selected,
            prompt=prompt,
            buffer=buffer,
            buffer_cursor=buffer_cursor,
        )


def _listing(folder: Folder) -> tuple[EntryInfo, ...]:
    return tuple(
        EntryInfo(label=entry.name, is_folder=True)
        if isinstance(entry, Folder)
        else EntryInfo(label=entry.title, is_folder=False)
        for entry in folder.entries()
    )
