"""
Read-only snapshots handed to the renderer.

The screen never touches the live tree; it paints whatever the wizard
reports here.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EntryInfo:
    """One row of a unified listing."""

    label: str
    is_folder: bool


@dataclass(frozen=True)
class TaskView:
    """Immutable copy of the selected task."""

    title: str
    body: str
    status_label: str
    status_color: int


@dataclass(frozen=True)
class ViewSnapshot:
    """Everything needed to paint one frame."""

    tabs: tuple[str, ...]
    tab: int
    path: tuple[str, ...]
    entries: tuple[EntryInfo, ...]
    selected: int
    mode: str
    task: TaskView | None = None
    inner_entries: tuple[EntryInfo, ...] | None = None
    inner_selected: int = 0
    prompt: str | None = None
    buffer: str = ""
    buffer_cursor: int = 0
