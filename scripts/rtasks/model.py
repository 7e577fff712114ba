"""
Folder tree data model.

A Folder owns its subfolders and tasks directly. The selection cursor
indexes the unified listing: every subfolder (storage order) followed by
every task (storage order).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

DEFAULT_STATUS_LABEL = "Incomplete"
DEFAULT_STATUS_COLOR = 5


class FolderNotFound(LookupError):
    """Raised when a path segment names no child folder."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Folder with name {name} doesn't exist")
        self.name = name


@dataclass
class Status:
    """Short label plus a 256-color palette index used for display."""

    label: str = DEFAULT_STATUS_LABEL
    color: int = DEFAULT_STATUS_COLOR

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.label, "color": self.color}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Status:
        return cls(label=data["status"], color=int(data["color"]))


@dataclass
class Task:
    """A titled item with a free-text body and a Status."""

    title: str = ""
    body: str = ""
    status: Status = field(default_factory=Status)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "task": self.body,
            "status": self.status.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        return cls(
            title=data["title"],
            body=data["task"],
            status=Status.from_dict(data["status"]),
        )


@dataclass
class Folder:
    """Named recursive container of subfolders and tasks."""

    name: str = ""
    tasks: list[Task] = field(default_factory=list)
    folders: list[Folder] = field(default_factory=list)
    selected: int = field(default=0, compare=False)

    # -------------------- queries --------------------

    @property
    def total(self) -> int:
        """Length of the unified listing."""
        return len(self.folders) + len(self.tasks)

    def entries(self) -> Iterator[Folder | Task]:
        """Iterate the unified listing: folders first, then tasks."""
        yield from self.folders
        yield from self.tasks

    def resolve(self, path: Iterable[str]) -> Folder:
        """Walk a path of folder names down from this folder.

        Each segment matches the first child with that name, so duplicate
        sibling names always resolve to the earliest one.
        """
        node = self
        for name in path:
            for child in node.folders:
                if child.name == name:
                    node = child
                    break
            else:
                raise FolderNotFound(name)
        return node

    def selected_folder(self) -> Folder | None:
        if self.selected < len(self.folders):
            return self.folders[self.selected]
        return None

    def selected_task(self) -> Task | None:
        index = self.selected - len(self.folders)
        if 0 <= index < len(self.tasks):
            return self.tasks[index]
        return None

    # -------------------- mutation --------------------

    def add_task(self, task: Task) -> Task:
        self.tasks.append(task)
        return self.tasks[-1]

    def add_folder(self, name: str) -> Folder:
        self.folders.append(Folder(name=name))
        return self.folders[-1]

    def move_selection(self, delta: int) -> None:
        """Move the cursor by delta, clamped to the unified listing."""
        self.selected = self._clamp(self.selected + delta)

    def delete_selected(self) -> None:
        """Remove the selected subfolder (with its subtree) or task."""
        if self.total == 0:
            return

        if self.selected < len(self.folders):
            del self.folders[self.selected]
        else:
            del self.tasks[self.selected - len(self.folders)]

        if self.selected > 0:
            self.selected -= 1
        self.selected = self._clamp(self.selected)

    def _clamp(self, index: int) -> int:
        if self.total == 0:
            return 0
        return max(0, min(index, self.total - 1))

    # -------------------- serialization --------------------

    def to_dict(self) -> dict[str, Any]:
        """Persisted shape; the selection cursor is never included."""
        return {
            "name": self.name,
            "tasks": [task.to_dict() for task in self.tasks],
            "folders": [folder.to_dict() for folder in self.folders],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Folder:
        return cls(
            name=data["name"],
            tasks=[Task.from_dict(t) for t in data["tasks"]],
            folders=[cls.from_dict(f) for f in data["folders"]],
        )
