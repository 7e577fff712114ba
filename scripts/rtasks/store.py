"""
JSON persistence for the folder tree.

The whole tree lives in one pretty-printed file, by default
~/.rtasks/tasks.json. Loading validates every folder node against
STORE_SCHEMA before building model objects; any mismatch is fatal.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from jsonschema import SchemaError, ValidationError, validate

from rtasks.config import STORE_DIR_NAME, STORE_FILE_NAME
from rtasks.model import Folder

logger = logging.getLogger(__name__)

STORE_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "rtasks folder",
    "type": "object",
    "required": ["name", "tasks", "folders"],
    "properties": {
        "name": {"type": "string"},
        "tasks": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["title", "task", "status"],
                "properties": {
                    "title": {"type": "string"},
                    "task": {"type": "string"},
                    "status": {
                        "type": "object",
                        "required": ["status", "color"],
                        "properties": {
                            "status": {"type": "string"},
                            "color": {"type": "integer", "minimum": 0, "maximum": 255},
                        },
                    },
                },
            },
        },
        # Nested folders are checked one node at a time by _validate_tree
        "folders": {"type": "array", "items": {"type": "object"}},
    },
}


class StoreError(Exception):
    """Base class for fatal persistence failures."""


class HomeDirectoryNotFound(StoreError):
    """The user's home directory could not be determined."""


class StoreIOError(StoreError):
    """Creating the store directory, or reading or writing the file, failed."""


class StoreParseError(StoreError):
    """The store file exists but is not a valid folder document."""


def default_store_path() -> Path:
    """Per-user store location: ~/.rtasks/tasks.json."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirectoryNotFound("Failed to find user home directory") from e
    return home / STORE_DIR_NAME / STORE_FILE_NAME


def _validate_tree(data: Any) -> None:
    """Validate each folder node in document order, without recursing."""
    pending: list[tuple[Any, list[str | int]]] = [(data, [])]
    while pending:
        node, prefix = pending.pop()
        try:
            validate(instance=node, schema=STORE_SCHEMA)
        except SchemaError as e:
            raise StoreParseError(f"Invalid schema: {e.message}") from e
        except ValidationError as e:
            parts = prefix + list(e.absolute_path)
            path = " -> ".join(str(p) for p in parts) if parts else "root"
            raise StoreParseError(f"Validation error at '{path}': {e.message}") from e

        children = node["folders"]
        for index in reversed(range(len(children))):
            pending.append((children[index], prefix + ["folders", index]))


def parse_document(text: str) -> Folder:
    """Turn store file contents into a Folder tree."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise StoreParseError(f"Invalid JSON: {e}") from e
    except RecursionError as e:
        raise StoreParseError("Invalid JSON: document is nested too deeply") from e

    _validate_tree(data)

    try:
        return Folder.from_dict(data)
    except RecursionError as e:
        raise StoreParseError("Folder tree is nested too deeply") from e


def render_document(folder: Folder) -> str:
    """Serialize a tree in its persisted, human-readable form."""
    return json.dumps(folder.to_dict(), indent=2, ensure_ascii=False)


class FolderStore:
    """Loads and saves the folder tree at a fixed path."""

    def __init__(self, path: Path | None = None):
        self._path = path

    @property
    def path(self) -> Path:
        if self._path is None:
            self._path = default_store_path()
        return self._path

    def load(self) -> Folder:
        """Load the tree, writing a fresh empty root if no file exists yet."""
        path = self.path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreIOError(f"Cannot create {path.parent}: {e}") from e

        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("No store at %s, initializing an empty tree", path)
            folder = Folder()
            self.save(folder)
            return folder
        except OSError as e:
            raise StoreIOError(f"Cannot read {path}: {e}") from e

        folder = parse_document(text)
        logger.info("Loaded %s", path)
        return folder

    def save(self, folder: Folder) -> None:
        """Overwrite the store file with the whole tree."""
        path = self.path
        try:
            text = render_document(folder)
        except RecursionError as e:
            raise StoreIOError(f"Cannot write {path}: folder tree is nested too deeply") from e
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise StoreIOError(f"Cannot write {path}: {e}") from e
        logger.info("Saved %s", path)
