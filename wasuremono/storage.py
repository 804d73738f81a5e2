"""Persistence adapter: the item list as one string entry in a blob store.

The store is an opaque key/value map of strings. ``FileBlobStore`` keeps it
in ``storage.json`` inside the workspace; the list itself is a JSON array
serialized into a single entry.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from wasuremono.fileio import read_string_map, write_string_map
from wasuremono.models import STORAGE_KEY, Item, default_items
from wasuremono.workspace import storage_path

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class FileBlobStore:
    """Key/value strings kept in a JSON object file, rewritten atomically."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path if path is not None else storage_path()

    def _read_all(self) -> dict[str, str]:
        try:
            return read_string_map(self.path)
        except ValueError as e:
            logger.warning("Blob store %s is corrupt, treating as empty: %s", self.path, e)
            return {}

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        write_string_map(self.path, data)


# ── Serialization ─────────────────────────────────────────────


def dumps_items(items: list[Item]) -> str:
    return json.dumps([it.to_dict() for it in items], ensure_ascii=False)


def loads_items(raw: str) -> list[Item]:
    """Parse a serialized list. Raises ValueError on any malformed content."""
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"Expected a list, got {type(data).__name__}")
    items = [Item.from_dict(d) for d in data]
    seen: set[int] = set()
    for it in items:
        if it.id in seen:
            raise ValueError(f"Duplicate item id: {it.id}")
        seen.add(it.id)
    return items


def load(store: BlobStore, key: str = STORAGE_KEY) -> list[Item]:
    """Read the list from the store; defaults when absent or malformed."""
    raw = store.get(key)
    if raw is None:
        return default_items()
    try:
        # JSONDecodeError is a ValueError
        return loads_items(raw)
    except ValueError as e:
        logger.warning("Discarding malformed checklist data under %r: %s", key, e)
        return default_items()


def save(store: BlobStore, items: list[Item], key: str = STORAGE_KEY) -> None:
    """Overwrite the stored list with a full snapshot."""
    store.set(key, dumps_items(items))
    logger.debug("Saved %d items under %r", len(items), key)
