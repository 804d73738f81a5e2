"""Typed dataclasses for the Wasuremono data model.

Items use from_dict/to_dict for the persisted JSON shape
``{"id": int, "text": str, "checked": bool}``. Unlike settings, items are
strict: a malformed item raises ``ValueError`` so the storage layer can
discard the whole snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


# ── Items ─────────────────────────────────────────────────────


@dataclass
class Item:
    """One checklist entry."""

    id: int
    text: str
    checked: bool = False

    @classmethod
    def from_dict(cls, d: Any) -> Item:
        if not isinstance(d, dict):
            raise ValueError(f"Item must be an object, got {type(d).__name__}")
        item_id = d.get("id")
        text = d.get("text")
        checked = d.get("checked", False)
        # bool is a subclass of int; reject it as an id
        if not isinstance(item_id, int) or isinstance(item_id, bool):
            raise ValueError(f"Invalid item id: {item_id!r}")
        if not isinstance(text, str) or not text.strip():
            raise ValueError(f"Invalid item text for id {item_id}: {text!r}")
        if not isinstance(checked, bool):
            raise ValueError(f"Invalid checked flag for id {item_id}: {checked!r}")
        return cls(id=item_id, text=text, checked=checked)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "checked": self.checked}


# 財布 / スマホ / 鍵 / マスク: wallet, phone, keys, mask
DEFAULT_ITEMS: tuple[tuple[int, str], ...] = (
    (1, "財布"),
    (2, "スマホ"),
    (3, "鍵"),
    (4, "マスク"),
)


def default_items() -> list[Item]:
    """Fresh copy of the seed list, all unchecked."""
    return [Item(id=i, text=t, checked=False) for i, t in DEFAULT_ITEMS]


# ── Settings ──────────────────────────────────────────────────


STORAGE_KEY = "wasuremono-list"
DRAG_THRESHOLD = 5
FOCUS_DELAY_MS = 100
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class Settings:
    storage_key: str = STORAGE_KEY
    drag_threshold: float = DRAG_THRESHOLD
    focus_delay_ms: int = FOCUS_DELAY_MS
    log_level: str = "WARNING"

    @property
    def focus_delay(self) -> float:
        """Focus delay in seconds."""
        return self.focus_delay_ms / 1000.0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Settings:
        if not d or not isinstance(d, dict):
            return cls()
        out = cls()
        key = d.get("storage_key")
        if isinstance(key, str) and key.strip():
            out.storage_key = key.strip()
        threshold = d.get("drag_threshold")
        if isinstance(threshold, (int, float)) and not isinstance(threshold, bool) and threshold >= 0:
            out.drag_threshold = threshold
        delay = d.get("focus_delay_ms")
        if isinstance(delay, int) and not isinstance(delay, bool) and delay >= 0:
            out.focus_delay_ms = delay
        level = str(d.get("log_level", "")).strip().upper()
        if level in LOG_LEVELS:
            out.log_level = level
        return out

    def to_dict(self) -> dict[str, Any]:
        return {
            "storage_key": self.storage_key,
            "drag_threshold": self.drag_threshold,
            "focus_delay_ms": self.focus_delay_ms,
            "log_level": self.log_level,
        }
