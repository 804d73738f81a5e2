"""Projection of the checklist into view data.

The renderer never diffs: every call rebuilds the full row list and hands it
to the view, which replaces whatever it showed before.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from rich.text import Text

from wasuremono.models import Item

EMPTY_STATE_ICON = "📝"
EMPTY_STATE_TEXT = "Add an item to get started"
COMPLETE_MESSAGE = "🎉 Nothing forgotten!"


class RowRegion(enum.Enum):
    """Clickable parts of a row."""

    TOGGLE = "toggle"
    DELETE = "delete"
    HANDLE = "handle"


@dataclass(frozen=True)
class RowView:
    item_id: int
    text: str
    checked: bool

    @property
    def label(self) -> Text:
        """The text as a literal renderable; brackets and backslashes are not markup."""
        return Text(self.text)

    @property
    def classes(self) -> str:
        return "list-item checked" if self.checked else "list-item"


@dataclass(frozen=True)
class ListView:
    rows: tuple[RowView, ...] = field(default_factory=tuple)

    @property
    def empty(self) -> bool:
        return not self.rows


@dataclass(frozen=True)
class StatusView:
    text: str
    complete: bool
    remaining: int


def build_row(item: Item) -> RowView:
    return RowView(item_id=item.id, text=item.text, checked=item.checked)


def build_list(items: Iterable[Item]) -> ListView:
    return ListView(rows=tuple(build_row(it) for it in items))


def build_status(items: Iterable[Item]) -> StatusView:
    items = list(items)
    remaining = sum(1 for it in items if not it.checked)
    if items and remaining == 0:
        return StatusView(text=COMPLETE_MESSAGE, complete=True, remaining=0)
    return StatusView(text=f"{remaining} remaining", complete=False, remaining=remaining)


class ListSink(Protocol):
    def show_list(self, view: ListView) -> None: ...

    def show_status(self, status: StatusView) -> None: ...


class Renderer:
    """Pushes full projections of the list to a view."""

    def __init__(self, view: ListSink) -> None:
        self.view = view

    def render(self, items: Iterable[Item]) -> ListView:
        projection = build_list(items)
        self.view.show_list(projection)
        return projection

    def update_status(self, items: Iterable[Item]) -> StatusView:
        status = build_status(items)
        self.view.show_status(status)
        return status
