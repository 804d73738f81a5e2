"""Shared test fixtures for Wasuremono tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
import yaml

from wasuremono.controller import InteractionController
from wasuremono.models import Settings, default_items
from wasuremono.render import ListView, StatusView
from wasuremono.store import ItemStore

ROW_HEIGHT = 40


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with a settings file."""
    root = tmp_path / "workspace"
    root.mkdir(parents=True)
    settings = {"storage_key": "wasuremono-list", "drag_threshold": 5, "focus_delay_ms": 100}
    (root / "settings.yaml").write_text(yaml.dump(settings, default_flow_style=False), encoding="utf-8")

    os.environ["WASUREMONO_ROOT"] = str(root)
    yield root
    if "WASUREMONO_ROOT" in os.environ:
        del os.environ["WASUREMONO_ROOT"]


class MemoryBlobStore:
    """Dict-backed key/value strings, like a browser's localStorage."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data = dict(data or {})
        self.writes = 0

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.writes += 1


class FakeSurface:
    """Vertical stack of equally tall rows, top row at y=0."""

    def __init__(self, ids: list[int], row_height: float = ROW_HEIGHT) -> None:
        self.order = list(ids)
        self.row_height = row_height
        self.states: dict[int, set[str]] = {}

    def top_of(self, item_id: int) -> float:
        return self.order.index(item_id) * self.row_height

    def row_at(self, x: float, y: float) -> int | None:
        if y < 0:
            return None
        index = int(y // self.row_height)
        if index >= len(self.order):
            return None
        return self.order[index]

    def row_span(self, item_id: int) -> tuple[float, float]:
        return self.top_of(item_id), self.row_height

    def move_row(self, item_id: int, target_id: int, after: bool) -> None:
        self.order.remove(item_id)
        index = self.order.index(target_id)
        self.order.insert(index + 1 if after else index, item_id)

    def row_order(self) -> list[int]:
        return list(self.order)

    def set_row_state(self, item_id: int, state: str, on: bool) -> None:
        marks = self.states.setdefault(item_id, set())
        if on:
            marks.add(state)
        else:
            marks.discard(state)


class RecordingView(FakeSurface):
    """FakeSurface that also records everything the controller shows."""

    def __init__(self) -> None:
        super().__init__([])
        self.lists: list[ListView] = []
        self.statuses: list[StatusView] = []
        self.modal_visible = False
        self.focus_calls = 0

    def show_list(self, view: ListView) -> None:
        self.lists.append(view)
        self.order = [row.item_id for row in view.rows]

    def show_status(self, status: StatusView) -> None:
        self.statuses.append(status)

    def show_modal(self) -> None:
        self.modal_visible = True

    def hide_modal(self) -> None:
        self.modal_visible = False

    def focus_input(self) -> None:
        self.focus_calls += 1


class Prompts:
    """Scripted answers for confirmation prompts."""

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.asked: list[str] = []

    def __call__(self, prompt: str) -> bool:
        self.asked.append(prompt)
        return self.answer


class Timers:
    def __init__(self) -> None:
        self.pending: list[tuple[float, object]] = []

    def __call__(self, delay: float, callback) -> None:
        self.pending.append((delay, callback))

    def fire(self) -> None:
        pending, self.pending = self.pending, []
        for _delay, callback in pending:
            callback()


@pytest.fixture
def blob_store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def prompts() -> Prompts:
    return Prompts()


@pytest.fixture
def timers() -> Timers:
    return Timers()


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()


@pytest.fixture
def controller(blob_store, view, prompts, timers) -> InteractionController:
    ctl = InteractionController(
        ItemStore(default_items()),
        blob_store,
        view,
        confirm=prompts,
        schedule=timers,
        settings=Settings(),
    )
    ctl.start()
    return ctl
