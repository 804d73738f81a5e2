"""Wires user actions to store mutations.

Every mutating action ends in ``refresh()``: save the full list, rebuild the
row list, update the status line. The view never holds state the store
does not.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from wasuremono.drag import DragController, DragSurface
from wasuremono.models import Settings
from wasuremono.render import ListSink, Renderer, RowRegion
from wasuremono.storage import BlobStore, save
from wasuremono.store import Confirm, ItemStore

logger = logging.getLogger(__name__)

Schedule = Callable[[float, Callable[[], None]], object]


class CheckView(ListSink, DragSurface, Protocol):
    """Everything the controller needs from the visual layer."""

    def show_modal(self) -> None: ...

    def hide_modal(self) -> None: ...

    def focus_input(self) -> None: ...


@dataclass
class ModalState:
    open: bool = False
    input_text: str = ""


class InteractionController:
    def __init__(
        self,
        store: ItemStore,
        blob_store: BlobStore,
        view: CheckView,
        confirm: Confirm,
        schedule: Schedule,
        settings: Settings | None = None,
    ) -> None:
        self.store = store
        self.blob_store = blob_store
        self.view = view
        self.confirm = confirm
        self.schedule = schedule
        self.settings = settings or Settings()
        self.renderer = Renderer(view)
        self.modal = ModalState()
        self.drag = DragController(view, self.commit_order, threshold=self.settings.drag_threshold)

    def start(self) -> None:
        self.renderer.render(self.store)
        self.renderer.update_status(self.store)

    def refresh(self) -> None:
        save(self.blob_store, self.store.items, self.settings.storage_key)
        self.renderer.render(self.store)
        self.renderer.update_status(self.store)

    # ── Modal ─────────────────────────────────────────────────

    def open_add(self) -> None:
        self.modal.open = True
        self.modal.input_text = ""
        self.view.show_modal()
        # on-screen keyboards need a moment before the input can take focus
        self.schedule(self.settings.focus_delay, self.view.focus_input)

    def close_modal(self) -> None:
        self.modal.open = False
        self.modal.input_text = ""
        self.view.hide_modal()

    def submit_add(self, text: str) -> bool:
        added = self.store.add(text)
        if added is None:
            # blank input leaves the dialog open
            return False
        logger.debug("Added item %s", added.id)
        self.refresh()
        self.close_modal()
        return True

    def key(self, name: str) -> bool:
        if name == "escape" and self.modal.open:
            self.close_modal()
            return True
        return False

    # ── List actions ──────────────────────────────────────────

    def toggle(self, item_id: int) -> bool:
        if self.store.toggle_check(item_id) is None:
            return False
        self.refresh()
        return True

    def delete(self, item_id: int, confirm: Confirm | None = None) -> bool:
        if not self.store.delete(item_id, confirm or self.confirm):
            return False
        logger.debug("Deleted item %s", item_id)
        self.refresh()
        return True

    def tap_row(self, item_id: int, region: RowRegion) -> bool:
        if region is RowRegion.DELETE:
            return self.delete(item_id)
        if region is RowRegion.HANDLE:
            return False
        return self.toggle(item_id)

    def check_all(self) -> None:
        self.store.check_all()
        self.refresh()

    def reset_all(self, confirm: Confirm | None = None) -> bool:
        if not self.store.reset_all(confirm or self.confirm):
            return False
        self.refresh()
        return True

    def commit_order(self, ids: list[int]) -> None:
        self.store.reorder(ids)
        self.refresh()
