#!/usr/bin/env python3
"""Wasuremono TUI — forget-me-not checklist powered by Textual."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from pathlib import Path

from textual import events, on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.errors import NoWidget
from textual.logging import TextualHandler
from textual.message import Message
from textual.screen import ModalScreen
from textual.widget import Widget
from textual.widgets import Button, Footer, Header, Input, Label, Static

from wasuremono import (
    BlobStore,
    FileBlobStore,
    InteractionController,
    ItemStore,
    ListView,
    PointerEvent,
    RowRegion,
    RowView,
    Settings,
    StatusView,
    ensure_workspace,
    load,
    load_settings,
    storage_path,
    workspace_root,
)
from wasuremono.render import EMPTY_STATE_ICON, EMPTY_STATE_TEXT
from wasuremono.store import DELETE_PROMPT, RESET_PROMPT, Confirm

logger = logging.getLogger(__name__)


# ── Stylesheet ─────────────────────────────────────────────────

CSS = """
Screen {
    background: $surface;
}

#checklist {
    height: 1fr;
    padding: 0 1;
}

.rows {
    height: auto;
}

.list-item {
    height: 3;
    border: round $primary-background-darken-2;
    padding: 0 1;
}

.list-item.pressed {
    background: $boost;
}

.list-item.dragging {
    border: round $accent;
    opacity: 60%;
}

.drag-handle {
    width: 3;
    color: $text-muted;
}

.checkbox {
    width: 3;
}

.item-text {
    width: 1fr;
}

.list-item.checked .item-text {
    text-style: strike;
    color: $text-muted;
}

.delete-btn {
    width: 3;
    color: $error;
}

.empty-state {
    height: auto;
    padding: 2 0;
    content-align: center middle;
    text-align: center;
    color: $text-muted;
}

#actions {
    dock: bottom;
    height: 3;
    padding: 0 1;
}

#actions Button {
    margin: 0 1 0 0;
}

#status {
    dock: bottom;
    height: 1;
    background: $primary-background;
    color: $text;
    padding: 0 2;
}

#status.complete {
    background: $success;
    text-style: bold;
}

AddItemScreen, ConfirmScreen {
    align: center middle;
}

#modal-content, #confirm-content {
    width: 50;
    height: auto;
    padding: 1 2;
    border: thick $primary;
    background: $panel;
}

.modal-buttons {
    height: auto;
    margin: 1 0 0 0;
}

.modal-buttons Button {
    margin: 0 1 0 0;
}
"""


# ── Row widgets ────────────────────────────────────────────────


class DragHandle(Static):
    """The ☰ grip. Pressing it starts a reorder gesture."""

    class Pressed(Message):
        def __init__(self, item_id: int, x: int, y: int) -> None:
            super().__init__()
            self.item_id = item_id
            self.x = x
            self.y = y

    class Moved(Message):
        def __init__(self, x: int, y: int) -> None:
            super().__init__()
            self.x = x
            self.y = y

    class Released(Message):
        pass

    def __init__(self, item_id: int, **kwargs) -> None:
        super().__init__("☰", classes="drag-handle", **kwargs)
        self.item_id = item_id

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if event.button != 1:
            return
        event.stop()
        self.capture_mouse()
        self.post_message(self.Pressed(self.item_id, event.screen_x, event.screen_y))

    def on_mouse_move(self, event: events.MouseMove) -> None:
        # only delivered here while the mouse is captured, i.e. the button is held
        if self.app.mouse_captured is self:
            self.post_message(self.Moved(event.screen_x, event.screen_y))

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if self.app.mouse_captured is self:
            self.release_mouse()
            self.post_message(self.Released())

    def on_click(self, event: events.Click) -> None:
        event.stop()


class DeleteButton(Static):
    def __init__(self, item_id: int, **kwargs) -> None:
        super().__init__("×", classes="delete-btn", **kwargs)
        self.item_id = item_id

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.post_message(ChecklistRow.Tapped(self.item_id, RowRegion.DELETE))


class ChecklistRow(Horizontal):
    """One item: grip, checkbox glyph, text, delete control."""

    class Tapped(Message):
        def __init__(self, item_id: int, region: RowRegion) -> None:
            super().__init__()
            self.item_id = item_id
            self.region = region

    def __init__(self, row: RowView, **kwargs) -> None:
        super().__init__(classes=row.classes, **kwargs)
        self.row = row

    @property
    def item_id(self) -> int:
        return self.row.item_id

    def compose(self) -> ComposeResult:
        yield DragHandle(self.item_id)
        yield Static("☑" if self.row.checked else "☐", classes="checkbox")
        yield Static(self.row.label, classes="item-text")
        yield DeleteButton(self.item_id)

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.post_message(self.Tapped(self.item_id, RowRegion.TOGGLE))


# ── Modal screens ──────────────────────────────────────────────


class AddItemScreen(ModalScreen[None]):
    """Text input for a new item."""

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    class Submitted(Message):
        def __init__(self, text: str) -> None:
            super().__init__()
            self.text = text

    class Cancelled(Message):
        def __init__(self, reason: str) -> None:
            super().__init__()
            self.reason = reason

    def compose(self) -> ComposeResult:
        yield Vertical(
            Label("Add an item"),
            Input(placeholder="e.g. umbrella", id="item-input"),
            Horizontal(
                Button("Add", id="submit-btn", variant="primary"),
                Button("Cancel", id="cancel-btn"),
                classes="modal-buttons",
            ),
            id="modal-content",
        )

    @on(Input.Submitted, "#item-input")
    def _on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.post_message(self.Submitted(event.value))

    @on(Button.Pressed, "#submit-btn")
    def _on_submit_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(self.Submitted(self.query_one("#item-input", Input).value))

    @on(Button.Pressed, "#cancel-btn")
    def _on_cancel_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(self.Cancelled("cancel"))

    def on_click(self, event: events.Click) -> None:
        try:
            widget, _ = self.get_widget_at(event.screen_x, event.screen_y)
        except NoWidget:
            return
        if widget is self:
            self.post_message(self.Cancelled("backdrop"))

    def action_cancel(self) -> None:
        self.post_message(self.Cancelled("escape"))


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no prompt; dismisses with the answer."""

    BINDINGS = [
        Binding("escape", "answer(False)", "No"),
        Binding("y", "answer(True)", "Yes"),
        Binding("n", "answer(False)", "No"),
    ]

    def __init__(self, prompt: str) -> None:
        super().__init__()
        self.prompt = prompt

    def compose(self) -> ComposeResult:
        yield Vertical(
            Label(self.prompt),
            Horizontal(
                Button("Yes", id="yes-btn", variant="error"),
                Button("No", id="no-btn"),
                classes="modal-buttons",
            ),
            id="confirm-content",
        )

    @on(Button.Pressed, "#yes-btn")
    def _on_yes(self) -> None:
        self.dismiss(True)

    @on(Button.Pressed, "#no-btn")
    def _on_no(self) -> None:
        self.dismiss(False)

    def action_answer(self, answer: bool) -> None:
        self.dismiss(answer)


class UnansweredPrompt(RuntimeError):
    """A gated action ran without going through WasuremonoApp.ask."""


def _unanswered(prompt: str) -> bool:
    raise UnansweredPrompt(f"{prompt!r} must be answered on a ConfirmScreen")


# ── Main app ───────────────────────────────────────────────────


class WasuremonoApp(App):
    """Wasuremono — don't leave home without it."""

    TITLE = "Wasuremono"
    CSS = CSS
    AUTO_FOCUS = None

    BINDINGS = [
        Binding("a", "add_item", "Add"),
        Binding("c", "check_all", "Check all"),
        Binding("r", "reset_all", "Reset"),
        Binding("escape", "escape", "Close", show=False),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        workspace: Path | None = None,
        prefs: Settings | None = None,
        blob_store: BlobStore | None = None,
    ) -> None:
        super().__init__()
        self.workspace = workspace if workspace is not None else workspace_root()
        self.prefs = prefs if prefs is not None else load_settings(self.workspace)
        self.blob_store = blob_store if blob_store is not None else FileBlobStore(storage_path(self.workspace))
        self.store = ItemStore(load(self.blob_store, self.prefs.storage_key))
        logger.debug("Loaded %d items from %s", len(self.store), self.workspace)
        self._rows_box: Vertical | None = None
        self._holder: VerticalScroll | None = None
        self._status: Static | None = None
        self.controller = InteractionController(
            self.store,
            self.blob_store,
            self,
            confirm=_unanswered,
            schedule=self.set_timer,
            settings=self.prefs,
        )

    def compose(self) -> ComposeResult:
        yield Header()
        yield VerticalScroll(id="checklist", can_focus=False)
        yield Static(id="status")
        yield Horizontal(
            Button("+ Add", id="add-btn", variant="primary"),
            Button("Check all", id="check-all-btn"),
            Button("Reset", id="reset-btn"),
            id="actions",
        )
        yield Footer()

    def on_mount(self) -> None:
        # modal screens sit on top while callbacks re-render, so keep direct handles
        self._holder = self.query_one("#checklist", VerticalScroll)
        self._status = self.query_one("#status", Static)
        self.controller.start()

    # ── List + status (Renderer target) ────────────────────────

    def show_list(self, view: ListView) -> None:
        """Replace the whole row list."""
        if self.controller.drag.active:
            self.controller.drag.cancel()
        if self._rows_box is not None:
            self._rows_box.remove()
        if view.empty:
            box = Vertical(
                Static(f"{EMPTY_STATE_ICON}\n{EMPTY_STATE_TEXT}", classes="empty-state"),
                classes="rows",
            )
        else:
            box = Vertical(*(ChecklistRow(row) for row in view.rows), classes="rows")
        self._rows_box = box
        self._holder.mount(box)

    def show_status(self, status: StatusView) -> None:
        self._status.update(status.text)
        self._status.set_class(status.complete, "complete")

    # ── Modal (InteractionController target) ──────────────────

    def show_modal(self) -> None:
        self.push_screen(AddItemScreen())

    def hide_modal(self) -> None:
        if isinstance(self.screen, AddItemScreen):
            self.pop_screen()

    def focus_input(self) -> None:
        if isinstance(self.screen, AddItemScreen):
            self.screen.query_one("#item-input", Input).focus()

    # ── Drag surface ──────────────────────────────────────────

    def rows(self) -> list[ChecklistRow]:
        if self._rows_box is None:
            return []
        return [w for w in self._rows_box.children if isinstance(w, ChecklistRow)]

    def row_widget(self, item_id: int) -> ChecklistRow | None:
        for row in self.rows():
            if row.item_id == item_id:
                return row
        return None

    def row_at(self, x: float, y: float) -> int | None:
        try:
            widget, _ = self.screen.get_widget_at(int(x), int(y))
        except NoWidget:
            return None
        node: Widget | None = widget
        while node is not None and not isinstance(node, ChecklistRow):
            parent = node.parent
            node = parent if isinstance(parent, Widget) else None
        if node is None or node.parent is not self._rows_box:
            return None
        return node.item_id

    def row_span(self, item_id: int) -> tuple[float, float]:
        row = self.row_widget(item_id)
        if row is None:
            raise KeyError(item_id)
        region = row.region
        return float(region.y), float(region.height)

    def move_row(self, item_id: int, target_id: int, after: bool) -> None:
        row = self.row_widget(item_id)
        target = self.row_widget(target_id)
        if row is None or target is None or self._rows_box is None:
            return
        if after:
            self._rows_box.move_child(row, after=target)
        else:
            self._rows_box.move_child(row, before=target)

    def row_order(self) -> list[int]:
        return [row.item_id for row in self.rows()]

    def set_row_state(self, item_id: int, state: str, on: bool) -> None:
        row = self.row_widget(item_id)
        if row is not None:
            row.set_class(on, state)

    # ── Gesture + tap messages ────────────────────────────────

    @on(DragHandle.Pressed)
    def _on_handle_pressed(self, event: DragHandle.Pressed) -> None:
        self.controller.drag.press(event.item_id, PointerEvent(x=event.x, y=event.y))

    @on(DragHandle.Moved)
    def _on_handle_moved(self, event: DragHandle.Moved) -> None:
        self.controller.drag.move(PointerEvent(x=event.x, y=event.y))

    @on(DragHandle.Released)
    def _on_handle_released(self, event: DragHandle.Released) -> None:
        self.controller.drag.release()

    @on(ChecklistRow.Tapped)
    def _on_row_tapped(self, event: ChecklistRow.Tapped) -> None:
        if event.region is RowRegion.DELETE:
            self.request_delete(event.item_id)
        else:
            self.controller.tap_row(event.item_id, event.region)

    # ── Add modal messages ────────────────────────────────────

    @on(AddItemScreen.Submitted)
    def _on_add_submitted(self, event: AddItemScreen.Submitted) -> None:
        self.controller.submit_add(event.text)

    @on(AddItemScreen.Cancelled)
    def _on_add_cancelled(self, event: AddItemScreen.Cancelled) -> None:
        if event.reason == "escape":
            self.controller.key("escape")
        else:
            self.controller.close_modal()

    # ── Confirmation-gated actions ────────────────────────────

    def ask(self, prompt: str, then: Callable[[Confirm], object]) -> None:
        """Show a yes/no prompt, then run *then* with a confirm that returns the answer."""

        def _answered(answer: bool | None) -> None:
            result = bool(answer)

            def confirm(_prompt: str) -> bool:
                return result

            then(confirm)

        self.push_screen(ConfirmScreen(prompt), callback=_answered)

    def request_delete(self, item_id: int) -> None:
        if self.store.find(item_id) is None:
            return
        self.ask(DELETE_PROMPT, lambda confirm: self.controller.delete(item_id, confirm=confirm))

    # ── Actions ───────────────────────────────────────────────

    def action_add_item(self) -> None:
        self.controller.open_add()

    def action_check_all(self) -> None:
        self.controller.check_all()

    def action_reset_all(self) -> None:
        self.ask(RESET_PROMPT, lambda confirm: self.controller.reset_all(confirm=confirm))

    def action_escape(self) -> None:
        self.controller.key("escape")

    @on(Button.Pressed, "#add-btn")
    def _on_add_pressed(self) -> None:
        self.action_add_item()

    @on(Button.Pressed, "#check-all-btn")
    def _on_check_all_pressed(self) -> None:
        self.action_check_all()

    @on(Button.Pressed, "#reset-btn")
    def _on_reset_pressed(self) -> None:
        self.action_reset_all()


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    root = workspace_root()
    try:
        ensure_workspace(root)
    except OSError as e:
        print(f"Cannot prepare workspace {root}: {e}")
        print("Set WASUREMONO_ROOT to a writable directory.")
        sys.exit(1)

    prefs = load_settings(root)
    logging.basicConfig(level=prefs.log_level, handlers=[TextualHandler()])

    app = WasuremonoApp(workspace=root, prefs=prefs)
    app.run()


if __name__ == "__main__":
    main()
