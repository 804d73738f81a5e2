"""Drag-to-reorder gesture handling.

One gesture runs ``IDLE -> PRESSED -> DRAGGING -> IDLE``. A press on a
row's handle records the row and the start position. Moving further than
the threshold turns it into a drag. From then on every move re-inserts the
dragged row before or after whichever row sits under the pointer, based on
that row's vertical midpoint. The surface's row order is the only truth
during the gesture; it is read back and committed on release.

Mouse and touch input both arrive as ``PointerEvent``. The controller knows
nothing about widgets; the visual layer implements ``DragSurface``.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from wasuremono.models import DRAG_THRESHOLD

logger = logging.getLogger(__name__)

PRESSED_CLASS = "pressed"
DRAGGING_CLASS = "dragging"


@dataclass(frozen=True)
class PointerEvent:
    """Screen position of a pointer plus whether the primary button is held."""

    x: float
    y: float
    primary_down: bool = True

    @classmethod
    def from_mouse(cls, x: float, y: float, buttons: int) -> PointerEvent:
        """Mouse event; *buttons* is the pressed-buttons bitmask (1 = primary only)."""
        return cls(x=x, y=y, primary_down=buttons == 1)

    @classmethod
    def from_touch(cls, touches: Sequence[tuple[float, float]]) -> PointerEvent:
        """Touch event; the first active touch point drives the gesture."""
        if not touches:
            raise ValueError("Touch event without touch points")
        x, y = touches[0]
        return cls(x=x, y=y, primary_down=True)


class DragSurface(Protocol):
    def row_at(self, x: float, y: float) -> int | None: ...

    def row_span(self, item_id: int) -> tuple[float, float]: ...

    def move_row(self, item_id: int, target_id: int, after: bool) -> None: ...

    def row_order(self) -> list[int]: ...

    def set_row_state(self, item_id: int, state: str, on: bool) -> None: ...


class DragState(enum.Enum):
    IDLE = "idle"
    PRESSED = "pressed"
    DRAGGING = "dragging"


class DragController:
    def __init__(
        self,
        surface: DragSurface,
        on_commit: Callable[[list[int]], None],
        threshold: float = DRAG_THRESHOLD,
    ) -> None:
        self.surface = surface
        self.on_commit = on_commit
        self.threshold = threshold
        self.state = DragState.IDLE
        self.dragged_id: int | None = None
        self.start_y = 0.0

    @property
    def active(self) -> bool:
        return self.state is not DragState.IDLE

    def press(self, item_id: int, event: PointerEvent) -> bool:
        """Start a gesture on *item_id*'s handle. Ignored while one is active."""
        if self.active:
            logger.debug("Ignoring press on %s during an active gesture", item_id)
            return False
        self.state = DragState.PRESSED
        self.dragged_id = item_id
        self.start_y = event.y
        self.surface.set_row_state(item_id, PRESSED_CLASS, True)
        return True

    def move(self, event: PointerEvent) -> bool:
        """Track the pointer. Returns True when the row was re-inserted."""
        if not self.active or not event.primary_down or self.dragged_id is None:
            return False

        if self.state is DragState.PRESSED:
            if abs(event.y - self.start_y) <= self.threshold:
                return False
            self.state = DragState.DRAGGING
            self.surface.set_row_state(self.dragged_id, DRAGGING_CLASS, True)

        target = self.surface.row_at(event.x, event.y)
        if target is None or target == self.dragged_id:
            return False

        top, height = self.surface.row_span(target)
        midpoint = top + height / 2
        self.surface.move_row(self.dragged_id, target, after=event.y >= midpoint)
        return True

    def release(self) -> list[int] | None:
        """End the gesture; commits and returns the visual order if it was a drag."""
        if not self.active or self.dragged_id is None:
            return None

        dragged = self.dragged_id
        order: list[int] | None = None
        if self.state is DragState.DRAGGING:
            self.surface.set_row_state(dragged, DRAGGING_CLASS, False)
            order = self.surface.row_order()
        self.surface.set_row_state(dragged, PRESSED_CLASS, False)
        self._reset()

        if order is not None:
            logger.debug("Committing order %s", order)
            self.on_commit(order)
        return order

    def cancel(self) -> None:
        """Forget the gesture without committing."""
        if self.dragged_id is not None:
            self.surface.set_row_state(self.dragged_id, DRAGGING_CLASS, False)
            self.surface.set_row_state(self.dragged_id, PRESSED_CLASS, False)
        self._reset()

    def _reset(self) -> None:
        self.state = DragState.IDLE
        self.dragged_id = None
        self.start_y = 0.0
