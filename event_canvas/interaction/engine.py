"""
Drag / resize / selection engine

Translates pointer input into element mutations on a `DesignDocument`.
At most one gesture (drag or resize) is active. Move and up listeners live
on the `PointerSurface` only while that gesture lasts.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from event_canvas.design.document import DesignDocument
from event_canvas.design.elements import ElementType
from event_canvas.design.geometry import abs_to_percent, clamp
from event_canvas.interaction.pointer import (
    POINTER_MOVE,
    POINTER_UP,
    HitTarget,
    PointerEvent,
    PointerSurface,
)

logger = logging.getLogger(__name__)

POSITION_RANGE = (0.0, 100.0)
WIDTH_RANGE = (5.0, 100.0)
HEIGHT_RANGE = (3.0, 50.0)


class GestureKind(str, Enum):
    DRAG = "drag"
    RESIZE = "resize"


@dataclass(frozen=True)
class Gesture:
    kind: GestureKind
    element_id: str
    start_x: float
    start_y: float
    # (x, y) for drags, (width, height) for resizes
    orig_a: float
    orig_b: float


class InteractionEngine:
    """Pointer-driven editing of one design document"""

    def __init__(self, document: DesignDocument, surface: PointerSurface, interactive: bool = True):
        self.document = document
        self.surface = surface
        self.interactive = interactive
        self._selected_id: Optional[str] = None
        self._gesture: Optional[Gesture] = None

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def gesture(self) -> Optional[Gesture]:
        return self._gesture

    @property
    def is_dragging(self) -> bool:
        return self._gesture is not None and self._gesture.kind == GestureKind.DRAG

    @property
    def is_resizing(self) -> bool:
        return self._gesture is not None and self._gesture.kind == GestureKind.RESIZE

    @property
    def active_element_id(self) -> Optional[str]:
        return self._gesture.element_id if self._gesture else None

    def select(self, element_id: Optional[str]) -> None:
        if element_id is not None and self.document.get(element_id) is None:
            return
        self._selected_id = element_id

    def clear_selection(self) -> None:
        self._selected_id = None

    def pointer_down(self, element_id: str, x: float, y: float) -> bool:
        """
        Pointer pressed over an element body.

        Selects the element and, unless it is locked, starts a drag.

        Returns:
            True when a drag started
        """
        element = self.document.get(element_id)
        if element is None:
            return False
        self._selected_id = element_id
        if not self.interactive or element.locked or self._gesture is not None:
            return False
        self._begin(Gesture(GestureKind.DRAG, element_id, x, y, element.x, element.y))
        return True

    def resize_start(self, element_id: str, x: float, y: float) -> bool:
        """
        Pointer pressed on the bottom-right resize handle of the selected element.

        Returns:
            True when a resize started
        """
        element = self.document.get(element_id)
        if element is None or self._selected_id != element_id:
            logger.debug("Resize on %s without matching selection ignored", element_id)
            return False
        if not self.interactive or element.locked or element.type == ElementType.LINE:
            return False
        if self._gesture is not None:
            return False
        self._begin(Gesture(GestureKind.RESIZE, element_id, x, y, element.width, element.height))
        return True

    def press(self, target: HitTarget, x: float, y: float) -> bool:
        """Route a pointer-down by what was hit; the resize handle wins over the element body"""
        if target.kind == "resize" and target.element_id:
            return self.resize_start(target.element_id, x, y)
        if target.kind == "element" and target.element_id:
            return self.pointer_down(target.element_id, x, y)
        self.clear_selection()
        return False

    def cancel(self) -> None:
        self._end()

    def _begin(self, gesture: Gesture) -> None:
        self._gesture = gesture
        self.surface.add_listener(POINTER_MOVE, self._on_move)
        self.surface.add_listener(POINTER_UP, self._on_up)

    def _end(self) -> None:
        self._gesture = None
        self.surface.remove_listener(POINTER_MOVE, self._on_move)
        self.surface.remove_listener(POINTER_UP, self._on_up)

    def _on_move(self, event: PointerEvent) -> None:
        gesture = self._gesture
        if gesture is None or self.surface.width <= 0 or self.surface.height <= 0:
            return
        dx = abs_to_percent(event.x - gesture.start_x, self.surface.width)
        dy = abs_to_percent(event.y - gesture.start_y, self.surface.height)

        if gesture.kind == GestureKind.DRAG:
            self.document.apply_patch(
                gesture.element_id,
                x=clamp(gesture.orig_a + dx, *POSITION_RANGE),
                y=clamp(gesture.orig_b + dy, *POSITION_RANGE),
            )
        else:
            self.document.apply_patch(
                gesture.element_id,
                width=clamp(gesture.orig_a + dx, *WIDTH_RANGE),
                height=clamp(gesture.orig_b + dy, *HEIGHT_RANGE),
            )

    def _on_up(self, event: PointerEvent) -> None:
        self._end()
