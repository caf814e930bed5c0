"""
Editable design document

Owns a design's element list. Every mutation (drag engine, property panel,
add/remove) goes through `apply_patch`, so the percentage-space clamping in
`CanvasElement` is applied on every edit.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from event_canvas.design.elements import CanvasElement, Design, ElementStyle, ElementType

logger = logging.getLogger(__name__)

PATCHABLE_FIELDS = {"x", "y", "width", "height", "enabled", "locked", "content", "style"}

# Starting geometry for newly added elements
NEW_ELEMENT_GEOMETRY: Dict[ElementType, Dict[str, float]] = {
    ElementType.TEXT: {"x": 50, "y": 50, "width": 60, "height": 6},
    ElementType.LOGO: {"x": 50, "y": 50, "width": 15, "height": 10},
    ElementType.PHOTO: {"x": 50, "y": 50, "width": 25, "height": 25},
    ElementType.QR: {"x": 50, "y": 50, "width": 12, "height": 12},
    ElementType.LINE: {"x": 50, "y": 50, "width": 30, "height": 1},
    ElementType.SHAPE: {"x": 50, "y": 50, "width": 30, "height": 10},
}


class DesignDocument:
    """In-memory design being edited"""

    def __init__(self, design: Design):
        self._design = design.model_copy(deep=True)
        # Ids handed out during this session; never reissued even after removal
        self._issued = {e.id for e in self._design.elements}
        self._listeners: List[Callable[[str, Dict[str, Any]], None]] = []

    @property
    def design(self) -> Design:
        return self._design

    @property
    def elements(self) -> List[CanvasElement]:
        return list(self._design.elements)

    def get(self, element_id: str) -> Optional[CanvasElement]:
        return self._design.get_element(element_id)

    def subscribe(self, callback: Callable[[str, Dict[str, Any]], None]) -> Callable[[], None]:
        """Register a change callback; returns an unsubscribe function"""
        self._listeners.append(callback)

        def _unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return _unsubscribe

    def apply_patch(self, element_id: str, **partial) -> Optional[CanvasElement]:
        """
        Update fields of one element.

        Args:
            element_id: Element to update
            **partial: Any of x, y, width, height, enabled, locked, content, style.
                `style` may be a dict and is merged into the current style.

        Returns:
            The updated element, or None when the id is unknown
        """
        change = dict(partial)
        unknown = set(partial) - PATCHABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot patch fields: {sorted(unknown)}")

        for index, element in enumerate(self._design.elements):
            if element.id != element_id:
                continue
            data = element.model_dump()
            if "style" in partial:
                style = partial.pop("style")
                if isinstance(style, ElementStyle):
                    style = style.model_dump(exclude_unset=True)
                data["style"] = {**data["style"], **(style or {})}
            data.update(partial)
            updated = CanvasElement.model_validate(data)
            self._design.elements[index] = updated
            self._notify(element_id, change)
            return updated

        logger.debug("Patch for unknown element %s ignored", element_id)
        return None

    def toggle_enabled(self, element_id: str) -> Optional[CanvasElement]:
        element = self.get(element_id)
        if element is None:
            return None
        return self.apply_patch(element_id, enabled=not element.enabled)

    def toggle_locked(self, element_id: str) -> Optional[CanvasElement]:
        element = self.get(element_id)
        if element is None:
            return None
        return self.apply_patch(element_id, locked=not element.locked)

    def add_element(self, element_type: ElementType, content: str = "", **overrides) -> CanvasElement:
        """Append a new element on top of the z-order with a fresh id"""
        element_type = ElementType(element_type)
        data: Dict[str, Any] = {
            "id": self._next_id(element_type),
            "type": element_type,
            "content": content,
            **NEW_ELEMENT_GEOMETRY[element_type],
        }
        overrides.pop("id", None)
        data.update(overrides)
        element = CanvasElement.model_validate(data)
        self._design.elements.append(element)
        self._notify(element.id, {"added": True})
        return element

    def remove_element(self, element_id: str) -> bool:
        for index, element in enumerate(self._design.elements):
            if element.id == element_id:
                del self._design.elements[index]
                self._notify(element_id, {"removed": True})
                return True
        return False

    def snapshot(self) -> Design:
        """Independent copy for an export pass"""
        return self._design.model_copy(deep=True)

    def _next_id(self, element_type: ElementType) -> str:
        n = 1
        while f"{element_type.value}-{n}" in self._issued:
            n += 1
        new_id = f"{element_type.value}-{n}"
        self._issued.add(new_id)
        return new_id

    def _notify(self, element_id: str, change: Dict[str, Any]) -> None:
        for callback in list(self._listeners):
            callback(element_id, change)
