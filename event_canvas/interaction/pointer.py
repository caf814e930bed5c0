"""
Pointer event plumbing for the interactive canvas

`PointerSurface` stands in for the document-level event target: gesture
listeners are attached to it for the duration of a drag or resize only.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

POINTER_MOVE = "pointermove"
POINTER_UP = "pointerup"


@dataclass(frozen=True)
class PointerEvent:
    """Pointer position in surface pixels"""
    x: float
    y: float


@dataclass(frozen=True)
class HitTarget:
    """What lies under a pointer position on a rendered frame"""
    kind: str  # "resize" | "element" | "canvas"
    element_id: Optional[str] = None


Listener = Callable[[PointerEvent], None]


class PointerSurface:
    """Event target with a measurable size"""

    def __init__(self, width: float, height: float):
        self.width = float(width)
        self.height = float(height)
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    def resize(self, width: float, height: float) -> None:
        self.width = float(width)
        self.height = float(height)

    def add_listener(self, event_type: str, listener: Listener) -> None:
        self._listeners[event_type].append(listener)

    def remove_listener(self, event_type: str, listener: Listener) -> None:
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def listener_count(self, event_type: Optional[str] = None) -> int:
        if event_type is not None:
            return len(self._listeners.get(event_type, []))
        return sum(len(v) for v in self._listeners.values())

    def dispatch(self, event_type: str, event: PointerEvent) -> int:
        """Deliver an event to current listeners; returns how many received it"""
        listeners = list(self._listeners.get(event_type, []))
        for listener in listeners:
            listener(event)
        return len(listeners)

    def move(self, x: float, y: float) -> int:
        return self.dispatch(POINTER_MOVE, PointerEvent(x, y))

    def release(self, x: float, y: float) -> int:
        return self.dispatch(POINTER_UP, PointerEvent(x, y))
