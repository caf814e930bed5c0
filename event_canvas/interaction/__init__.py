"""Pointer interaction for the design canvas"""

from event_canvas.interaction.engine import InteractionEngine, Gesture, GestureKind
from event_canvas.interaction.pointer import HitTarget, PointerEvent, PointerSurface

__all__ = [
    "InteractionEngine",
    "Gesture",
    "GestureKind",
    "HitTarget",
    "PointerEvent",
    "PointerSurface",
]
