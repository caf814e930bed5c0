"""API models for the design editor"""

from web.backend.models.design import (
    DesignResponse,
    ElementCreate,
    ElementPatch,
)

__all__ = [
    "DesignResponse",
    "ElementCreate",
    "ElementPatch",
]
