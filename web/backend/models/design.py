"""
API models for the design editor

Request and response bodies wrapped around the engine's design model.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, Optional

from event_canvas.design.elements import AnyDesign, ElementStyle, ElementType


class ElementPatch(BaseModel):
    """Partial update for one element; omitted fields are left unchanged"""
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    enabled: Optional[bool] = None
    locked: Optional[bool] = None
    content: Optional[str] = None
    style: Optional[Dict[str, Any]] = Field(None, description="Style keys to merge")

    class Config:
        json_schema_extra = {
            "example": {"x": 50, "y": 35, "style": {"font_size": 24}}
        }

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ElementCreate(BaseModel):
    """Request to add an element with default geometry"""
    type: ElementType
    content: str = ""
    style: Optional[ElementStyle] = None


class DesignResponse(BaseModel):
    """Response with a single design"""
    success: bool
    message: str
    design: Optional[AnyDesign] = None
