"""
Design element and design configuration models

An element is one positioned visual primitive. Its `type` is a closed set:
renderers switch on it rather than dispatching through subclasses, because
the preview and print surfaces interpret the same variants differently.
"""

from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator, model_validator

from event_canvas.config.sizes import CARD_SIZES, PAGE_SIZES, oriented
from event_canvas.design.geometry import clamp
from event_canvas.design.style import Palette

Orientation = Literal["portrait", "landscape"]
QrField = Literal["name", "email", "event", "role", "affiliation", "country", "id"]


class ElementType(str, Enum):
    """Types of design elements"""
    TEXT = "text"
    LOGO = "logo"
    PHOTO = "photo"
    QR = "qr"
    LINE = "line"
    SHAPE = "shape"


class DesignKind(str, Enum):
    CERTIFICATE = "certificate"
    CREDENTIAL = "credential"


class ElementStyle(BaseModel):
    """Visual style; colours are symbolic roles or literal hex"""
    font_size: Optional[float] = Field(None, description="Font size in points (print space)")
    font_weight: Optional[Literal["normal", "bold"]] = None
    font_style: Optional[Literal["normal", "italic"]] = None
    text_align: Optional[Literal["left", "center", "right"]] = None
    color: Optional[str] = Field(None, description="primary | secondary | white | muted | #hex")
    background_color: Optional[str] = Field(None, description="primary | secondary | white | muted | #hex")
    border_radius: Optional[float] = None
    padding: Optional[float] = None


class CanvasElement(BaseModel):
    """Single design element (text, logo, photo, qr, line, shape)"""
    id: str = Field(..., description="Unique element ID; list order is z-order")
    type: ElementType = Field(..., description="Element type")
    x: float = Field(..., description="Centre X, percent of design width")
    y: float = Field(..., description="Centre Y, percent of design height")
    width: float = Field(..., description="Width, percent of design width")
    height: float = Field(..., description="Height, percent of design height (ignored for lines)")
    enabled: bool = Field(default=True, description="Disabled elements are never rendered")
    locked: bool = Field(default=False, description="Locked elements cannot be dragged or resized")
    content: str = Field(default="", description="Text with {{key}} placeholders, or an image reference")
    style: ElementStyle = Field(default_factory=ElementStyle)

    class Config:
        json_schema_extra = {
            "example": {
                "id": "participant-name",
                "type": "text",
                "x": 50,
                "y": 30,
                "width": 80,
                "height": 6,
                "enabled": True,
                "locked": False,
                "content": "{{nombre}}",
                "style": {"font_size": 28, "font_weight": "bold", "text_align": "center", "color": "primary"}
            }
        }

    @field_validator("x", "y", "width", "height", mode="before")
    @classmethod
    def _clamp_percent(cls, value):
        # The only place the percentage-space invariant is enforced
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"expected a number, got {value!r}")
        return clamp(number, 0.0, 100.0)


class Design(BaseModel):
    """Configuration and owned element list of one certificate/credential template"""
    kind: DesignKind
    orientation: Orientation = "portrait"
    width: float = Field(..., gt=0, description="Physical width in millimetres")
    height: float = Field(..., gt=0, description="Physical height in millimetres")
    primary_color: str = "#1e40af"
    secondary_color: str = "#059669"
    background_color: str = "#ffffff"
    text_color: str = "#1e293b"
    show_border: bool = False
    border_style: Literal["solid", "double", "dashed"] = "solid"
    qr_data_fields: List[QrField] = Field(default_factory=lambda: ["name", "email", "event"])
    elements: List[CanvasElement] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_ids(self):
        seen = set()
        for element in self.elements:
            if element.id in seen:
                raise ValueError(f"Duplicate element id '{element.id}'")
            seen.add(element.id)
        return self

    @property
    def palette(self) -> Palette:
        return Palette(
            primary=self.primary_color,
            secondary=self.secondary_color,
            background=self.background_color,
            text=self.text_color,
        )

    @property
    def surface_size(self):
        """Physical (width, height) in mm with orientation applied"""
        return oriented(self.width, self.height, self.orientation)

    @property
    def is_landscape(self) -> bool:
        return self.orientation == "landscape"

    def get_element(self, element_id: str) -> Optional[CanvasElement]:
        for element in self.elements:
            if element.id == element_id:
                return element
        return None

    def renderable_elements(self) -> List[CanvasElement]:
        """Enabled elements in z-order"""
        return [e for e in self.elements if e.enabled]


class CertificateDesign(Design):
    kind: Literal["certificate"] = "certificate"
    orientation: Orientation = "landscape"
    format: Literal["a4", "letter", "legal"] = "a4"
    width: float = PAGE_SIZES["a4"]["width"]
    height: float = PAGE_SIZES["a4"]["height"]
    show_border: bool = True
    qr_data_fields: List[QrField] = Field(default_factory=lambda: ["name", "event", "id"])
    certificate_type: Literal["participation", "presentation", "reviewer", "custom"] = "participation"
    title: str = "CERTIFICADO"
    subtitle: str = ""
    header_text: str = "Se certifica que"
    body_template: str = "ha participado en el evento"
    footer_text: str = "Este certificado ha sido generado electrónicamente y es válido sin firma."
    signer_name: str = ""
    signer_title: str = ""

    @model_validator(mode="after")
    def _size_from_format(self):
        # Page format is authoritative for certificates
        self.width = PAGE_SIZES[self.format]["width"]
        self.height = PAGE_SIZES[self.format]["height"]
        return self


# Credential show-flags switch off default elements by id
CREDENTIAL_FLAG_TARGETS: Dict[str, str] = {
    "show_photo": "photo",
    "show_qr": "qr-code",
    "show_role": "role-badge",
    "show_affiliation": "affiliation",
    "show_country": "country",
}


class CredentialDesign(Design):
    kind: Literal["credential"] = "credential"
    orientation: Orientation = "portrait"
    width: float = CARD_SIZES["cr80"]["width"]
    height: float = CARD_SIZES["cr80"]["height"]
    show_photo: bool = True
    show_qr: bool = True
    show_role: bool = True
    show_affiliation: bool = True
    show_country: bool = False
    header_text: str = ""
    footer_text: str = ""

    def renderable_elements(self) -> List[CanvasElement]:
        hidden = {target for flag, target in CREDENTIAL_FLAG_TARGETS.items() if not getattr(self, flag)}
        return [e for e in super().renderable_elements() if e.id not in hidden]


AnyDesign = Annotated[Union[CertificateDesign, CredentialDesign], Field(discriminator="kind")]

_design_adapter = TypeAdapter(AnyDesign)


def parse_design(data) -> Design:
    """Validate a serialized design into its concrete subtype"""
    return _design_adapter.validate_python(data)
