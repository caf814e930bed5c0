"""Design model: geometry, styles, elements and templating"""

from event_canvas.design.elements import (
    AnyDesign,
    CanvasElement,
    CertificateDesign,
    CredentialDesign,
    Design,
    DesignKind,
    ElementStyle,
    ElementType,
    parse_design,
)
from event_canvas.design.defaults import default_design, default_elements
from event_canvas.design.document import DesignDocument
from event_canvas.design.style import ColorRole, Palette, resolve_color
from event_canvas.design.subjects import EventContext, Subject, SAMPLE_SUBJECT, subject_variables
from event_canvas.design.templating import substitute

__all__ = [
    "AnyDesign",
    "CanvasElement",
    "CertificateDesign",
    "CredentialDesign",
    "Design",
    "DesignKind",
    "ElementStyle",
    "ElementType",
    "parse_design",
    "default_design",
    "default_elements",
    "DesignDocument",
    "ColorRole",
    "Palette",
    "resolve_color",
    "EventContext",
    "Subject",
    "SAMPLE_SUBJECT",
    "subject_variables",
    "substitute",
]
