"""Helpers backing the elements side panel"""

from typing import Dict, List

from event_canvas.design.document import DesignDocument
from event_canvas.design.elements import CanvasElement
from event_canvas.design.geometry import clamp
from event_canvas.design.style import DEFAULT_FONT_SIZE

FONT_SIZE_RANGE = (6.0, 48.0)

ELEMENT_LABELS: Dict[str, str] = {
    "header-bar": "Barra de Encabezado",
    "title": "Título",
    "subtitle": "Subtítulo",
    "logo-header": "Logo (Encabezado)",
    "logo-body": "Logo (Cuerpo)",
    "logo": "Logo",
    "header-text": "Texto de Encabezado",
    "participant-name": "Nombre del Participante",
    "body-text": "Texto del Cuerpo",
    "work-title": "Título del Trabajo",
    "work-category": "Modalidad",
    "event-name": "Nombre del Evento",
    "event-date": "Fecha del Evento",
    "signature-line": "Línea de Firma",
    "signer-name": "Nombre del Firmante",
    "signer-title": "Cargo del Firmante",
    "footer-bar": "Barra de Pie",
    "footer-text": "Texto de Pie",
    "qr-code": "Código QR",
    "photo": "Foto del Participante",
    "role-badge": "Rol/Categoría",
    "affiliation": "Afiliación",
    "country": "País",
    "credential-id": "ID de Credencial",
}


def element_label(element: CanvasElement) -> str:
    return ELEMENT_LABELS.get(element.id, element.id)


def group_elements(elements: List[CanvasElement]) -> Dict[str, List[CanvasElement]]:
    """Split elements into header/body/footer bands by vertical position"""
    return {
        "header": [e for e in elements if e.y < 25],
        "body": [e for e in elements if 25 <= e.y < 75],
        "footer": [e for e in elements if e.y >= 75],
    }


def set_font_size(document: DesignDocument, element_id: str, size: float):
    return document.apply_patch(element_id, style={"font_size": clamp(float(size), *FONT_SIZE_RANGE)})
