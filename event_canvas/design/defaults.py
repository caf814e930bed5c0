"""
Default element lists per document kind

A fresh design starts from these. Bars are centre-positioned like every
other element, so a full-width header bar sits at x=50. Certificate wording
(title, type line, header, body, footer) is pulled from the design fields
through placeholders, so editing those fields re-words every certificate.
"""

from typing import Any, Dict, List

from event_canvas.design.elements import (
    CanvasElement,
    CertificateDesign,
    CredentialDesign,
    Design,
    DesignKind,
)

DEFAULT_CERTIFICATE_ELEMENTS: List[Dict[str, Any]] = [
    {"id": "header-bar", "type": "shape", "x": 50, "y": 6, "width": 100, "height": 12,
     "style": {"background_color": "primary"}},
    {"id": "title", "type": "text", "x": 50, "y": 5, "width": 80, "height": 6,
     "content": "{{titulo}}",
     "style": {"font_size": 32, "font_weight": "bold", "text_align": "center", "color": "white"}},
    {"id": "subtitle", "type": "text", "x": 50, "y": 10, "width": 60, "height": 3,
     "content": "{{tipo}}",
     "style": {"font_size": 14, "text_align": "center", "color": "white"}},
    {"id": "logo-header", "type": "logo", "x": 10, "y": 20, "width": 15, "height": 10,
     "enabled": False},
    {"id": "header-text", "type": "text", "x": 50, "y": 22, "width": 80, "height": 4,
     "content": "{{encabezado}}",
     "style": {"font_size": 14, "text_align": "center"}},
    {"id": "participant-name", "type": "text", "x": 50, "y": 30, "width": 80, "height": 6,
     "content": "{{nombre}}",
     "style": {"font_size": 28, "font_weight": "bold", "text_align": "center", "color": "primary"}},
    {"id": "body-text", "type": "text", "x": 50, "y": 38, "width": 80, "height": 4,
     "content": "{{cuerpo}}",
     "style": {"font_size": 14, "text_align": "center"}},
    # Empty unless the certificate is for a presentation
    {"id": "work-title", "type": "text", "x": 50, "y": 43, "width": 80, "height": 4,
     "content": "{{titulo_trabajo}}",
     "style": {"font_size": 14, "font_weight": "bold", "font_style": "italic", "text_align": "center",
               "color": "secondary"}},
    {"id": "work-category", "type": "text", "x": 50, "y": 47, "width": 60, "height": 3,
     "content": "{{linea_modalidad}}",
     "style": {"font_size": 11, "text_align": "center"}},
    {"id": "event-name", "type": "text", "x": 50, "y": 52, "width": 80, "height": 6,
     "content": "{{evento}}",
     "style": {"font_size": 20, "font_weight": "bold", "text_align": "center", "color": "primary"}},
    {"id": "event-date", "type": "text", "x": 50, "y": 58, "width": 80, "height": 4,
     "content": "{{fecha}}",
     "style": {"font_size": 12, "text_align": "center", "color": "muted"}},
    {"id": "logo-body", "type": "logo", "x": 50, "y": 65, "width": 20, "height": 12,
     "enabled": False},
    {"id": "signature-line", "type": "line", "x": 50, "y": 75, "width": 30, "height": 1,
     "style": {"background_color": "muted"}},
    {"id": "signer-name", "type": "text", "x": 50, "y": 78, "width": 40, "height": 4,
     "content": "{{firmante}}",
     "style": {"font_size": 12, "font_weight": "bold", "text_align": "center"}},
    {"id": "signer-title", "type": "text", "x": 50, "y": 82, "width": 40, "height": 3,
     "content": "{{cargo}}",
     "style": {"font_size": 10, "text_align": "center", "color": "muted"}},
    {"id": "footer-bar", "type": "shape", "x": 50, "y": 96, "width": 100, "height": 8,
     "style": {"background_color": "primary"}},
    {"id": "footer-text", "type": "text", "x": 50, "y": 96, "width": 90, "height": 3,
     "content": "{{pie}}",
     "style": {"font_size": 9, "text_align": "center", "color": "white"}},
    {"id": "qr-code", "type": "qr", "x": 90, "y": 85, "width": 8, "height": 8,
     "enabled": False},
]

DEFAULT_CREDENTIAL_ELEMENTS: List[Dict[str, Any]] = [
    {"id": "header-bar", "type": "shape", "x": 50, "y": 10, "width": 100, "height": 20,
     "style": {"background_color": "primary"}},
    {"id": "event-name", "type": "text", "x": 50, "y": 10, "width": 90, "height": 15,
     "content": "{{evento}}",
     "style": {"font_size": 10, "font_weight": "bold", "text_align": "center", "color": "white"}},
    {"id": "logo", "type": "logo", "x": 85, "y": 8, "width": 12, "height": 12,
     "enabled": False},
    {"id": "photo", "type": "photo", "x": 50, "y": 38, "width": 35, "height": 28,
     "style": {"border_radius": 4}},
    {"id": "participant-name", "type": "text", "x": 50, "y": 60, "width": 90, "height": 8,
     "content": "{{nombre}}",
     "style": {"font_size": 14, "font_weight": "bold", "text_align": "center"}},
    {"id": "role-badge", "type": "text", "x": 50, "y": 69, "width": 40, "height": 6,
     "content": "{{rol}}",
     "style": {"font_size": 9, "text_align": "center", "color": "white",
               "background_color": "secondary", "border_radius": 4, "padding": 2}},
    {"id": "affiliation", "type": "text", "x": 40, "y": 77, "width": 70, "height": 5,
     "content": "{{afiliacion}}",
     "style": {"font_size": 8, "text_align": "center", "color": "muted"}},
    {"id": "country", "type": "text", "x": 40, "y": 83, "width": 50, "height": 4,
     "content": "{{pais}}", "enabled": False,
     "style": {"font_size": 7, "text_align": "center", "color": "muted"}},
    {"id": "qr-code", "type": "qr", "x": 85, "y": 82, "width": 22, "height": 14},
    {"id": "footer-bar", "type": "shape", "x": 50, "y": 97.5, "width": 100, "height": 5,
     "style": {"background_color": "primary"}},
    {"id": "credential-id", "type": "text", "x": 18, "y": 97.5, "width": 30, "height": 3,
     "content": "{{id}}",
     "style": {"font_size": 6, "text_align": "left", "color": "white"}},
]


def default_elements(kind: DesignKind) -> List[CanvasElement]:
    source = DEFAULT_CERTIFICATE_ELEMENTS if DesignKind(kind) == DesignKind.CERTIFICATE else DEFAULT_CREDENTIAL_ELEMENTS
    return [CanvasElement(**item) for item in source]


def default_design(kind: DesignKind, **overrides) -> Design:
    """
    Build a fresh design for a document kind.

    Args:
        kind: certificate or credential
        **overrides: Design fields to set (palette, flags, ...)

    Returns:
        CertificateDesign or CredentialDesign with the default element list
    """
    kind = DesignKind(kind)
    model = CertificateDesign if kind == DesignKind.CERTIFICATE else CredentialDesign
    overrides.setdefault("elements", default_elements(kind))
    return model(**overrides)
