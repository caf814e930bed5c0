"""
Subjects and the variables they contribute to a rendered unit

A subject is the person a certificate or credential is rendered for.
"""

import json
from datetime import date
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError

from event_canvas.design.elements import CertificateDesign, Design
from event_canvas.errors import SubjectValidationError

REQUIRED_SUBJECT_FIELDS = ("name", "email", "role", "affiliation", "country", "id")

ROLE_LABELS: Dict[str, str] = {
    "USER": "Participante",
    "REVIEWER": "Revisor",
    "COMMITTEE": "Comité",
    "ADMIN": "Organizador",
}

CERTIFICATE_TYPE_LABELS: Dict[str, str] = {
    "participation": "DE PARTICIPACIÓN",
    "presentation": "DE PRESENTACIÓN",
    "reviewer": "DE REVISOR CIENTÍFICO",
}

# Body line per certificate type; participation and custom use the design's body_template
CERTIFICATE_BODY_TEXT: Dict[str, str] = {
    "presentation": "ha presentado el trabajo titulado",
    "reviewer": "ha participado como Revisor Científico en el evento",
}

SPANISH_MONTHS = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)


class Subject(BaseModel):
    """Person a unit is rendered for"""
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    email: str
    role: str
    affiliation: str
    country: str
    photo: Optional[str] = Field(None, description="Image reference for the photo element")
    abstract_title: Optional[str] = None
    category: Optional[str] = None


class EventContext(BaseModel):
    """Event the subjects belong to"""
    event_name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None


SAMPLE_SUBJECT = Subject(
    id="preview",
    name="Dr. Juan Pérez García",
    email="juan@example.com",
    role="USER",
    affiliation="Universidad de Madrid",
    country="España",
)


def format_date_es(value: date) -> str:
    return f"{value.day} de {SPANISH_MONTHS[value.month - 1]} de {value.year}"


def format_event_dates(context: EventContext) -> str:
    if context.start_date and context.end_date and context.end_date != context.start_date:
        return f"{format_date_es(context.start_date)} al {format_date_es(context.end_date)}"
    if context.start_date:
        return format_date_es(context.start_date)
    return ""


def role_label(role: str) -> str:
    return ROLE_LABELS.get(role, role)


def credential_id(subject: Subject) -> str:
    return f"ID-{subject.id[:8].upper()}"


def subject_variables(subject: Subject, context: EventContext, design: Optional[Design] = None) -> Dict[str, str]:
    """
    Placeholder values for one subject.

    Args:
        subject: Person being rendered
        context: Event name and dates
        design: Owning design; certificates contribute their title, body and signer text

    Returns:
        Mapping of placeholder key to text
    """
    variables = {
        "nombre": subject.name,
        "email": subject.email,
        "evento": context.event_name,
        "fecha": format_event_dates(context),
        "rol": role_label(subject.role),
        "afiliacion": subject.affiliation,
        "pais": subject.country,
        "id": credential_id(subject),
        "titulo_trabajo": subject.abstract_title or "",
        "modalidad": subject.category or "",
    }
    if isinstance(design, CertificateDesign):
        variables.update(certificate_variables(design, subject))
    return variables


def certificate_variables(design: CertificateDesign, subject: Subject) -> Dict[str, str]:
    """
    Text a certificate design contributes: title, type line, header, body,
    footer and signer. Work title and modality only print on presentation
    certificates.
    """
    presentation = design.certificate_type == "presentation"
    return {
        "titulo": design.title,
        "tipo": CERTIFICATE_TYPE_LABELS.get(design.certificate_type, design.subtitle or "ESPECIAL"),
        "encabezado": design.header_text,
        "cuerpo": CERTIFICATE_BODY_TEXT.get(design.certificate_type, design.body_template),
        "pie": design.footer_text,
        "firmante": design.signer_name,
        "cargo": design.signer_title,
        "titulo_trabajo": (subject.abstract_title or "") if presentation else "",
        "linea_modalidad": f"Modalidad: {subject.category}" if presentation and subject.category else "",
    }


def qr_payload(subject: Subject, context: EventContext, fields: Sequence[str]) -> str:
    """Compact JSON of exactly the selected subject attributes, in field order"""
    values = {
        "name": subject.name,
        "email": subject.email,
        "event": context.event_name,
        "role": subject.role,
        "affiliation": subject.affiliation,
        "country": subject.country,
        "id": subject.id,
    }
    payload = {field: values[field] for field in fields if field in values}
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def validate_subjects(records: Sequence[object]) -> List[Subject]:
    """
    Coerce raw subject records, failing on the first incomplete one.

    Raises:
        SubjectValidationError: a record lacks a required field
    """
    subjects: List[Subject] = []
    for index, record in enumerate(records):
        if isinstance(record, Subject):
            subjects.append(record)
            continue
        try:
            subjects.append(Subject.model_validate(record))
        except ValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
            raise SubjectValidationError(
                f"Subject #{index} is missing or has invalid fields: {', '.join(fields)}",
                index=index,
                fields=fields,
            ) from e
    return subjects
