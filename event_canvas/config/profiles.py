from pydantic import BaseModel, Field
from typing import Literal, Dict, Optional

Orientation = Literal["portrait", "landscape"]


class BatchProfile(BaseModel):
    """How rendered units are packed onto printed sheets (millimetres)"""
    page_key: Optional[str] = "a4"  # None: sheet is the unit itself
    page_orientation: Orientation = "portrait"
    margin: float = Field(10.0, ge=0)
    gap: float = Field(5.0, ge=0)
    cut_border: bool = True


CREDENTIAL_A4 = BatchProfile(page_key="a4", page_orientation="portrait", margin=10.0, gap=5.0, cut_border=True)
CERTIFICATE = BatchProfile(page_key=None, margin=0.0, gap=0.0, cut_border=False)

PROFILES: Dict[str, BatchProfile] = {
    "credential_a4": CREDENTIAL_A4,
    "certificate": CERTIFICATE,
}

DEFAULT_PROFILE_FOR_KIND: Dict[str, str] = {
    "credential": "credential_a4",
    "certificate": "certificate",
}


def get_profile(key: str) -> BatchProfile:
    if key not in PROFILES:
        raise ValueError(f"Unknown batch profile '{key}'. Available: {list(PROFILES.keys())}")
    return PROFILES[key]
