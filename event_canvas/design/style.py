"""
Style vocabulary for design elements

Colours on elements are symbolic roles resolved against the owning design's
palette when a surface is drawn, so a whole design can be re-themed by
changing the palette alone.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

WHITE = "#ffffff"
MUTED = "#94a3b8"
FALLBACK_RGB = (30, 64, 175)
DEFAULT_FONT_SIZE = 14.0


class ColorRole(str, Enum):
    """Symbolic colour roles an element style may reference"""
    PRIMARY = "primary"
    SECONDARY = "secondary"
    WHITE = "white"
    MUTED = "muted"


@dataclass(frozen=True)
class Palette:
    primary: str = "#1e40af"
    secondary: str = "#059669"
    background: str = WHITE
    text: str = "#1e293b"


def is_hex_color(value: Optional[str]) -> bool:
    return bool(value) and bool(HEX_COLOR.match(value))


def resolve_color(symbol: Optional[str], palette: Palette) -> str:
    """
    Resolve a symbolic colour to a literal hex colour.

    Total: empty, unknown or malformed symbols resolve to the palette's text
    colour (or the built-in fallback when that is malformed too).
    """
    lookup = {
        ColorRole.PRIMARY.value: palette.primary,
        ColorRole.SECONDARY.value: palette.secondary,
        ColorRole.WHITE.value: WHITE,
        ColorRole.MUTED.value: MUTED,
    }
    if symbol in lookup:
        literal = lookup[symbol]
    elif is_hex_color(symbol):
        literal = symbol
    else:
        literal = palette.text
    if not is_hex_color(literal):
        return rgb_to_hex(FALLBACK_RGB)
    return literal.lower()


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    if not is_hex_color(value):
        return FALLBACK_RGB
    digits = value[1:]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def rgb_to_hex(rgb: Tuple[int, int, int]) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def pdf_font_name(font_weight: Optional[str], font_style: Optional[str]) -> str:
    """Pick the standard Helvetica face for a weight/style pair"""
    bold = font_weight == "bold"
    italic = font_style == "italic"
    if bold and italic:
        return "Helvetica-BoldOblique"
    if bold:
        return "Helvetica-Bold"
    if italic:
        return "Helvetica-Oblique"
    return "Helvetica"
