"""Placeholder substitution for text element content"""

import re
from typing import Mapping

from event_canvas.design.elements import CanvasElement, ElementType

PLACEHOLDER = re.compile(r"\{\{([^{}]+)\}\}")


def substitute(content: str, variables: Mapping[str, object]) -> str:
    """
    Replace every {{key}} with its value.

    Keys are matched exactly (case-sensitive, no trimming). Unknown
    placeholders are left as they are so half-configured designs still
    render something editable.
    """
    if not content:
        return content

    def _replace(match) -> str:
        key = match.group(1)
        if key in variables:
            return str(variables[key])
        return match.group(0)

    return PLACEHOLDER.sub(_replace, content)


def element_text(element: CanvasElement, variables: Mapping[str, object]) -> str:
    """Content as drawn: substituted for text elements, raw otherwise"""
    if element.type == ElementType.TEXT:
        return substitute(element.content, variables)
    return element.content


def placeholders(content: str):
    """Keys referenced by a content string, in order of appearance"""
    return [m.group(1) for m in PLACEHOLDER.finditer(content or "")]
