# Physical sizes in millimetres. reportlab's `mm` converts them to points.

from reportlab.lib.units import mm

MM = mm

PAGE_SIZES = {
    # ISO 216 A4, portrait
    "a4": {"width": 210.0, "height": 297.0},
    # US Letter and Legal, portrait
    "letter": {"width": 215.9, "height": 279.4},
    "legal": {"width": 215.9, "height": 355.6},
}

CARD_SIZES = {
    # ID-1 / CR80 badge, landscape native
    "cr80": {"width": 85.6, "height": 53.98},
}


def oriented(width: float, height: float, orientation: str):
    """Return (width, height) swapped so the long side follows orientation."""
    short, long_ = sorted((float(width), float(height)))
    if orientation == "landscape":
        return long_, short
    return short, long_


def page_size(key: str, orientation: str = "portrait"):
    if key not in PAGE_SIZES:
        raise ValueError(f"Unknown page key '{key}'. Available: {list(PAGE_SIZES.keys())}")
    conf = PAGE_SIZES[key]
    return oriented(conf["width"], conf["height"], orientation)
