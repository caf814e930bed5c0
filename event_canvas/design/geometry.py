"""
Percentage-space geometry

Every position and size in a design is a percentage of the design's own
width/height. These helpers map that space onto a concrete surface.
Elements are positioned by their centre.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class DeviceProfile(str, Enum):
    """Preview surfaces the editor can target"""
    DESKTOP = "desktop"
    MOBILE = "mobile"


@dataclass(frozen=True)
class DeviceCaps:
    max_width: float
    max_height: float
    landscape_max_height: float
    font_scale: float


DEVICE_PROFILES: Dict[DeviceProfile, DeviceCaps] = {
    DeviceProfile.DESKTOP: DeviceCaps(max_width=500, max_height=600, landscape_max_height=600, font_scale=0.8),
    # Mobile caps are orientation-aware
    DeviceProfile.MOBILE: DeviceCaps(max_width=200, max_height=280, landscape_max_height=130, font_scale=0.6),
}


@dataclass(frozen=True)
class Box:
    """Axis-aligned box in absolute surface units, top-left origin"""
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return self.left + self.width / 2.0, self.top + self.height / 2.0

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def percent_to_abs(percent: float, dimension: float) -> float:
    return percent / 100.0 * dimension


def abs_to_percent(value: float, dimension: float) -> float:
    if dimension <= 0:
        return 0.0
    return value / dimension * 100.0


def element_box(x: float, y: float, width: float, height: float, surface_w: float, surface_h: float) -> Box:
    """Convert a centre-positioned percentage rectangle to an absolute box."""
    w = percent_to_abs(width, surface_w)
    h = percent_to_abs(height, surface_h)
    cx = percent_to_abs(x, surface_w)
    cy = percent_to_abs(y, surface_h)
    return Box(left=cx - w / 2.0, top=cy - h / 2.0, width=w, height=h)


def scale_font(base_size: float, device: DeviceProfile) -> float:
    """Font size on a preview surface for a print-space base size"""
    return base_size * DEVICE_PROFILES[DeviceProfile(device)].font_scale


def fit_surface(design_w: float, design_h: float, device: DeviceProfile, landscape: bool) -> Tuple[int, int]:
    """
    Largest pixel size with the design's aspect ratio inside the device caps.

    Args:
        design_w: Physical design width (any unit)
        design_h: Physical design height (same unit)
        device: Target device profile
        landscape: Whether the design is landscape oriented

    Returns:
        (width_px, height_px)
    """
    caps = DEVICE_PROFILES[DeviceProfile(device)]
    max_h = caps.landscape_max_height if landscape else caps.max_height
    if design_w <= 0 or design_h <= 0:
        return int(caps.max_width), int(max_h)
    scale = min(caps.max_width / design_w, max_h / design_h)
    return max(1, int(round(design_w * scale))), max(1, int(round(design_h * scale)))
