"""
Interactive preview renderer

Draws a design onto a Pillow image sized for a device profile. The preview
is redrawn in full on every change and never loads photos or encodes QR
codes; those appear as placeholders. Text is drawn on a single line with no
wrapping, unlike the print renderer.
"""

import io
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, List, Mapping, Optional, Set, Tuple

from PIL import Image, ImageDraw, ImageFont

from event_canvas.design.elements import CanvasElement, Design, ElementType
from event_canvas.design.geometry import Box, DeviceProfile, element_box, fit_surface, scale_font
from event_canvas.design.style import DEFAULT_FONT_SIZE, MUTED, Palette, hex_to_rgb, resolve_color
from event_canvas.design.templating import element_text
from event_canvas.errors import AssetError
from event_canvas.interaction.pointer import HitTarget
from event_canvas.renderer.assets import load_image

logger = logging.getLogger(__name__)

SELECTION_COLOR = (59, 130, 246)
PLACEHOLDER_FILL = (241, 245, 249)
QR_PLACEHOLDER_FILL = (229, 231, 235)
LABEL_COLOR = (100, 116, 139)
HANDLE_SIZE = 8
GRID_STEP_PERCENT = 10
GRID_OPACITY = 0.1

FONT_FILES = {
    (False, False): "DejaVuSans.ttf",
    (True, False): "DejaVuSans-Bold.ttf",
    (False, True): "DejaVuSans-Oblique.ttf",
    (True, True): "DejaVuSans-BoldOblique.ttf",
}


@lru_cache(maxsize=64)
def _font(size_px: int, bold: bool = False, italic: bool = False):
    size_px = max(1, size_px)
    try:
        return ImageFont.truetype(FONT_FILES[(bold, italic)], size_px)
    except OSError:
        return ImageFont.load_default(size=size_px)


def _blend(color: Tuple[int, int, int], over: Tuple[int, int, int], alpha: float) -> Tuple[int, int, int]:
    return tuple(int(round(o * alpha + c * (1 - alpha))) for c, o in zip(color, over))


def _dashed_rect(draw: ImageDraw.ImageDraw, box: Box, color, dash: int = 4, gap: int = 3, width: int = 1):
    step = dash + gap
    x0, y0, x1, y1 = box.left, box.top, box.right, box.bottom
    x = x0
    while x < x1:
        xe = min(x + dash, x1)
        draw.line([(x, y0), (xe, y0)], fill=color, width=width)
        draw.line([(x, y1), (xe, y1)], fill=color, width=width)
        x += step
    y = y0
    while y < y1:
        ye = min(y + dash, y1)
        draw.line([(x0, y), (x0, ye)], fill=color, width=width)
        draw.line([(x1, y), (x1, ye)], fill=color, width=width)
        y += step


def _rect(box: Box) -> List[float]:
    return [box.left, box.top, box.right, box.bottom]


@dataclass
class PreviewFrame:
    """One full redraw of the preview surface"""
    image: Image.Image
    device: DeviceProfile
    boxes: Dict[str, Box] = field(default_factory=dict)
    handles: Dict[str, Box] = field(default_factory=dict)
    draw_order: List[str] = field(default_factory=list)
    selected_id: Optional[str] = None
    transition_suppressed: Set[str] = field(default_factory=set)

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    def hit_test(self, x: float, y: float) -> HitTarget:
        """Topmost thing under (x, y); resize handles win over element bodies"""
        for element_id, handle in self.handles.items():
            if handle.contains(x, y):
                return HitTarget("resize", element_id)
        for element_id in reversed(self.draw_order):
            if self.boxes[element_id].contains(x, y):
                return HitTarget("element", element_id)
        return HitTarget("canvas")

    def outline_transition(self, element_id: str) -> bool:
        """Whether the selection outline animates; off while the element is being moved"""
        return element_id not in self.transition_suppressed

    def to_png(self) -> bytes:
        buf = io.BytesIO()
        self.image.save(buf, format="PNG")
        buf.seek(0)
        return buf.getvalue()


class PreviewRenderer:
    """Renders designs onto an on-screen raster surface"""

    def __init__(self, device: DeviceProfile = DeviceProfile.DESKTOP, interactive: bool = True):
        self.device = DeviceProfile(device)
        self.interactive = interactive

    def surface_size(self, design: Design) -> Tuple[int, int]:
        width_mm, height_mm = design.surface_size
        return fit_surface(width_mm, height_mm, self.device, design.is_landscape)

    def render(
        self,
        design: Design,
        variables: Optional[Mapping[str, object]] = None,
        selected_id: Optional[str] = None,
        active_id: Optional[str] = None,
    ) -> PreviewFrame:
        """
        Draw every enabled element of a design.

        Args:
            design: Design to draw
            variables: Sample placeholder values for text elements
            selected_id: Element to outline
            active_id: Element under an active drag/resize

        Returns:
            PreviewFrame with the image and hit-testing geometry
        """
        variables = variables or {}
        palette = design.palette
        width, height = self.surface_size(design)
        background = hex_to_rgb(resolve_color(design.background_color, palette))

        image = Image.new("RGB", (width, height), background)
        draw = ImageDraw.Draw(image)
        frame = PreviewFrame(image=image, device=self.device, selected_id=selected_id)
        if active_id:
            frame.transition_suppressed.add(active_id)

        if self.interactive:
            self._draw_grid(draw, width, height, background)

        elements = design.renderable_elements()
        # The selected element is lifted above the others while selected
        ordered = [e for e in elements if e.id != selected_id] + [e for e in elements if e.id == selected_id]

        for element in ordered:
            box = element_box(element.x, element.y, element.width, element.height, width, height)
            frame.boxes[element.id] = box
            frame.draw_order.append(element.id)
            self._draw_element(image, draw, element, box, palette, variables)

        selected = design.get_element(selected_id) if selected_id else None
        if selected is not None and selected.id in frame.boxes:
            self._draw_selection(draw, selected, frame)

        return frame

    def render_engine_state(self, engine, variables: Optional[Mapping[str, object]] = None) -> PreviewFrame:
        """Render the document an InteractionEngine edits, with its selection state"""
        return self.render(
            engine.document.design,
            variables=variables,
            selected_id=engine.selected_id,
            active_id=engine.active_element_id,
        )

    def _draw_grid(self, draw: ImageDraw.ImageDraw, width: int, height: int, background):
        color = _blend(background, hex_to_rgb(MUTED), GRID_OPACITY)
        for step in range(GRID_STEP_PERCENT, 100, GRID_STEP_PERCENT):
            x = width * step / 100.0
            y = height * step / 100.0
            draw.line([(x, 0), (x, height)], fill=color, width=1)
            draw.line([(0, y), (width, y)], fill=color, width=1)

    def _draw_element(self, image, draw, element: CanvasElement, box: Box, palette: Palette, variables):
        style = element.style
        radius = int(style.border_radius or 0)

        if element.type == ElementType.SHAPE:
            if style.background_color:
                fill = hex_to_rgb(resolve_color(style.background_color, palette))
                draw.rounded_rectangle(_rect(box), radius=radius, fill=fill)

        elif element.type == ElementType.LINE:
            color = hex_to_rgb(resolve_color(style.background_color or style.color, palette))
            cy = box.top + box.height / 2.0
            draw.line([(box.left, cy), (box.right, cy)], fill=color, width=1)

        elif element.type == ElementType.TEXT:
            self._draw_text(draw, element, box, palette, variables)

        elif element.type == ElementType.LOGO:
            self._draw_logo(image, draw, element, box)

        elif element.type == ElementType.PHOTO:
            border = hex_to_rgb(resolve_color("secondary", palette))
            draw.rounded_rectangle(_rect(box), radius=radius, fill=PLACEHOLDER_FILL)
            _dashed_rect(draw, box, border, width=2)
            self._draw_label(draw, box, "FOTO")

        elif element.type == ElementType.QR:
            draw.rectangle(_rect(box), fill=(255, 255, 255), outline=(226, 232, 240))
            inner = Box(
                left=box.left + box.width * 0.1,
                top=box.top + box.height * 0.1,
                width=box.width * 0.8,
                height=box.height * 0.8,
            )
            draw.rounded_rectangle(_rect(inner), radius=2, fill=QR_PLACEHOLDER_FILL)
            self._draw_label(draw, inner, "QR")

        else:
            raise ValueError(f"Unknown element type '{element.type}'")

    def _draw_text(self, draw, element: CanvasElement, box: Box, palette: Palette, variables):
        style = element.style
        if style.background_color:
            fill = hex_to_rgb(resolve_color(style.background_color, palette))
            draw.rounded_rectangle(_rect(box), radius=int(style.border_radius or 0), fill=fill)

        text = element_text(element, variables)
        if not text:
            return
        text = " ".join(text.splitlines())
        size = scale_font(style.font_size or DEFAULT_FONT_SIZE, self.device)
        font = _font(int(round(size)), style.font_weight == "bold", style.font_style == "italic")
        color = hex_to_rgb(resolve_color(style.color, palette))
        padding = float(style.padding or 0)
        cy = box.top + box.height / 2.0

        align = style.text_align or "center"
        if align == "left":
            draw.text((box.left + padding, cy), text, font=font, fill=color, anchor="lm")
        elif align == "right":
            draw.text((box.right - padding, cy), text, font=font, fill=color, anchor="rm")
        else:
            draw.text((box.left + box.width / 2.0, cy), text, font=font, fill=color, anchor="mm")

    def _draw_logo(self, image: Image.Image, draw, element: CanvasElement, box: Box):
        if element.content:
            try:
                logo = load_image(element.content)
            except AssetError as e:
                logger.warning("Preview logo for %s unavailable: %s", element.id, e)
            else:
                target = (max(1, int(box.width)), max(1, int(box.height)))
                logo = logo.copy()
                logo.thumbnail(target)
                left = int(box.left + (box.width - logo.width) / 2.0)
                top = int(box.top + (box.height - logo.height) / 2.0)
                image.paste(logo, (left, top), logo)
                return
        _dashed_rect(draw, box, _blend((255, 255, 255), LABEL_COLOR, 0.3), width=2)
        self._draw_label(draw, box, "Logo")

    def _draw_label(self, draw, box: Box, label: str):
        size = max(6, int(min(12, box.height * 0.4)))
        cx, cy = box.center
        draw.text((cx, cy), label, font=_font(size), fill=LABEL_COLOR, anchor="mm")

    def _draw_selection(self, draw, element: CanvasElement, frame: PreviewFrame):
        box = frame.boxes[element.id]
        offset = 2
        draw.rectangle(
            [box.left - offset, box.top - offset, box.right + offset, box.bottom + offset],
            outline=SELECTION_COLOR,
            width=2,
        )
        if not self.interactive or element.locked:
            return
        half = HANDLE_SIZE / 2.0
        # Move indicator, top-left
        draw.ellipse([box.left - half, box.top - half, box.left + half, box.top + half], fill=SELECTION_COLOR)
        if element.type != ElementType.LINE:
            handle = Box(left=box.right - half, top=box.bottom - half, width=HANDLE_SIZE, height=HANDLE_SIZE)
            draw.ellipse(_rect(handle), fill=SELECTION_COLOR)
            frame.handles[element.id] = handle
