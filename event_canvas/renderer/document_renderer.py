"""
Print renderer

Draws one unit (a certificate or credential for one subject) onto a
reportlab canvas. Units are laid out in millimetres with a top-left origin
and flipped onto the PDF's bottom-left coordinate system here.
"""

import io
import logging
from typing import Dict, List, Optional, Tuple

from PIL import Image
from reportlab.lib.colors import HexColor
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase.pdfmetrics import getAscentDescent
from reportlab.pdfgen import canvas

from event_canvas.config.sizes import MM
from event_canvas.design.elements import CanvasElement, Design, ElementType
from event_canvas.design.geometry import Box, element_box
from event_canvas.design.style import DEFAULT_FONT_SIZE, Palette, pdf_font_name, resolve_color
from event_canvas.design.subjects import EventContext, Subject, qr_payload, subject_variables
from event_canvas.design.templating import element_text
from event_canvas.errors import AssetError
from event_canvas.renderer.assets import AssetLoader

logger = logging.getLogger(__name__)

LINE_SPACING = 1.2
RULE_WIDTH_PT = 1.0
PLACEHOLDER_FILL = "#f1f5f9"
QR_PLACEHOLDER_FILL = "#f0f0f0"
LABEL_COLOR = "#64748b"
BORDER_INSET_MM = 5.0


def wrap_text(text: str, font_name: str, font_size: float, max_width: float) -> List[str]:
    """
    Greedy word wrap against a width in points.

    A single word wider than `max_width` stays on its own line.
    """
    if not text:
        return []
    if max_width <= 0:
        return text.splitlines() or [text]
    return simpleSplit(text, font_name, font_size, max_width)


class DocumentRenderer:
    """Renders units onto reportlab canvases"""

    def __init__(self, loader: Optional[AssetLoader] = None):
        self.loader = loader or AssetLoader()

    async def render_unit(
        self,
        c: canvas.Canvas,
        design: Design,
        subject: Subject,
        context: EventContext,
        origin: Tuple[float, float] = (0.0, 0.0),
        page_height: Optional[float] = None,
    ):
        """
        Draw one unit on the current page.

        Args:
            c: Canvas being written
            design: Design (already snapshotted by the caller for batches)
            subject: Person the unit is for
            context: Event name and dates
            origin: Top-left corner of the unit on the page, in mm
            page_height: Page height in mm (defaults to the unit height)
        """
        unit_w, unit_h = design.surface_size
        page_h = page_height if page_height is not None else unit_h
        elements = design.renderable_elements()
        variables = subject_variables(subject, context, design)
        assets = await self._resolve_assets(elements, design, subject, context)

        palette = design.palette
        c.saveState()
        c.translate(origin[0] * MM, (page_h - origin[1] - unit_h) * MM)

        clip = c.beginPath()
        clip.rect(0, 0, unit_w * MM, unit_h * MM)
        c.clipPath(clip, stroke=0, fill=0)

        c.setFillColor(HexColor(resolve_color(design.background_color, palette)))
        c.rect(0, 0, unit_w * MM, unit_h * MM, stroke=0, fill=1)

        if design.show_border:
            self._draw_border(c, design, unit_w, unit_h)

        for element in elements:
            box = element_box(element.x, element.y, element.width, element.height, unit_w, unit_h)
            self._draw_element(c, element, box, unit_h, palette, variables, assets.get(element.id))

        c.restoreState()

    async def render_single(self, design: Design, subject: Subject, context: EventContext) -> bytes:
        """Render one unit as a one-page PDF sized to the unit"""
        unit_w, unit_h = design.surface_size
        buffer = io.BytesIO()
        c = canvas.Canvas(buffer, pagesize=(unit_w * MM, unit_h * MM), invariant=1)
        c.setTitle(subject.name)
        await self.render_unit(c, design, subject, context)
        c.showPage()
        c.save()
        return buffer.getvalue()

    async def _resolve_assets(
        self,
        elements: List[CanvasElement],
        design: Design,
        subject: Subject,
        context: EventContext,
    ) -> Dict[str, Optional[Image.Image]]:
        # Everything slow happens here, before any drawing, one asset at a time
        assets: Dict[str, Optional[Image.Image]] = {}
        for element in elements:
            try:
                if element.type == ElementType.QR:
                    payload = qr_payload(subject, context, design.qr_data_fields)
                    assets[element.id] = await self.loader.qr(payload)
                elif element.type == ElementType.PHOTO and subject.photo:
                    assets[element.id] = await self.loader.image(subject.photo)
                elif element.type == ElementType.LOGO and element.content:
                    assets[element.id] = await self.loader.image(element.content)
            except AssetError as e:
                logger.warning("Unit for %s: %s asset '%s' unavailable: %s", subject.id, element.type.value, element.id, e)
                assets[element.id] = None
        return assets

    def _draw_border(self, c: canvas.Canvas, design: Design, unit_w: float, unit_h: float):
        inset = BORDER_INSET_MM * MM
        w = unit_w * MM - 2 * inset
        h = unit_h * MM - 2 * inset
        if w <= 0 or h <= 0:
            return
        c.saveState()
        c.setStrokeColor(HexColor(resolve_color("primary", design.palette)))
        if design.border_style == "dashed":
            c.setLineWidth(1 * MM)
            c.setDash(5 * MM, 3 * MM)
            c.rect(inset, inset, w, h, stroke=1, fill=0)
        elif design.border_style == "double":
            c.setLineWidth(0.5 * MM)
            c.rect(inset, inset, w, h, stroke=1, fill=0)
            inner = 1.5 * MM
            c.rect(inset + inner, inset + inner, w - 2 * inner, h - 2 * inner, stroke=1, fill=0)
        else:
            c.setLineWidth(1 * MM)
            c.rect(inset, inset, w, h, stroke=1, fill=0)
        c.restoreState()

    def _draw_element(
        self,
        c: canvas.Canvas,
        element: CanvasElement,
        box: Box,
        unit_h: float,
        palette: Palette,
        variables: Dict[str, str],
        asset: Optional[Image.Image],
    ):
        style = element.style
        x = box.left * MM
        y = (unit_h - box.bottom) * MM
        w = box.width * MM
        h = box.height * MM
        radius = float(style.border_radius or 0)

        c.saveState()

        if element.type == ElementType.SHAPE:
            if style.background_color:
                c.setFillColor(HexColor(resolve_color(style.background_color, palette)))
                c.roundRect(x, y, w, h, radius, stroke=0, fill=1)

        elif element.type == ElementType.LINE:
            c.setStrokeColor(HexColor(resolve_color(style.background_color or style.color, palette)))
            c.setLineWidth(RULE_WIDTH_PT)
            c.line(x, y + h / 2.0, x + w, y + h / 2.0)

        elif element.type == ElementType.TEXT:
            self._draw_text(c, element, x, y, w, h, palette, variables)

        elif element.type in (ElementType.LOGO, ElementType.PHOTO):
            if asset is None or not self._draw_image(c, asset, x, y, w, h, element.id):
                self._draw_image_placeholder(c, element, x, y, w, h, palette)

        elif element.type == ElementType.QR:
            if asset is None or not self._draw_image(c, asset, x, y, w, h, element.id):
                c.setFillColor(HexColor(QR_PLACEHOLDER_FILL))
                c.rect(x, y, w, h, stroke=0, fill=1)
                self._draw_label(c, "QR", x, y, w, h)

        else:
            raise ValueError(f"Unknown element type '{element.type}'")

        c.restoreState()

    def _draw_text(self, c: canvas.Canvas, element: CanvasElement, x, y, w, h, palette: Palette, variables):
        style = element.style
        if style.background_color:
            c.setFillColor(HexColor(resolve_color(style.background_color, palette)))
            c.roundRect(x, y, w, h, float(style.border_radius or 0), stroke=0, fill=1)

        text = element_text(element, variables)
        font_name = pdf_font_name(style.font_weight, style.font_style)
        font_size = float(style.font_size or DEFAULT_FONT_SIZE)
        padding = float(style.padding or 0)
        lines = wrap_text(text, font_name, font_size, w - 2 * padding)
        if not lines:
            return

        ascent, descent = getAscentDescent(font_name, font_size)
        leading = font_size * LINE_SPACING
        block_top = y + h / 2.0 + len(lines) * leading / 2.0
        baseline = block_top - (leading - (ascent - descent)) / 2.0 - ascent

        c.setFont(font_name, font_size)
        c.setFillColor(HexColor(resolve_color(style.color, palette)))
        align = style.text_align or "center"
        for line in lines:
            if align == "left":
                c.drawString(x + padding, baseline, line)
            elif align == "right":
                c.drawRightString(x + w - padding, baseline, line)
            else:
                c.drawCentredString(x + w / 2.0, baseline, line)
            baseline -= leading

    def _draw_image(self, c: canvas.Canvas, image: Image.Image, x, y, w, h, element_id: str) -> bool:
        try:
            c.drawImage(
                ImageReader(image), x, y, width=w, height=h,
                preserveAspectRatio=True, anchor="c", mask="auto",
            )
        except (OSError, ValueError) as e:
            logger.warning("Could not draw image for '%s': %s", element_id, e)
            return False
        return True

    def _draw_image_placeholder(self, c: canvas.Canvas, element: CanvasElement, x, y, w, h, palette: Palette):
        radius = float(element.style.border_radius or 0)
        c.setFillColor(HexColor(PLACEHOLDER_FILL))
        c.setStrokeColor(HexColor(resolve_color("secondary", palette)))
        c.setLineWidth(0.5)
        if element.type == ElementType.LOGO:
            c.setDash(3, 2)
        c.roundRect(x, y, w, h, radius, stroke=1, fill=1)
        c.setDash()
        self._draw_label(c, "FOTO" if element.type == ElementType.PHOTO else "Logo", x, y, w, h)

    def _draw_label(self, c: canvas.Canvas, label: str, x, y, w, h):
        size = max(4.0, min(10.0, h * 0.3))
        c.setFont("Helvetica", size)
        c.setFillColor(HexColor(LABEL_COLOR))
        c.drawCentredString(x + w / 2.0, y + h / 2.0 - size / 3.0, label)
