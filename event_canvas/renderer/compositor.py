"""
Batch compositor

Packs one rendered unit per subject into a grid on fixed-size pages and
serializes the result as a single PDF.
"""

import io
import logging
import math
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from reportlab.lib.colors import HexColor
from reportlab.pdfgen import canvas

from event_canvas.config.profiles import DEFAULT_PROFILE_FOR_KIND, BatchProfile, get_profile
from event_canvas.config.sizes import MM, page_size
from event_canvas.design.elements import CertificateDesign, Design
from event_canvas.design.subjects import EventContext, Subject, validate_subjects
from event_canvas.errors import ConfigurationError, LayoutConfigurationError
from event_canvas.renderer.assets import AssetLoader
from event_canvas.renderer.document_renderer import DocumentRenderer

logger = logging.getLogger(__name__)

CUT_BORDER_COLOR = "#c8c8c8"
CUT_BORDER_WIDTH_MM = 0.3


@dataclass(frozen=True)
class Placement:
    """Where subject `index` lands; x/y are the unit's top-left corner in mm"""
    index: int
    page: int
    slot: int
    col: int
    row: int
    x: float
    y: float


@dataclass(frozen=True)
class PageGrid:
    page_width: float
    page_height: float
    unit_width: float
    unit_height: float
    margin: float
    gap: float
    cols: int
    rows: int

    @property
    def per_page(self) -> int:
        return self.cols * self.rows

    def place(self, index: int) -> Placement:
        page, slot = divmod(index, self.per_page)
        row, col = divmod(slot, self.cols)
        return Placement(
            index=index,
            page=page,
            slot=slot,
            col=col,
            row=row,
            x=self.margin + col * (self.unit_width + self.gap),
            y=self.margin + row * (self.unit_height + self.gap),
        )

    def page_count(self, count: int) -> int:
        return math.ceil(count / self.per_page) if count > 0 else 0


def compute_grid(
    page_width: float,
    page_height: float,
    unit_width: float,
    unit_height: float,
    margin: float,
    gap: float,
) -> PageGrid:
    """
    Fit as many units as possible on a page.

    Raises:
        LayoutConfigurationError: not a single unit fits
    """
    if unit_width <= 0 or unit_height <= 0 or margin < 0 or gap < 0:
        raise LayoutConfigurationError(
            f"Invalid layout: unit {unit_width}x{unit_height} mm, margin {margin}, gap {gap} "
            "(unit sizes must be positive, margin and gap not negative)"
        )
    cols = max(0, math.floor((page_width - 2 * margin + gap) / (unit_width + gap)))
    rows = max(0, math.floor((page_height - 2 * margin + gap) / (unit_height + gap)))
    if cols * rows < 1:
        raise LayoutConfigurationError(
            f"A {unit_width}x{unit_height} mm unit does not fit a {page_width}x{page_height} mm page "
            f"with margin {margin} and gap {gap} ({cols} cols x {rows} rows)",
            cols=cols,
            rows=rows,
        )
    return PageGrid(page_width, page_height, unit_width, unit_height, margin, gap, cols, rows)


def grid_for(design: Design, profile: BatchProfile) -> PageGrid:
    unit_w, unit_h = design.surface_size
    if profile.page_key is None:
        page_w, page_h = unit_w, unit_h
    else:
        page_w, page_h = page_size(profile.page_key, profile.page_orientation)
    return compute_grid(page_w, page_h, unit_w, unit_h, profile.margin, profile.gap)


def _slug(value: str) -> str:
    return re.sub(r"[\s/\\]+", "_", value.strip())


def batch_filename(design: Design, context: EventContext) -> str:
    if isinstance(design, CertificateDesign):
        return f"Certificados_{_slug(context.event_name)}_{design.certificate_type}.pdf"
    return f"Credenciales_{_slug(context.event_name)}.pdf"


def single_filename(design: Design, subject: Subject) -> str:
    if isinstance(design, CertificateDesign):
        return f"Certificado_{_slug(subject.name)}_{design.certificate_type}.pdf"
    return f"Credencial_{_slug(subject.name)}.pdf"


def preview_filename(design: Design) -> str:
    """Name of a sample-subject export"""
    if isinstance(design, CertificateDesign):
        return "Certificado_Vista_Previa.pdf"
    return "Credencial_Vista_Previa.pdf"


class BatchCompositor:
    """Lays out many units on printed sheets"""

    def __init__(self, renderer: Optional[DocumentRenderer] = None):
        self.renderer = renderer

    async def export(
        self,
        design: Design,
        subjects: Sequence[object],
        context: EventContext,
        profile: Optional[BatchProfile] = None,
    ) -> bytes:
        """
        Render every subject into one PDF.

        Subjects are validated and the page grid computed before anything is
        drawn, so configuration problems abort the export with no output.

        Args:
            design: Design to render
            subjects: Subject models or raw records
            context: Event name and dates
            profile: Page layout; defaults to the profile for the design kind

        Returns:
            PDF bytes

        Raises:
            SubjectValidationError: a subject lacks required fields
            LayoutConfigurationError: no unit fits on a page
            ConfigurationError: the subject list is empty
        """
        profile = profile or get_profile(DEFAULT_PROFILE_FOR_KIND[design.kind])
        validated = validate_subjects(subjects)
        if not validated:
            raise ConfigurationError("No subjects selected for export")
        snapshot = design.model_copy(deep=True)
        grid = grid_for(snapshot, profile)

        renderer = self.renderer or DocumentRenderer(AssetLoader())
        buffer = io.BytesIO()
        c = canvas.Canvas(buffer, pagesize=(grid.page_width * MM, grid.page_height * MM), invariant=1)
        c.setTitle(context.event_name)

        logger.info(
            "Exporting %d %s unit(s) at %d per page (%dx%d)",
            len(validated), snapshot.kind, grid.per_page, grid.cols, grid.rows,
        )

        for index, subject in enumerate(validated):
            placement = grid.place(index)
            if placement.slot == 0 and index > 0:
                c.showPage()
            await renderer.render_unit(
                c, snapshot, subject, context,
                origin=(placement.x, placement.y),
                page_height=grid.page_height,
            )
            if profile.cut_border:
                self._draw_cut_border(c, grid, placement)

        c.showPage()
        c.save()
        return buffer.getvalue()

    def _draw_cut_border(self, c: canvas.Canvas, grid: PageGrid, placement: Placement):
        c.saveState()
        c.setStrokeColor(HexColor(CUT_BORDER_COLOR))
        c.setLineWidth(CUT_BORDER_WIDTH_MM * MM)
        c.rect(
            placement.x * MM,
            (grid.page_height - placement.y - grid.unit_height) * MM,
            grid.unit_width * MM,
            grid.unit_height * MM,
            stroke=1,
            fill=0,
        )
        c.restoreState()


def placements(grid: PageGrid, count: int) -> List[Placement]:
    return [grid.place(i) for i in range(count)]
