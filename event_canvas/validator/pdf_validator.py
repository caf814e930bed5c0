from dataclasses import dataclass, field
from io import BytesIO
from typing import List, Optional, Tuple, Union

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from event_canvas.config.profiles import BatchProfile
from event_canvas.config.sizes import MM
from event_canvas.design.elements import Design
from event_canvas.renderer.compositor import grid_for


@dataclass
class ValidationIssue:
    level: str  # "error" | "warning" | "info"
    message: str


@dataclass
class ValidationReport:
    ok: bool
    page_count: int
    page_size_pt: Tuple[float, float]
    expected_size_pt: Tuple[float, float]
    issues: List[ValidationIssue] = field(default_factory=list)


def _almost_equal(a: float, b: float, tol: float = 0.5) -> bool:
    return abs(a - b) <= tol


def validate_export(
    pdf: Union[str, bytes],
    design: Design,
    profile: BatchProfile,
    unit_count: Optional[int] = None,
) -> ValidationReport:
    """
    Check an exported batch against the layout it was made with.

    Args:
        pdf: Path to the PDF or its bytes
        design: Design the batch was rendered from
        profile: Batch profile used for the export
        unit_count: Number of subjects exported, when known
    """
    grid = grid_for(design, profile)
    expected_w = grid.page_width * MM
    expected_h = grid.page_height * MM
    issues: List[ValidationIssue] = []

    try:
        reader = PdfReader(BytesIO(pdf) if isinstance(pdf, bytes) else pdf)
    except (PdfReadError, OSError) as e:
        issues.append(ValidationIssue("error", f"Unreadable PDF: {e}"))
        return ValidationReport(False, 0, (0.0, 0.0), (expected_w, expected_h), issues)

    if reader.is_encrypted:
        issues.append(ValidationIssue("error", "PDF is encrypted; printable exports must not be."))

    num_pages = len(reader.pages)
    if num_pages == 0:
        issues.append(ValidationIssue("error", "PDF has no pages."))

    if unit_count is not None:
        expected_pages = grid.page_count(unit_count)
        if num_pages != expected_pages:
            issues.append(
                ValidationIssue(
                    "error",
                    f"Page count {num_pages} does not match {unit_count} unit(s) at "
                    f"{grid.per_page} per page (expected {expected_pages}).",
                )
            )
    issues.append(ValidationIssue("info", f"Layout: {grid.cols} cols x {grid.rows} rows per page"))

    first_size = (0.0, 0.0)
    for i, page in enumerate(reader.pages, start=1):
        w = float(page.mediabox.width)
        h = float(page.mediabox.height)
        if i == 1:
            first_size = (w, h)
        if not (_almost_equal(w, expected_w) and _almost_equal(h, expected_h)):
            issues.append(
                ValidationIssue(
                    "error",
                    f"Page {i} size {w:.2f}x{h:.2f} pt does not match expected ({expected_w:.2f}x{expected_h:.2f} pt).",
                )
            )

    ok = not any(issue.level == "error" for issue in issues)
    return ValidationReport(ok, num_pages, first_size, (expected_w, expected_h), issues)
