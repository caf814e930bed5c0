"""
Export API endpoints

Render stored designs to print-ready PDFs, one unit or a whole batch.
"""

import logging
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse
from pydantic import BaseModel

from event_canvas.config.profiles import get_profile
from event_canvas.design.elements import DesignKind
from event_canvas.design.subjects import SAMPLE_SUBJECT, EventContext, Subject
from event_canvas.renderer.assets import AssetLoader
from event_canvas.renderer.compositor import (
    BatchCompositor,
    batch_filename,
    preview_filename,
    single_filename,
)
from event_canvas.renderer.document_renderer import DocumentRenderer
from event_canvas.storage.design_store import DesignStore
from web.backend.api.designs import get_store
from web.backend.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


def get_exports_dir() -> Path:
    exports_dir = get_settings().exports_dir
    exports_dir.mkdir(parents=True, exist_ok=True)
    return exports_dir


class BatchExportRequest(BaseModel):
    """Request to export one unit per subject into a single PDF"""
    event: EventContext
    # Raw records; validated by the compositor so a bad one aborts with 422
    subjects: List[dict]
    profile: Optional[str] = None


class SingleExportRequest(BaseModel):
    """Request to export one subject's unit"""
    event: EventContext
    subject: Optional[Subject] = None


class ExportResponse(BaseModel):
    """Response with export status"""
    success: bool
    message: str
    file_name: str = ""
    download_url: str = ""
    unit_count: int = 0


def _write_export(exports_dir: Path, filename: str, pdf: bytes) -> ExportResponse:
    output_path = exports_dir / filename
    output_path.write_bytes(pdf)
    logger.info("Wrote %s (%d bytes)", output_path, len(pdf))
    return ExportResponse(
        success=True,
        message="PDF exported successfully",
        file_name=filename,
        download_url=f"/api/export/download/{filename}",
    )


@router.post("/{kind}/{owner_id}/batch", response_model=ExportResponse)
async def export_batch(
    kind: DesignKind,
    owner_id: str,
    request: BatchExportRequest,
    store: DesignStore = Depends(get_store),
    exports_dir: Path = Depends(get_exports_dir),
):
    """
    Export every subject into one PDF laid out on sheets.

    Credentials are packed on A4 pages; certificates get one page each.
    """
    design = store.load(kind, owner_id)
    try:
        profile = get_profile(request.profile) if request.profile else None
        pdf = await BatchCompositor(DocumentRenderer(AssetLoader())).export(
            design, request.subjects, request.event, profile
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    response = _write_export(exports_dir, batch_filename(design, request.event), pdf)
    response.unit_count = len(request.subjects)
    response.message = f"{len(request.subjects)} unit(s) exported in a single PDF"
    return response


@router.post("/{kind}/{owner_id}/single", response_model=ExportResponse)
async def export_single(
    kind: DesignKind,
    owner_id: str,
    request: SingleExportRequest,
    store: DesignStore = Depends(get_store),
    exports_dir: Path = Depends(get_exports_dir),
):
    """
    Export one unit. Without a subject the sample subject is used and the
    file is named as a preview.
    """
    design = store.load(kind, owner_id)
    subject = request.subject or SAMPLE_SUBJECT
    pdf = await DocumentRenderer(AssetLoader()).render_single(design, subject, request.event)
    filename = single_filename(design, subject) if request.subject else preview_filename(design)
    response = _write_export(exports_dir, filename, pdf)
    response.unit_count = 1
    return response


@router.get("/download/{filename}")
async def download_pdf(filename: str, exports_dir: Path = Depends(get_exports_dir)):
    """
    Download exported PDF.

    Args:
        filename: PDF filename
    """
    file_path = exports_dir / filename
    if Path(filename).name != filename or not file_path.exists():
        raise HTTPException(status_code=404, detail="File not found")

    return FileResponse(
        path=file_path,
        filename=filename,
        media_type="application/pdf",
    )
