"""
Preview API endpoints

Raster previews of a stored design, filled with sample subject data.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from event_canvas.design.elements import DesignKind
from event_canvas.design.geometry import DeviceProfile
from event_canvas.design.subjects import SAMPLE_SUBJECT, EventContext, subject_variables
from event_canvas.renderer.preview_renderer import PreviewRenderer
from event_canvas.storage.design_store import DesignStore
from web.backend.api.designs import get_store

router = APIRouter()


@router.get("/{kind}/{owner_id}.png")
async def preview_png(
    kind: DesignKind,
    owner_id: str,
    device: DeviceProfile = DeviceProfile.DESKTOP,
    event_name: str = "Congreso Internacional",
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    selected: Optional[str] = None,
    interactive: bool = False,
    store: DesignStore = Depends(get_store),
):
    """
    Render the stored design as PNG.

    Args:
        device: desktop or mobile surface caps
        event_name: Event name used for `{{evento}}`
        selected: Element id to outline
        interactive: Draw the editing grid and handles
    """
    design = store.load(kind, owner_id)
    context = EventContext(event_name=event_name, start_date=start_date, end_date=end_date)
    variables = subject_variables(SAMPLE_SUBJECT, context, design)
    frame = PreviewRenderer(device, interactive=interactive).render(design, variables, selected_id=selected)
    return Response(content=frame.to_png(), media_type="image/png")
