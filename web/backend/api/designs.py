"""
Design API endpoints

Load, save and edit the certificate/credential design of an owner (an event).
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from event_canvas.design.document import DesignDocument
from event_canvas.design.elements import AnyDesign, DesignKind
from event_canvas.storage.design_store import DesignStore, JsonFileStore
from web.backend.config import get_settings
from web.backend.models.design import DesignResponse, ElementCreate, ElementPatch

router = APIRouter()


def get_store() -> DesignStore:
    """File-backed design store under the configured storage directory"""
    return DesignStore(JsonFileStore(get_settings().storage_dir))


@router.get("/{kind}/{owner_id}", response_model=DesignResponse)
async def get_design(kind: DesignKind, owner_id: str, store: DesignStore = Depends(get_store)):
    """
    Get the design of an owner.

    Returns the default design when none has been saved yet.
    """
    design = store.load(kind, owner_id)
    return DesignResponse(success=True, message="Design retrieved successfully", design=design)


@router.put("/{kind}/{owner_id}", response_model=DesignResponse)
async def save_design(kind: DesignKind, owner_id: str, design: AnyDesign, store: DesignStore = Depends(get_store)):
    """
    Replace the stored design.

    Args:
        kind: certificate or credential
        owner_id: Event the design belongs to
        design: Complete design, elements included
    """
    if design.kind != kind:
        raise HTTPException(status_code=422, detail=f"Design kind '{design.kind}' does not match '{kind.value}'")
    store.save(owner_id, design)
    return DesignResponse(success=True, message="Design saved successfully", design=design)


@router.post("/{kind}/{owner_id}/reset", response_model=DesignResponse)
async def reset_design(kind: DesignKind, owner_id: str, store: DesignStore = Depends(get_store)):
    """Discard the stored design and return the defaults"""
    design = store.reset(kind, owner_id)
    return DesignResponse(success=True, message="Design reset to defaults", design=design)


@router.patch("/{kind}/{owner_id}/elements/{element_id}", response_model=DesignResponse)
async def patch_element(
    kind: DesignKind,
    owner_id: str,
    element_id: str,
    patch: ElementPatch,
    store: DesignStore = Depends(get_store),
):
    """
    Update one element (position, size, content, style or flags).

    Positions and sizes are clamped to 0-100.
    """
    document = DesignDocument(store.load(kind, owner_id))
    try:
        updated = document.apply_patch(element_id, **patch.changes())
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if updated is None:
        raise HTTPException(status_code=404, detail="Element not found")
    design = store.save(owner_id, document.snapshot())
    return DesignResponse(success=True, message="Element updated successfully", design=design)


@router.post("/{kind}/{owner_id}/elements", response_model=DesignResponse)
async def add_element(
    kind: DesignKind,
    owner_id: str,
    request: ElementCreate,
    store: DesignStore = Depends(get_store),
):
    """Add a new element on top of the others"""
    document = DesignDocument(store.load(kind, owner_id))
    overrides = {"style": request.style} if request.style is not None else {}
    document.add_element(request.type, content=request.content, **overrides)
    design = store.save(owner_id, document.snapshot())
    return DesignResponse(success=True, message="Element added successfully", design=design)


@router.delete("/{kind}/{owner_id}/elements/{element_id}", response_model=DesignResponse)
async def delete_element(kind: DesignKind, owner_id: str, element_id: str, store: DesignStore = Depends(get_store)):
    """Remove an element"""
    document = DesignDocument(store.load(kind, owner_id))
    if not document.remove_element(element_id):
        raise HTTPException(status_code=404, detail="Element not found")
    design = store.save(owner_id, document.snapshot())
    return DesignResponse(success=True, message="Element deleted successfully", design=design)
