"""Item routes for managing checklist items."""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Field, SQLModel

from packwise.checklist.vault import Vault, get_vault
from packwise.models import Item, UndoCapsule

router = APIRouter(prefix="/sessions/{session_id}", tags=["items"])


class ItemCreate(SQLModel):
    name: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)
    is_critical: bool = False
    note: str | None = None


class ItemUpdate(SQLModel):
    name: str | None = None
    quantity: int | None = Field(default=None, ge=1)
    note: str | None = None
    target_section_id: UUID | None = None


def _progress(vault: Vault, session_id: UUID) -> dict:
    session = vault.get_session(session_id)
    return session.progress.model_dump()


@router.post("/sections/{section_id}/items", response_model=Item, status_code=201)
async def create_item(
    session_id: UUID,
    section_id: UUID,
    body: ItemCreate,
    vault: Vault = Depends(get_vault),
):
    """
    Add new item to a section.

    Creates a checklist item with origin "user". User items are never
    removed by condition retraction.
    """
    try:
        item = vault.add_item(
            session_id, section_id, body.name, body.quantity, body.is_critical, body.note
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not item:
        raise HTTPException(status_code=404, detail="Section not found")
    return item


@router.patch("/sections/{section_id}/items/{item_id}", response_model=Item)
async def update_item(
    session_id: UUID,
    section_id: UUID,
    item_id: UUID,
    body: ItemUpdate,
    vault: Vault = Depends(get_vault),
):
    """Edit an item's name, quantity or note, or move it to another section."""
    try:
        item = vault.update_item(
            session_id,
            section_id,
            item_id,
            name=body.name,
            quantity=body.quantity,
            note=body.note,
            target_section_id=body.target_section_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    return item


@router.delete("/sections/{section_id}/items/{item_id}", response_model=UndoCapsule)
async def delete_item(
    session_id: UUID,
    section_id: UUID,
    item_id: UUID,
    vault: Vault = Depends(get_vault),
):
    """
    Delete item from checklist.

    Returns an undo capsule holding the full item snapshot and its
    location; posting it to /items/restore puts the item back unchanged.
    """
    try:
        capsule = vault.delete_item(session_id, section_id, item_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not capsule:
        raise HTTPException(status_code=404, detail="Item not found")
    return capsule


@router.post("/items/restore", response_model=Item, status_code=201)
async def restore_item(
    session_id: UUID, capsule: UndoCapsule, vault: Vault = Depends(get_vault)
):
    """Undo a delete by restoring the item from its capsule."""
    if capsule.session_id != session_id:
        raise HTTPException(status_code=400, detail="Capsule belongs to another session")
    try:
        item = vault.restore_item(capsule)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not item:
        raise HTTPException(status_code=404, detail="Section not found")
    return item


@router.post("/sections/{section_id}/items/{item_id}/toggle-packed")
async def toggle_item_packed(
    session_id: UUID,
    section_id: UUID,
    item_id: UUID,
    vault: Vault = Depends(get_vault),
):
    """
    Toggle item packed state.

    Returns the item's new state together with the session's progress so
    the client can update counters without refetching.
    """
    try:
        item = vault.toggle_item_packed(session_id, section_id, item_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")

    return {
        "success": True,
        "item_id": str(item_id),
        "is_packed": item.is_packed,
        "progress": _progress(vault, session_id),
    }


@router.post("/sections/{section_id}/items/{item_id}/toggle-critical")
async def toggle_item_critical(
    session_id: UUID,
    section_id: UUID,
    item_id: UUID,
    vault: Vault = Depends(get_vault),
):
    """Toggle the item's critical flag."""
    try:
        item = vault.toggle_item_critical(session_id, section_id, item_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")

    return {
        "success": True,
        "item_id": str(item_id),
        "is_critical": item.is_critical,
        "progress": _progress(vault, session_id),
    }
