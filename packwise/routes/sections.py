"""Section routes for bulk packing and section settings."""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import SQLModel

from packwise.checklist.vault import Vault, get_vault
from packwise.models import Section

router = APIRouter(prefix="/sessions/{session_id}/sections", tags=["sections"])


class SectionUpdate(SQLModel):
    custom_name: str | None = None
    is_collapsed: bool | None = None


@router.post("/{section_id}/complete", response_model=Section)
async def mark_section_complete(
    session_id: UUID, section_id: UUID, vault: Vault = Depends(get_vault)
):
    """Mark every item in the section as packed."""
    try:
        section = vault.mark_section_complete(session_id, section_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not section:
        raise HTTPException(status_code=404, detail="Section not found")
    return section


@router.post("/{section_id}/reset", response_model=Section)
async def reset_section(
    session_id: UUID, section_id: UUID, vault: Vault = Depends(get_vault)
):
    """Unpack every item in the section."""
    try:
        section = vault.reset_section(session_id, section_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not section:
        raise HTTPException(status_code=404, detail="Section not found")
    return section


@router.patch("/{section_id}", response_model=Section)
async def update_section(
    session_id: UUID,
    section_id: UUID,
    body: SectionUpdate,
    vault: Vault = Depends(get_vault),
):
    """Rename or collapse a section. An empty name restores the default."""
    try:
        section = vault.update_section(
            session_id, section_id, body.custom_name, body.is_collapsed
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not section:
        raise HTTPException(status_code=404, detail="Section not found")
    return section
