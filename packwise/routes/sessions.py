"""Session routes for creating and managing packing sessions."""
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Field, SQLModel

from packwise.checklist.preview import ConditionDelta
from packwise.checklist.vault import Vault, get_vault
from packwise.models import JourneyArchetype, PackingSession, ReminderPlan

router = APIRouter(prefix="/sessions", tags=["sessions"])


class SessionCreate(SQLModel):
    title: str = Field(min_length=1)
    archetype: JourneyArchetype
    departure_at: datetime
    condition_ids: list[UUID] = Field(default_factory=list)


class SessionUpdate(SQLModel):
    title: str | None = None
    departure_at: datetime | None = None
    reminder_plan: ReminderPlan | None = None


@router.get("", response_model=list[PackingSession])
async def list_sessions(vault: Vault = Depends(get_vault)):
    """List active sessions, soonest departure first."""
    return vault.active_sessions()


@router.get("/archived", response_model=list[PackingSession])
async def list_archived_sessions(vault: Vault = Depends(get_vault)):
    """List archived sessions, most recent departure first."""
    return vault.archived_sessions()


@router.post("", response_model=PackingSession, status_code=201)
async def create_session(body: SessionCreate, vault: Vault = Depends(get_vault)):
    """
    Create a new packing session.

    Seeds the archetype's template sections and items, then applies each
    initial condition's rules in the order given.
    """
    try:
        return vault.create_session(
            body.title, body.archetype, body.departure_at, body.condition_ids
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{session_id}", response_model=PackingSession)
async def session_detail(session_id: UUID, vault: Vault = Depends(get_vault)):
    """Get a single session with its sections, items and cached progress."""
    session = vault.get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.patch("/{session_id}", response_model=PackingSession)
async def update_session(
    session_id: UUID, body: SessionUpdate, vault: Vault = Depends(get_vault)
):
    """Edit title, departure time or reminder plan. Archived sessions are read-only."""
    try:
        session = vault.update_session(
            session_id, body.title, body.departure_at, body.reminder_plan
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: UUID, vault: Vault = Depends(get_vault)):
    """Permanently delete a session."""
    if not vault.delete_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")


@router.post("/{session_id}/archive", response_model=PackingSession)
async def archive_session(session_id: UUID, vault: Vault = Depends(get_vault)):
    """
    Archive session (move to read-only).

    Archived sessions keep their checklist but reject further changes
    until they are unarchived.
    """
    session = vault.archive_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.post("/{session_id}/unarchive", response_model=PackingSession)
async def unarchive_session(session_id: UUID, vault: Vault = Depends(get_vault)):
    """Restore an archived session to active status."""
    session = vault.unarchive_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.post("/{session_id}/duplicate", response_model=PackingSession, status_code=201)
async def duplicate_session(session_id: UUID, vault: Vault = Depends(get_vault)):
    """Copy a session with everything unpacked."""
    session = vault.duplicate_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.post("/{session_id}/conditions/{condition_id}/toggle")
async def toggle_condition(
    session_id: UUID, condition_id: UUID, vault: Vault = Depends(get_vault)
):
    """
    Toggle a condition for a session.

    Turning a condition on applies its rules; turning it off retracts
    them. Returns the new state, the engine statistics and the session's
    updated progress.
    """
    try:
        result = vault.toggle_condition(session_id, condition_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if result is None:
        raise HTTPException(status_code=404, detail="Session or condition not found")

    session = vault.get_session(session_id)
    return {
        "condition_id": str(condition_id),
        "active": result["active"],
        "stats": result["stats"],
        "progress": session.progress.model_dump(),
    }


@router.get(
    "/{session_id}/conditions/{condition_id}/preview", response_model=ConditionDelta
)
async def preview_condition(
    session_id: UUID, condition_id: UUID, vault: Vault = Depends(get_vault)
):
    """Preview which items toggling a condition would add or remove."""
    delta = vault.preview_condition_delta(session_id, condition_id)
    if delta is None:
        raise HTTPException(status_code=404, detail="Session or condition not found")
    return delta
