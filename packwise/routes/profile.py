"""Profile routes: identity, statistics, onboarding and data management."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, SQLModel

from packwise.checklist.vault import Vault, get_vault
from packwise.core.database import get_session
from packwise.models import OnboardingState, Statistics

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


class IdentityUpdate(SQLModel):
    display_name: str | None = None
    avatar_emoji: str | None = None


class OnboardingComplete(SQLModel):
    step: int | None = None


def _identity_payload(vault: Vault) -> dict:
    identity = vault.identity
    return {
        **identity.model_dump(),
        "level": identity.level,
        "level_title": identity.level_title,
    }


@router.get("")
async def get_profile(vault: Vault = Depends(get_vault)):
    """Get the user's identity with their current level."""
    return _identity_payload(vault)


@router.patch("")
async def update_profile(body: IdentityUpdate, vault: Vault = Depends(get_vault)):
    """Change display name or avatar."""
    try:
        vault.update_identity(body.display_name, body.avatar_emoji)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _identity_payload(vault)


@router.get("/statistics", response_model=Statistics)
async def get_statistics(vault: Vault = Depends(get_vault)):
    """Aggregate packing statistics across all sessions."""
    return vault.statistics


@router.post("/onboarding/complete", response_model=OnboardingState)
async def complete_onboarding(
    body: OnboardingComplete | None = None, vault: Vault = Depends(get_vault)
):
    """Record that the user finished onboarding."""
    return vault.complete_onboarding(body.step if body else None)


@router.get("/export")
async def export_data(vault: Vault = Depends(get_vault)):
    """Export every vault document as one JSON payload."""
    return vault.export()


@router.post("/save")
async def save_now(
    vault: Vault = Depends(get_vault), session: Session = Depends(get_session)
):
    """Write pending changes to the database immediately."""
    try:
        written = vault.save(session)
    except Exception as e:
        logger.error(f"Manual save failed: {e}")
        raise HTTPException(status_code=500, detail="Save failed")
    return {"success": True, "documents_written": written}


@router.post("/reset")
async def reset_all_data(vault: Vault = Depends(get_vault)):
    """
    Delete all sessions, custom conditions and profile data.

    Built-in conditions and rules are reseeded afterwards.
    """
    vault.reset_all_data()
    return {"success": True}
