"""Identity, statistics and onboarding documents.

These are the small per-install documents persisted alongside sessions and
the condition catalog. The rule engine only touches them through the
packing counters and the perfect-pack streak.
"""

from datetime import UTC, datetime
from uuid import UUID

from sqlmodel import Field, SQLModel

from packwise.models.item import Item

# (minimum items packed, title) per level, lowest first
LEVELS = [
    (0, "Novice Packer"),
    (25, "Organized Scout"),
    (100, "Seasoned Nomad"),
    (300, "Master Voyager"),
    (750, "Legendary Pathfinder"),
    (1500, "Vital Sage"),
]


class Identity(SQLModel):
    """Lightweight user profile used for personalization and levels."""

    avatar_emoji: str = "🧳"
    display_name: str = "Traveler"
    total_sessions_created: int = 0
    total_items_packed: int = 0
    perfect_pack_streak: int = 0
    longest_streak: int = 0

    @property
    def level(self) -> int:
        level = 1
        for index, (threshold, _) in enumerate(LEVELS):
            if self.total_items_packed >= threshold:
                level = index + 1
        return level

    @property
    def level_title(self) -> str:
        return LEVELS[self.level - 1][1]


class Statistics(SQLModel):
    """Aggregate counters across all sessions."""

    total_trips: int = 0
    total_items_ever_packed: int = 0
    perfect_trips: int = 0
    critical_items_saved: int = 0
    conditions_used_count: int = 0


class OnboardingState(SQLModel):
    has_completed_onboarding: bool = False
    last_onboarding_step: int = 0


class UndoCapsule(SQLModel):
    """Snapshot of a deleted item and where it lived, for verbatim restore."""

    session_id: UUID
    section_id: UUID
    item: Item
    deleted_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
