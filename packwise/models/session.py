"""Packing session model - one trip, one checklist.

This module defines the PackingSession model, the root of the checklist document
tree. A session owns its sections (which own their items), the set of
conditions currently active for the trip, and a cached progress snapshot
that is recomputed after every mutation.
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from packwise.models.item import Item
from packwise.models.section import Section, SectionDesignation


class JourneyArchetype(str, Enum):
    """The kind of journey; selects the base template of items."""

    urban_explorer = "urban_explorer"
    coastal_breeze = "coastal_breeze"
    alpine_ascent = "alpine_ascent"
    frost_expedition = "frost_expedition"

    @property
    def display_name(self) -> str:
        return {
            JourneyArchetype.urban_explorer: "City Explorer",
            JourneyArchetype.coastal_breeze: "Coastal Breeze",
            JourneyArchetype.alpine_ascent: "Alpine Ascent",
            JourneyArchetype.frost_expedition: "Frost Expedition",
        }[self]


class ReminderPlan(SQLModel):
    """Notification preferences for a session (24h / 6h / 2h before departure)."""

    is_24_hours_enabled: bool = True
    is_6_hours_enabled: bool = True
    is_2_hours_enabled: bool = True
    quiet_hours_start: int = Field(default=23, ge=0, le=23)
    quiet_hours_end: int = Field(default=7, ge=0, le=23)


class SessionProgress(SQLModel):
    """Cached progress for an entire session."""

    total_cells: int = 0
    packed_cells: int = 0
    critical_remaining: int = 0
    rule_added_count: int = 0

    @property
    def remaining_cells(self) -> int:
        return max(self.total_cells - self.packed_cells, 0)

    @property
    def progress_fraction(self) -> float:
        if self.total_cells == 0:
            return 0.0
        return self.packed_cells / self.total_cells

    @property
    def progress_percent(self) -> int:
        return int(self.progress_fraction * 100)

    @property
    def is_complete(self) -> bool:
        return self.total_cells > 0 and self.packed_cells == self.total_cells


class PackingSession(SQLModel):
    """A packing session for a single trip.

    Attributes:
        id: Unique identifier (UUID).
        title: Trip title.
        archetype: Journey archetype the template was seeded from.
        departure_at: When the trip starts.
        created_at: When the session was created.
        is_archived: Archived sessions are read-only until unarchived.
        active_condition_ids: Conditions currently applied to this session.
        sections: Ordered item categories.
        reminder_plan: Notification preferences.
        progress: Cached aggregate; always equal to the live tree once a
            mutation completes.
    """
    id: UUID = Field(default_factory=uuid4)
    title: str
    archetype: JourneyArchetype
    departure_at: datetime
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    is_archived: bool = False
    active_condition_ids: set[UUID] = Field(default_factory=set)
    sections: list[Section] = Field(default_factory=list)
    reminder_plan: ReminderPlan = Field(default_factory=ReminderPlan)
    progress: SessionProgress = Field(default_factory=SessionProgress)

    def find_section(self, section_id: UUID) -> Section | None:
        return next((s for s in self.sections if s.id == section_id), None)

    def section_for(self, designation: SectionDesignation) -> Section | None:
        return next((s for s in self.sections if s.designation == designation), None)

    def all_items(self) -> list[Item]:
        return [item for section in self.sections for item in section.items]

    def has_item_named(self, name: str) -> bool:
        return any(item.matches(name) for item in self.all_items())
