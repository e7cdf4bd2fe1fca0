"""Condition and rule models for the dependency engine.

A Condition is a contextual toggle ("Rain Expected", "Trekking / Hiking").
A Rule links a condition to an effect on one named item in one section:
adding it, marking it critical, or appending a note.
"""

from enum import Enum
from uuid import UUID, uuid4

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from packwise.models.section import SectionDesignation
from packwise.models.session import JourneyArchetype

MIN_PRIORITY = 1
MAX_PRIORITY = 5


class RuleAction(str, Enum):
    """What the rule does when its condition is applied."""

    add_item = "add_item"
    make_critical = "make_critical"
    append_note = "append_note"


class RemovalPolicy(str, Enum):
    """What happens to a rule's item when its condition is turned off."""

    remove_if_not_packed = "remove_if_not_packed"
    always_keep = "always_keep"
    archive = "archive"


class Condition(SQLModel):
    """A user-toggleable trigger for a group of rules.

    Attributes:
        id: Unique identifier (UUID).
        name: Display name. Not required to be unique.
        icon: Icon reference for the client.
        explanation: Short description of what the condition adds.
        is_built_in: Built-in conditions ship with the app.
        rule_count: Number of rules referencing this condition. Maintained
            by the store on every rule add/delete, never recomputed lazily.
    """
    id: UUID = Field(default_factory=uuid4)
    name: str
    icon: str = "bolt.circle"
    explanation: str = ""
    is_built_in: bool = False
    rule_count: int = 0


class Rule(SQLModel):
    """An if-condition-then-action dependency.

    Attributes:
        id: Unique identifier (UUID).
        condition_id: The condition this rule belongs to.
        action: Effect applied to the target item.
        target_item_name: Item name, matched case-insensitively.
        target_section: Section the target item lives in.
        removal_policy: Fate of an injected item on retraction.
        priority: 1 (lowest) to 5 (highest). Only orders application
            within one condition; out-of-range values are clamped.
        reason_text: Shown to the user on injected items and used as the
            note text for append_note.
        archetype_mask: Archetypes this rule applies to. Empty means all.
    """
    id: UUID = Field(default_factory=uuid4)
    condition_id: UUID
    action: RuleAction
    target_item_name: str
    target_section: SectionDesignation
    removal_policy: RemovalPolicy = RemovalPolicy.remove_if_not_packed
    priority: int = 3
    reason_text: str = ""
    archetype_mask: set[JourneyArchetype] = Field(default_factory=set)

    @field_validator("priority", mode="before")
    @classmethod
    def clamp_priority(cls, value: int) -> int:
        return min(max(int(value), MIN_PRIORITY), MAX_PRIORITY)

    def applies_to(self, archetype: JourneyArchetype) -> bool:
        return not self.archetype_mask or archetype in self.archetype_mask
