"""Checklist item model for packing progress tracking.

This module defines the Item model which represents a single entry in a
packing checklist. Items enter a session from the archetype template, from
a condition rule, or by direct user action, and remember where they came
from so that retracting a condition only removes what it put there.
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class ItemOrigin(str, Enum):
    """How the item entered the session."""

    template = "template"
    rule = "rule"
    user = "user"


class Item(SQLModel):
    """A single packing checklist entry.

    Attributes:
        id: Unique identifier (UUID).
        name: Display text for the item.
        quantity: How many to pack, always at least 1.
        is_packed: Whether the item has been packed.
        packed_at: Set when the item transitions to packed, cleared when
            it is unpacked again.
        is_critical: Critical items are highlighted until packed.
        note: Optional free text. Rules with the append_note action add
            their reason text here.
        origin: Where the item came from. Set once at creation and never
            changed, even after the rule that injected it is retracted.
        rule_lineage: IDs of the rules that added or modified this item,
            in the order they touched it. An empty lineage on a
            rule-injected item means the user now owns it.
        reason: Human-readable explanation shown next to rule items.
    """
    id: UUID = Field(default_factory=uuid4)
    name: str
    quantity: int = Field(default=1, ge=1)
    is_packed: bool = False
    packed_at: datetime | None = None
    is_critical: bool = False
    note: str | None = None
    origin: ItemOrigin = ItemOrigin.user
    rule_lineage: list[UUID] = Field(default_factory=list)
    reason: str | None = None

    def set_packed(self, packed: bool) -> bool:
        """Set the packed flag. Returns True on a false -> true transition."""
        if packed == self.is_packed:
            return False
        self.is_packed = packed
        self.packed_at = datetime.now(UTC) if packed else None
        return packed

    def link_rule(self, rule_id: UUID) -> bool:
        """Append a rule to the lineage unless it is already there."""
        if rule_id in self.rule_lineage:
            return False
        self.rule_lineage.append(rule_id)
        return True

    def matches(self, name: str) -> bool:
        return self.name.lower() == name.lower()
