"""Section model grouping checklist items by category."""

from enum import Enum
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from packwise.models.item import Item


class SectionDesignation(str, Enum):
    """Built-in section types."""

    documents = "documents"
    clothing = "clothing"
    footwear = "footwear"
    hygiene = "hygiene"
    first_aid = "first_aid"
    gadgets = "gadgets"
    provisions = "provisions"
    custom = "custom"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    SectionDesignation.documents: "Documents",
    SectionDesignation.clothing: "Clothing",
    SectionDesignation.footwear: "Footwear",
    SectionDesignation.hygiene: "Hygiene",
    SectionDesignation.first_aid: "First Aid",
    SectionDesignation.gadgets: "Gadgets",
    SectionDesignation.provisions: "Provisions",
    SectionDesignation.custom: "Other",
}


class SectionProgress(SQLModel):
    """Cached progress for a single section."""

    total_cells: int = 0
    packed_cells: int = 0
    critical_remaining: int = 0

    @property
    def progress_fraction(self) -> float:
        if self.total_cells == 0:
            return 0.0
        return self.packed_cells / self.total_cells

    @property
    def is_complete(self) -> bool:
        return self.total_cells > 0 and self.packed_cells == self.total_cells


class Section(SQLModel):
    """A category of items within a session (Clothing, Gadgets, ...).

    Sections are created once from the archetype template when the session
    is created. ``is_collapsed`` is presentation state only.
    """
    id: UUID = Field(default_factory=uuid4)
    designation: SectionDesignation
    custom_name: str | None = None
    sort_index: int = 0
    is_collapsed: bool = False
    items: list[Item] = Field(default_factory=list)
    progress: SectionProgress = Field(default_factory=SectionProgress)

    @property
    def display_name(self) -> str:
        return self.custom_name or self.designation.display_name

    def find_item(self, item_id: UUID) -> Item | None:
        return next((item for item in self.items if item.id == item_id), None)

    def find_by_name(self, name: str) -> Item | None:
        """Case-insensitive lookup by item name."""
        return next((item for item in self.items if item.matches(name)), None)

    def remove_item(self, item_id: UUID) -> Item | None:
        for index, item in enumerate(self.items):
            if item.id == item_id:
                return self.items.pop(index)
        return None
