"""Seed the base checklist for a journey archetype."""
from packwise.models import (
    Item,
    ItemOrigin,
    JourneyArchetype,
    Section,
    SectionDesignation,
)

# Sections every session starts with, in display order. Custom is never seeded.
SEEDED_DESIGNATIONS = [
    SectionDesignation.documents,
    SectionDesignation.clothing,
    SectionDesignation.footwear,
    SectionDesignation.hygiene,
    SectionDesignation.first_aid,
    SectionDesignation.gadgets,
    SectionDesignation.provisions,
]

# (name, is_critical)
_DOCUMENTS = [
    ("Passport / ID", True),
    ("Tickets / Boarding Pass", True),
    ("Insurance Documents", True),
    ("Hotel Reservation", False),
    ("Cash / Cards", True),
    ("Emergency Contacts List", False),
]

_HYGIENE = [
    ("Toothbrush & Paste", False),
    ("Shampoo & Conditioner", False),
    ("Deodorant", False),
    ("Sunscreen", False),
    ("Towel", False),
    ("Lip Balm", False),
]

_FIRST_AID = [
    ("Band-Aids", False),
    ("Pain Relievers", False),
    ("Antiseptic Wipes", False),
    ("Personal Medications", True),
    ("Insect Repellent", False),
]

_GADGETS = [
    ("Phone Charger", True),
    ("Power Bank", False),
    ("Headphones", False),
    ("Travel Adapter", False),
    ("Camera", False),
]

_PROVISIONS = [
    ("Water Bottle", False),
    ("Snacks", False),
    ("Reusable Bag", False),
]

_BASE_CLOTHING = [
    ("T-Shirts", False),
    ("Underwear", False),
    ("Socks", False),
    ("Pants / Shorts", False),
    ("Sleepwear", False),
]

_EXTRA_CLOTHING = {
    JourneyArchetype.urban_explorer: [
        ("Light Jacket", False),
        ("Smart Casual Outfit", False),
    ],
    JourneyArchetype.coastal_breeze: [
        ("Swimsuit", False),
        ("Cover-Up / Sarong", False),
        ("Hat / Cap", False),
    ],
    JourneyArchetype.alpine_ascent: [
        ("Hiking Pants", False),
        ("Fleece / Midlayer", False),
        ("Rain Jacket", False),
        ("Hat / Beanie", False),
    ],
    JourneyArchetype.frost_expedition: [
        ("Thermal Base Layer", True),
        ("Warm Jacket / Parka", True),
        ("Gloves", False),
        ("Warm Hat / Beanie", False),
        ("Scarf / Neck Gaiter", False),
    ],
}

_FOOTWEAR = {
    JourneyArchetype.urban_explorer: [
        ("Comfortable Walking Shoes", False),
        ("Casual / Evening Shoes", False),
    ],
    JourneyArchetype.coastal_breeze: [
        ("Sandals / Flip-Flops", False),
        ("Water Shoes", False),
        ("Light Sneakers", False),
    ],
    JourneyArchetype.alpine_ascent: [
        ("Hiking Boots", True),
        ("Camp Sandals", False),
    ],
    JourneyArchetype.frost_expedition: [
        ("Insulated Boots", True),
        ("Warm Indoor Shoes", False),
    ],
}


def template_items(
    designation: SectionDesignation, archetype: JourneyArchetype
) -> list[tuple[str, bool]]:
    """
    Return the (name, is_critical) pairs seeded into a section.

    Documents, hygiene, first aid, gadgets and provisions are the same for
    every archetype. Clothing extends a shared base list and footwear is
    chosen per archetype.
    """
    if designation == SectionDesignation.documents:
        return list(_DOCUMENTS)
    if designation == SectionDesignation.clothing:
        return _BASE_CLOTHING + _EXTRA_CLOTHING[archetype]
    if designation == SectionDesignation.footwear:
        return list(_FOOTWEAR[archetype])
    if designation == SectionDesignation.hygiene:
        return list(_HYGIENE)
    if designation == SectionDesignation.first_aid:
        return list(_FIRST_AID)
    if designation == SectionDesignation.gadgets:
        return list(_GADGETS)
    if designation == SectionDesignation.provisions:
        return list(_PROVISIONS)
    return []


def seed_sections(archetype: JourneyArchetype) -> list[Section]:
    """Build the full section list for a new session."""
    sections = []
    for index, designation in enumerate(SEEDED_DESIGNATIONS):
        items = [
            Item(name=name, is_critical=critical, origin=ItemOrigin.template)
            for name, critical in template_items(designation, archetype)
        ]
        sections.append(Section(designation=designation, sort_index=index, items=items))
    return sections
