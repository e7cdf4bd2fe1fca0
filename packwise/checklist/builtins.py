"""Built-in conditions and the rules that ship with them."""
from packwise.models import (
    Condition,
    Rule,
    RuleAction,
    SectionDesignation,
)

S = SectionDesignation

# name, icon, explanation, [(action, target, section, reason)]
BUILT_IN_CATALOG = [
    (
        "Rain Expected",
        "cloud.rain.fill",
        "Pack rain protection gear",
        [
            (RuleAction.add_item, "Umbrella", S.provisions, "Rain expected"),
            (RuleAction.add_item, "Rain Jacket", S.clothing, "Rain expected"),
            (RuleAction.add_item, "Waterproof Bag Cover", S.provisions, "Rain expected"),
        ],
    ),
    (
        "Trekking / Hiking",
        "figure.hiking",
        "Add hiking-specific essentials",
        [
            (RuleAction.add_item, "Blister Plasters", S.first_aid, "Trekking planned"),
            (RuleAction.add_item, "Trekking Poles", S.provisions, "Trekking planned"),
            (RuleAction.add_item, "Trail Mix / Energy Bars", S.provisions, "Trekking planned"),
            (RuleAction.make_critical, "Hiking Boots", S.footwear, "Critical for trekking"),
        ],
    ),
    (
        "With Children",
        "figure.and.child.holdinghands",
        "Items for traveling with kids",
        [
            (RuleAction.add_item, "Kids Snacks", S.provisions, "Traveling with children"),
            (RuleAction.add_item, "Entertainment / Toys", S.provisions, "Keep kids occupied"),
            (RuleAction.add_item, "Kids First Aid Kit", S.first_aid, "Traveling with children"),
            (RuleAction.add_item, "Extra Wet Wipes", S.hygiene, "Traveling with children"),
        ],
    ),
    (
        "Early Departure",
        "sunrise.fill",
        "Prepare for pre-dawn start",
        [
            (RuleAction.add_item, "Sleep Mask", S.provisions, "Early departure rest"),
            (RuleAction.add_item, "Thermos / Coffee", S.provisions, "Early morning boost"),
            (RuleAction.append_note, "Phone Charger", S.gadgets, "Charge fully the night before"),
        ],
    ),
    (
        "Cold Evenings",
        "thermometer.snowflake",
        "Extra warmth for chilly nights",
        [
            (RuleAction.add_item, "Warm Layer / Fleece", S.clothing, "Cold evenings expected"),
            (RuleAction.add_item, "Hand Warmers", S.provisions, "Cold evenings expected"),
            (RuleAction.add_item, "Warm Socks", S.clothing, "Cold evenings expected"),
        ],
    ),
    (
        "Water / Beach",
        "water.waves",
        "Swimming and beach essentials",
        [
            (RuleAction.add_item, "Beach Towel", S.provisions, "Beach / water activities"),
            (RuleAction.add_item, "Waterproof Phone Case", S.gadgets, "Protect phone near water"),
            (RuleAction.add_item, "Goggles / Snorkel", S.provisions, "Water activities"),
            (RuleAction.make_critical, "Sunscreen", S.hygiene, "Critical for beach"),
        ],
    ),
    (
        "Long Transit",
        "airplane",
        "Comfort items for long travel",
        [
            (RuleAction.add_item, "Neck Pillow", S.provisions, "Long transit comfort"),
            (RuleAction.add_item, "Compression Socks", S.clothing, "Long flight health"),
            (RuleAction.add_item, "eBook / Kindle", S.gadgets, "Long transit entertainment"),
            (RuleAction.add_item, "Toiletry Zip Bag", S.hygiene, "Airport security ready"),
        ],
    ),
]


def built_in_catalog() -> tuple[list[Condition], list[Rule]]:
    """Build fresh built-in conditions and rules with new IDs.

    Rule counts on the returned conditions are already correct.
    """
    conditions = []
    rules = []
    for name, icon, explanation, rule_specs in BUILT_IN_CATALOG:
        condition = Condition(
            name=name,
            icon=icon,
            explanation=explanation,
            is_built_in=True,
            rule_count=len(rule_specs),
        )
        conditions.append(condition)
        for action, target, section, reason in rule_specs:
            rules.append(
                Rule(
                    condition_id=condition.id,
                    action=action,
                    target_item_name=target,
                    target_section=section,
                    reason_text=reason,
                )
            )
    return conditions, rules
