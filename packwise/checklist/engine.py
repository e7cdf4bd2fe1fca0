"""Condition rule application and retraction."""
import logging
from uuid import UUID

from packwise.checklist.store import ConditionStore
from packwise.models import (
    Item,
    ItemOrigin,
    PackingSession,
    RemovalPolicy,
    Rule,
    RuleAction,
)

logger = logging.getLogger(__name__)

DEFAULT_REASON = "Added by condition"
NOTE_SEPARATOR = "; "

# Policies that delete an unpacked item once no rule references it.
# Archive has no storage of its own and behaves like remove_if_not_packed.
REMOVING_POLICIES = {RemovalPolicy.remove_if_not_packed, RemovalPolicy.archive}


def apply_condition(
    store: ConditionStore, session: PackingSession, condition_id: UUID
) -> dict:
    """
    Apply every rule of a condition to a session.

    Rules run highest priority first, so a make_critical or append_note
    rule can target an item added earlier in the same pass. Applying an
    already applied condition is a no-op: existing items are matched by
    name (case-insensitive), lineage entries are never duplicated and a
    note is not appended twice.

    Returns dict with apply statistics.
    """
    stats = {"added": 0, "linked": 0, "made_critical": 0, "noted": 0, "skipped": 0}

    for rule in store.rules_for_condition(condition_id):
        if not rule.applies_to(session.archetype):
            logger.debug(f"Rule {rule.id} skipped for archetype {session.archetype.value}")
            stats["skipped"] += 1
            continue

        section = session.section_for(rule.target_section)
        if not section:
            logger.debug(
                f"Rule {rule.id} skipped, no {rule.target_section.value} section"
            )
            stats["skipped"] += 1
            continue

        existing = section.find_by_name(rule.target_item_name)

        if rule.action == RuleAction.add_item:
            if existing:
                if existing.link_rule(rule.id):
                    stats["linked"] += 1
            else:
                section.items.append(_inject_item(rule))
                stats["added"] += 1

        elif rule.action == RuleAction.make_critical:
            if existing:
                existing.is_critical = True
                existing.link_rule(rule.id)
                stats["made_critical"] += 1
            else:
                stats["skipped"] += 1

        elif rule.action == RuleAction.append_note:
            if existing and _append_note(existing, rule.reason_text):
                stats["noted"] += 1

    session.active_condition_ids.add(condition_id)
    logger.info(f"Applied condition {condition_id} to '{session.title}': {stats}")
    return stats


def retract_condition(
    store: ConditionStore, session: PackingSession, condition_id: UUID
) -> dict:
    """
    Undo a condition's effects on a session.

    A rule-injected item is removed when no rule outside the retracted
    condition remains in its lineage, it is not packed, and the policy of
    the first retracted rule in its lineage removes. An orphan (empty
    lineage) falls back to remove_if_not_packed, so it is removed on the
    next retraction of any condition unless packed. Packed items are
    never removed. Every surviving item has the condition's rules
    stripped from its lineage. Critical flags and notes set by the rules
    are left in place.

    Returns dict with retract statistics.
    """
    retracted_ids = {rule.id for rule in store.rules_for_condition(condition_id)}
    rules = store.rule_map()
    stats = {"removed": 0, "kept": 0, "stripped": 0}

    for section in session.sections:
        survivors = []
        for item in section.items:
            if _should_remove(item, retracted_ids, rules):
                logger.debug(f"Removing rule item '{item.name}' from {section.display_name}")
                stats["removed"] += 1
                continue
            if _touched_by(item, retracted_ids) and item.origin == ItemOrigin.rule:
                stats["kept"] += 1
            survivors.append(item)

        for item in survivors:
            stripped = [rid for rid in item.rule_lineage if rid not in retracted_ids]
            if len(stripped) != len(item.rule_lineage):
                item.rule_lineage = stripped
                stats["stripped"] += 1

        section.items = survivors

    session.active_condition_ids.discard(condition_id)
    logger.info(f"Retracted condition {condition_id} from '{session.title}': {stats}")
    return stats


def removal_policy_for(
    item: Item, retracted_ids: set[UUID], rules: dict[UUID, Rule]
) -> RemovalPolicy:
    """First known policy among the retracted rules in the item's lineage."""
    for rule_id in item.rule_lineage:
        if rule_id in retracted_ids and rule_id in rules:
            return rules[rule_id].removal_policy
    return RemovalPolicy.remove_if_not_packed


def _should_remove(item: Item, retracted_ids: set[UUID], rules: dict[UUID, Rule]) -> bool:
    if item.origin != ItemOrigin.rule or item.is_packed:
        return False
    if any(rid not in retracted_ids for rid in item.rule_lineage):
        return False
    return removal_policy_for(item, retracted_ids, rules) in REMOVING_POLICIES


def _touched_by(item: Item, rule_ids: set[UUID]) -> bool:
    return any(rid in rule_ids for rid in item.rule_lineage)


def _inject_item(rule: Rule) -> Item:
    return Item(
        name=rule.target_item_name,
        origin=ItemOrigin.rule,
        rule_lineage=[rule.id],
        reason=rule.reason_text or DEFAULT_REASON,
    )


def _append_note(item: Item, text: str) -> bool:
    """Append text to the item's note unless it is already there."""
    existing = item.note or ""
    if text in existing:
        return False
    item.note = f"{existing}{NOTE_SEPARATOR}{text}" if existing else text
    return True
