"""Read-only previews of what toggling conditions would change."""
from uuid import UUID

from sqlmodel import SQLModel

from packwise.checklist.engine import retract_condition
from packwise.checklist.store import ConditionStore
from packwise.models import PackingSession, RuleAction, SectionDesignation


class ConditionDelta(SQLModel):
    added: list[str]
    removed: list[str]


class SandboxEffect(SQLModel):
    item_name: str
    section: SectionDesignation
    condition_name: str
    action: RuleAction


def preview_condition_delta(
    store: ConditionStore, session: PackingSession, condition_id: UUID
) -> ConditionDelta:
    """
    Preview the effect of toggling a condition without mutating anything.

    For an inactive condition, lists the add_item targets that are not yet
    anywhere in the session. For an active condition, lists the unpacked
    items a retraction would delete, computed by retracting from a copy.
    """
    if condition_id in session.active_condition_ids:
        return ConditionDelta(added=[], removed=_would_remove(store, session, condition_id))
    return ConditionDelta(added=_would_add(store, session, condition_id), removed=[])


def sandbox(store: ConditionStore, condition_ids: list[UUID]) -> list[SandboxEffect]:
    """
    Union the add_item effects of a set of conditions.

    Duplicates are dropped by case-insensitive item name; the first
    condition (in the given order) to add an item wins.
    """
    effects = []
    seen = set()
    for condition_id in condition_ids:
        condition = store.get_condition(condition_id)
        if not condition:
            continue
        for rule in store.rules_for_condition(condition_id):
            if rule.action != RuleAction.add_item:
                continue
            key = rule.target_item_name.lower()
            if key in seen:
                continue
            seen.add(key)
            effects.append(
                SandboxEffect(
                    item_name=rule.target_item_name,
                    section=rule.target_section,
                    condition_name=condition.name,
                    action=rule.action,
                )
            )
    return effects


def _would_add(store: ConditionStore, session: PackingSession, condition_id: UUID) -> list[str]:
    names = []
    seen = set()
    for rule in store.rules_for_condition(condition_id):
        if rule.action != RuleAction.add_item or not rule.applies_to(session.archetype):
            continue
        key = rule.target_item_name.lower()
        if key in seen or session.has_item_named(rule.target_item_name):
            continue
        seen.add(key)
        names.append(rule.target_item_name)
    return names


def _would_remove(
    store: ConditionStore, session: PackingSession, condition_id: UUID
) -> list[str]:
    dry_run = session.model_copy(deep=True)
    retract_condition(store, dry_run, condition_id)
    surviving = {item.id for item in dry_run.all_items()}
    return [item.name for item in session.all_items() if item.id not in surviving]
