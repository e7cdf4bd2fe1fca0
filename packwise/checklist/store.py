"""Condition and rule catalog."""
import logging
from uuid import UUID

from packwise.checklist.builtins import built_in_catalog
from packwise.models import Condition, Rule

logger = logging.getLogger(__name__)


class ConditionStore:
    """
    CRUD over conditions and the rules that reference them.

    Every rule mutation recounts the owning condition's ``rule_count`` so
    the stored value always equals the number of rules pointing at it.
    """

    def __init__(
        self,
        conditions: list[Condition] | None = None,
        rules: list[Rule] | None = None,
    ):
        self.conditions: list[Condition] = conditions or []
        self.rules: list[Rule] = rules or []

    # Conditions

    def get_condition(self, condition_id: UUID) -> Condition | None:
        return next((c for c in self.conditions if c.id == condition_id), None)

    def add_condition(self, condition: Condition) -> Condition:
        """Append a condition. Duplicate names are allowed."""
        condition.rule_count = self._count_rules(condition.id)
        self.conditions.append(condition)
        logger.info(f"Condition added: {condition.name} ({condition.id})")
        return condition

    def update_condition(
        self,
        condition_id: UUID,
        name: str | None = None,
        icon: str | None = None,
        explanation: str | None = None,
    ) -> Condition | None:
        condition = self.get_condition(condition_id)
        if not condition:
            return None
        if name is not None:
            condition.name = name
        if icon is not None:
            condition.icon = icon
        if explanation is not None:
            condition.explanation = explanation
        return condition

    def delete_condition(self, condition_id: UUID) -> bool:
        """
        Delete a condition and every rule that references it.

        Effects already applied to sessions are left alone; only toggling
        the condition off in a session retracts them.
        """
        condition = self.get_condition(condition_id)
        if not condition:
            return False
        self.conditions.remove(condition)
        before = len(self.rules)
        self.rules = [r for r in self.rules if r.condition_id != condition_id]
        logger.info(
            f"Condition deleted: {condition.name} "
            f"(cascaded {before - len(self.rules)} rules)"
        )
        return True

    # Rules

    def get_rule(self, rule_id: UUID) -> Rule | None:
        return next((r for r in self.rules if r.id == rule_id), None)

    def add_rule(self, rule: Rule) -> Rule:
        self.rules.append(rule)
        self._refresh_rule_count(rule.condition_id)
        logger.info(
            f"Rule added: {rule.action.value} '{rule.target_item_name}' "
            f"for condition {rule.condition_id}"
        )
        return rule

    def delete_rule(self, rule_id: UUID) -> bool:
        rule = self.get_rule(rule_id)
        if not rule:
            return False
        self.rules.remove(rule)
        self._refresh_rule_count(rule.condition_id)
        logger.info(f"Rule deleted: {rule_id}")
        return True

    def rules_for_condition(self, condition_id: UUID) -> list[Rule]:
        """Rules for a condition, highest priority first (stable for ties)."""
        matching = [r for r in self.rules if r.condition_id == condition_id]
        return sorted(matching, key=lambda r: r.priority, reverse=True)

    def rule_map(self) -> dict[UUID, Rule]:
        return {rule.id: rule for rule in self.rules}

    # Seeding

    def seed_builtins(self) -> bool:
        """Install the built-in catalog when the store is empty."""
        if self.conditions or self.rules:
            return False
        self.conditions, self.rules = built_in_catalog()
        logger.info(
            f"Seeded {len(self.conditions)} built-in conditions "
            f"and {len(self.rules)} rules"
        )
        return True

    def clear(self) -> None:
        self.conditions = []
        self.rules = []

    def _count_rules(self, condition_id: UUID) -> int:
        return sum(1 for r in self.rules if r.condition_id == condition_id)

    def _refresh_rule_count(self, condition_id: UUID) -> None:
        condition = self.get_condition(condition_id)
        if condition:
            condition.rule_count = self._count_rules(condition_id)
