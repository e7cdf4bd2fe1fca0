from packwise.models.condition import Condition, RemovalPolicy, Rule, RuleAction
from packwise.models.document import VaultDocument
from packwise.models.item import Item, ItemOrigin
from packwise.models.profile import Identity, OnboardingState, Statistics, UndoCapsule
from packwise.models.section import Section, SectionDesignation, SectionProgress
from packwise.models.session import (
    JourneyArchetype,
    PackingSession,
    ReminderPlan,
    SessionProgress,
)

__all__ = [
    "Condition",
    "Identity",
    "Item",
    "ItemOrigin",
    "JourneyArchetype",
    "OnboardingState",
    "PackingSession",
    "ReminderPlan",
    "RemovalPolicy",
    "Rule",
    "RuleAction",
    "Section",
    "SectionDesignation",
    "SectionProgress",
    "SessionProgress",
    "Statistics",
    "UndoCapsule",
    "VaultDocument",
]
