"""Tests for condition previews and the sandbox."""

from uuid import uuid4

from packwise.checklist.vault import Vault
from packwise.models import PackingSession, Rule, RuleAction, SectionDesignation


class TestPreviewConditionDelta:
    """Tests for previewing a toggle."""

    def test_inactive_lists_additions(
        self, vault: Vault, alpine_session: PackingSession, condition_named
    ):
        """An inactive condition previews only the items it would add."""
        rain = condition_named("Rain Expected")

        delta = vault.preview_condition_delta(alpine_session.id, rain.id)

        assert delta.added == ["Umbrella", "Waterproof Bag Cover"]
        assert delta.removed == []

    def test_existing_target_not_added(
        self, vault: Vault, alpine_session: PackingSession
    ):
        """A rule targeting an item already in the session previews no additions."""
        hydration = vault.add_condition("Hydration")
        vault.add_rule(
            Rule(
                condition_id=hydration.id,
                action=RuleAction.add_item,
                target_item_name="water bottle",
                target_section=SectionDesignation.provisions,
            )
        )

        delta = vault.preview_condition_delta(alpine_session.id, hydration.id)

        assert delta.added == []
        assert delta.removed == []

    def test_active_lists_removals(
        self, vault: Vault, alpine_session: PackingSession, condition_named
    ):
        """An active condition previews the unpacked items it would remove."""
        trekking = condition_named("Trekking / Hiking")
        vault.toggle_condition(alpine_session.id, trekking.id)

        delta = vault.preview_condition_delta(alpine_session.id, trekking.id)

        assert delta.added == []
        assert sorted(delta.removed) == [
            "Blister Plasters",
            "Trail Mix / Energy Bars",
            "Trekking Poles",
        ]

    def test_preview_does_not_mutate(
        self, vault: Vault, alpine_session: PackingSession, condition_named
    ):
        """Previewing leaves the session exactly as it was."""
        rain = condition_named("Rain Expected")
        vault.toggle_condition(alpine_session.id, rain.id)
        snapshot = alpine_session.model_dump()

        vault.preview_condition_delta(alpine_session.id, rain.id)

        assert alpine_session.model_dump() == snapshot

    def test_packed_items_not_listed(
        self, vault: Vault, alpine_session: PackingSession, condition_named
    ):
        """Packed rule items would survive, so they are not listed as removed."""
        rain = condition_named("Rain Expected")
        vault.toggle_condition(alpine_session.id, rain.id)
        provisions = alpine_session.section_for(SectionDesignation.provisions)
        umbrella = provisions.find_by_name("Umbrella")
        vault.toggle_item_packed(alpine_session.id, provisions.id, umbrella.id)

        delta = vault.preview_condition_delta(alpine_session.id, rain.id)

        assert delta.removed == ["Waterproof Bag Cover"]


class TestSandbox:
    """Tests for the multi-condition sandbox."""

    def test_union_of_add_items(self, vault: Vault, condition_named):
        """The sandbox lists every add_item effect of the given conditions."""
        rain = condition_named("Rain Expected")
        cold = condition_named("Cold Evenings")

        effects = vault.sandbox([rain.id, cold.id])

        assert [e.item_name for e in effects] == [
            "Umbrella",
            "Rain Jacket",
            "Waterproof Bag Cover",
            "Warm Layer / Fleece",
            "Hand Warmers",
            "Warm Socks",
        ]
        assert all(e.action == RuleAction.add_item for e in effects)

    def test_excludes_other_actions(self, vault: Vault, condition_named):
        """make_critical and append_note rules do not appear."""
        beach = condition_named("Water / Beach")

        effects = vault.sandbox([beach.id])

        assert "Sunscreen" not in [e.item_name for e in effects]
        assert len(effects) == 3

    def test_dedupes_first_condition_wins(self, vault: Vault, condition_named):
        """Items added by several conditions are listed once, under the first."""
        rain = condition_named("Rain Expected")
        storm = vault.add_condition("Storm Warning")
        vault.add_rule(
            Rule(
                condition_id=storm.id,
                action=RuleAction.add_item,
                target_item_name="umbrella",
                target_section=SectionDesignation.provisions,
            )
        )

        effects = vault.sandbox([storm.id, rain.id])

        umbrellas = [e for e in effects if e.item_name.lower() == "umbrella"]
        assert len(umbrellas) == 1
        assert umbrellas[0].condition_name == "Storm Warning"

    def test_unknown_conditions_ignored(self, vault: Vault):
        """Unknown condition IDs contribute nothing."""
        assert vault.sandbox([uuid4()]) == []
