"""The vault: single owner of all checklist state.

Every operation the API exposes goes through a Vault method. Mutating
methods change the in-memory tree, recompute the cached progress of the
session they touched, and enqueue JSON snapshots of the changed documents.
Unknown IDs are reported by returning None (or False) and never raise;
invalid input raises ValueError before anything is changed.
"""
import logging
from datetime import UTC, datetime
from uuid import UUID, uuid4

from pydantic import TypeAdapter, ValidationError
from sqlmodel import Session

from packwise.checklist.engine import apply_condition, retract_condition
from packwise.checklist.persistence import (
    DOCUMENT_NAMES,
    SnapshotWriter,
    read_documents,
)
from packwise.checklist.preview import (
    ConditionDelta,
    SandboxEffect,
    preview_condition_delta,
    sandbox,
)
from packwise.checklist.progress import recalculate_progress
from packwise.checklist.store import ConditionStore
from packwise.checklist.templates import seed_sections
from packwise.models import (
    Condition,
    Identity,
    Item,
    ItemOrigin,
    JourneyArchetype,
    OnboardingState,
    PackingSession,
    ReminderPlan,
    Rule,
    Section,
    Statistics,
    UndoCapsule,
)

logger = logging.getLogger(__name__)

_ADAPTERS = {
    "sessions": TypeAdapter(list[PackingSession]),
    "conditions": TypeAdapter(list[Condition]),
    "rules": TypeAdapter(list[Rule]),
    "identity": TypeAdapter(Identity),
    "statistics": TypeAdapter(Statistics),
    "onboarding": TypeAdapter(OnboardingState),
}


def _clean_name(name: str, what: str = "Item") -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValueError(f"{what} name cannot be empty")
    return cleaned


def _check_quantity(quantity: int) -> int:
    if quantity < 1:
        raise ValueError("Quantity must be at least 1")
    return quantity


class Vault:
    """In-memory store of sessions, the condition catalog and profile documents."""

    def __init__(self, writer: SnapshotWriter | None = None):
        self.sessions: list[PackingSession] = []
        self.store = ConditionStore()
        self.identity = Identity()
        self.statistics = Statistics()
        self.onboarding = OnboardingState()
        self._writer = writer

    # =========================================================================
    # Persistence
    # =========================================================================

    def _document(self, name: str):
        return {
            "sessions": self.sessions,
            "conditions": self.store.conditions,
            "rules": self.store.rules,
            "identity": self.identity,
            "statistics": self.statistics,
            "onboarding": self.onboarding,
        }[name]

    def dump_document(self, name: str) -> str:
        """Serialize one document to JSON text."""
        return _ADAPTERS[name].dump_json(self._document(name)).decode()

    def _persist(self, *names: str) -> None:
        if not self._writer:
            return
        for name in names:
            self._writer.enqueue(name, self.dump_document(name))

    def _persist_all(self) -> None:
        self._persist(*DOCUMENT_NAMES)

    def save(self, session: Session) -> int:
        """Flush pending snapshots now instead of waiting for the autosave job."""
        if not self._writer:
            return 0
        return self._writer.flush(session)

    @classmethod
    def from_documents(
        cls,
        payloads: dict[str, str],
        writer: SnapshotWriter | None = None,
        seed_builtins: bool = True,
    ) -> "Vault":
        """
        Build a vault from stored JSON payloads.

        A missing document keeps its default. A document that fails
        validation is logged and also falls back to its default rather
        than blocking startup.
        """
        vault = cls(writer=writer)
        loaded = {}
        for name in DOCUMENT_NAMES:
            payload = payloads.get(name)
            if payload is None:
                continue
            try:
                loaded[name] = _ADAPTERS[name].validate_json(payload)
            except ValidationError as e:
                logger.error(f"Could not load document '{name}', using default: {e}")

        vault.sessions = loaded.get("sessions", [])
        vault.store = ConditionStore(loaded.get("conditions"), loaded.get("rules"))
        vault.identity = loaded.get("identity", Identity())
        vault.statistics = loaded.get("statistics", Statistics())
        vault.onboarding = loaded.get("onboarding", OnboardingState())

        if seed_builtins and vault.store.seed_builtins():
            vault._persist("conditions", "rules")

        logger.info(
            f"Vault loaded: {len(vault.sessions)} sessions, "
            f"{len(vault.store.conditions)} conditions, {len(vault.store.rules)} rules"
        )
        return vault

    # =========================================================================
    # Progress
    # =========================================================================

    def _refresh(self, session: PackingSession) -> None:
        """Recompute cached progress and persist everything it may have touched."""
        recalculate_progress(session, on_session_completed=self._on_session_completed)
        self._persist("sessions", "identity", "statistics")

    def _on_session_completed(self, session: PackingSession) -> None:
        self.identity.perfect_pack_streak += 1
        self.identity.longest_streak = max(
            self.identity.longest_streak, self.identity.perfect_pack_streak
        )
        self.statistics.perfect_trips += 1
        logger.info(
            f"Session '{session.title}' fully packed "
            f"(streak {self.identity.perfect_pack_streak})"
        )

    # =========================================================================
    # Sessions
    # =========================================================================

    def get_session(self, session_id: UUID) -> PackingSession | None:
        return next((s for s in self.sessions if s.id == session_id), None)

    def active_sessions(self) -> list[PackingSession]:
        """Non-archived sessions, soonest departure first."""
        active = [s for s in self.sessions if not s.is_archived]
        return sorted(active, key=lambda s: s.departure_at)

    def archived_sessions(self) -> list[PackingSession]:
        """Archived sessions, most recent departure first."""
        archived = [s for s in self.sessions if s.is_archived]
        return sorted(archived, key=lambda s: s.departure_at, reverse=True)

    def create_session(
        self,
        title: str,
        archetype: JourneyArchetype,
        departure_at: datetime,
        initial_condition_ids: list[UUID] | None = None,
    ) -> PackingSession:
        """
        Create a session seeded from the archetype template.

        Each known initial condition is applied in the given order; unknown
        condition IDs are ignored.
        """
        session = PackingSession(
            title=_clean_name(title, "Session"),
            archetype=archetype,
            departure_at=departure_at,
            sections=seed_sections(archetype),
        )

        for condition_id in initial_condition_ids or []:
            if not self.store.get_condition(condition_id):
                logger.warning(f"Ignoring unknown initial condition {condition_id}")
                continue
            apply_condition(self.store, session, condition_id)
            self.statistics.conditions_used_count += 1

        self.sessions.insert(0, session)
        self.identity.total_sessions_created += 1
        self.statistics.total_trips += 1
        logger.info(f"Created session '{session.title}' ({archetype.value})")

        self._refresh(session)
        return session

    def update_session(
        self,
        session_id: UUID,
        title: str | None = None,
        departure_at: datetime | None = None,
        reminder_plan: ReminderPlan | None = None,
    ) -> PackingSession | None:
        session = self._editable_session(session_id)
        if not session:
            return None
        new_title = _clean_name(title, "Session") if title is not None else None

        if new_title is not None:
            session.title = new_title
        if departure_at is not None:
            session.departure_at = departure_at
        if reminder_plan is not None:
            session.reminder_plan = reminder_plan

        self._refresh(session)
        return session

    def archive_session(self, session_id: UUID) -> PackingSession | None:
        return self._set_archived(session_id, True)

    def unarchive_session(self, session_id: UUID) -> PackingSession | None:
        return self._set_archived(session_id, False)

    def _set_archived(self, session_id: UUID, archived: bool) -> PackingSession | None:
        """
        Flip the archived flag.

        Progress is recomputed without the completion hook: archiving a
        fully packed session is not another perfect trip.
        """
        session = self.get_session(session_id)
        if not session:
            return None
        session.is_archived = archived
        logger.info(f"Session '{session.title}' archived={archived}")
        recalculate_progress(session)
        self._persist("sessions")
        return session

    def delete_session(self, session_id: UUID) -> bool:
        session = self.get_session(session_id)
        if not session:
            return False
        self.sessions.remove(session)
        logger.info(f"Deleted session '{session.title}'")
        self._persist("sessions")
        return True

    def duplicate_session(self, session_id: UUID) -> PackingSession | None:
        """
        Copy a session with fresh IDs and every item unpacked.

        Active conditions and rule lineage are carried over, so the copy
        can still retract the conditions it inherited.
        """
        original = self.get_session(session_id)
        if not original:
            return None

        sections = []
        for section in original.sections:
            items = [
                item.model_copy(
                    deep=True,
                    update={"id": uuid4(), "is_packed": False, "packed_at": None},
                )
                for item in section.items
            ]
            sections.append(
                Section(
                    designation=section.designation,
                    custom_name=section.custom_name,
                    sort_index=section.sort_index,
                    items=items,
                )
            )

        copy = PackingSession(
            title=f"{original.title} (copy)",
            archetype=original.archetype,
            departure_at=original.departure_at,
            active_condition_ids=set(original.active_condition_ids),
            sections=sections,
            reminder_plan=original.reminder_plan.model_copy(),
        )
        self.sessions.insert(0, copy)
        logger.info(f"Duplicated session '{original.title}'")
        self._refresh(copy)
        return copy

    def _editable_session(self, session_id: UUID) -> PackingSession | None:
        session = self.get_session(session_id)
        if session and session.is_archived:
            raise ValueError("Cannot modify archived session")
        return session

    def _locate(
        self, session_id: UUID, section_id: UUID
    ) -> tuple[PackingSession, Section] | None:
        session = self._editable_session(session_id)
        if not session:
            return None
        section = session.find_section(section_id)
        if not section:
            return None
        return session, section

    # =========================================================================
    # Conditions in sessions
    # =========================================================================

    def toggle_condition(self, session_id: UUID, condition_id: UUID) -> dict | None:
        """
        Activate or deactivate a condition for a session.

        A condition that was deleted from the catalog can still be turned
        off; turning on requires the condition to exist.

        Returns dict with the new state and the engine statistics.
        """
        session = self._editable_session(session_id)
        if not session:
            return None

        if condition_id in session.active_condition_ids:
            stats = retract_condition(self.store, session, condition_id)
            active = False
        else:
            if not self.store.get_condition(condition_id):
                return None
            stats = apply_condition(self.store, session, condition_id)
            self.statistics.conditions_used_count += 1
            active = True

        self._refresh(session)
        return {"active": active, "stats": stats}

    def preview_condition_delta(
        self, session_id: UUID, condition_id: UUID
    ) -> ConditionDelta | None:
        session = self.get_session(session_id)
        if not session:
            return None
        if (
            condition_id not in session.active_condition_ids
            and not self.store.get_condition(condition_id)
        ):
            return None
        return preview_condition_delta(self.store, session, condition_id)

    def sandbox(self, condition_ids: list[UUID]) -> list[SandboxEffect]:
        return sandbox(self.store, condition_ids)

    # =========================================================================
    # Items
    # =========================================================================

    def add_item(
        self,
        session_id: UUID,
        section_id: UUID,
        name: str,
        quantity: int = 1,
        is_critical: bool = False,
        note: str | None = None,
    ) -> Item | None:
        clean = _clean_name(name)
        _check_quantity(quantity)
        located = self._locate(session_id, section_id)
        if not located:
            return None
        session, section = located

        item = Item(
            name=clean,
            quantity=quantity,
            is_critical=is_critical,
            note=note or None,
            origin=ItemOrigin.user,
        )
        section.items.append(item)
        self._refresh(session)
        return item

    def update_item(
        self,
        session_id: UUID,
        section_id: UUID,
        item_id: UUID,
        name: str | None = None,
        quantity: int | None = None,
        note: str | None = None,
        target_section_id: UUID | None = None,
    ) -> Item | None:
        """
        Update an item's fields and optionally move it to another section.

        An empty note clears it. Origin and lineage are never changed.
        """
        clean = _clean_name(name) if name is not None else None
        if quantity is not None:
            _check_quantity(quantity)
        located = self._locate(session_id, section_id)
        if not located:
            return None
        session, section = located
        item = section.find_item(item_id)
        if not item:
            return None

        target = None
        if target_section_id is not None and target_section_id != section_id:
            target = session.find_section(target_section_id)
            if not target:
                return None

        if clean is not None:
            item.name = clean
        if quantity is not None:
            item.quantity = quantity
        if note is not None:
            item.note = note or None
        if target:
            section.remove_item(item_id)
            target.items.append(item)

        self._refresh(session)
        return item

    def delete_item(
        self, session_id: UUID, section_id: UUID, item_id: UUID
    ) -> UndoCapsule | None:
        """Delete an item, returning a capsule that restores it verbatim."""
        located = self._locate(session_id, section_id)
        if not located:
            return None
        session, section = located
        item = section.remove_item(item_id)
        if not item:
            return None

        self._refresh(session)
        return UndoCapsule(session_id=session_id, section_id=section_id, item=item)

    def restore_item(self, capsule: UndoCapsule) -> Item | None:
        """Put a deleted item back into its section, keeping id, origin and lineage."""
        located = self._locate(capsule.session_id, capsule.section_id)
        if not located:
            return None
        session, section = located
        if any(item.id == capsule.item.id for item in session.all_items()):
            raise ValueError("Item already exists in this session")

        item = capsule.item.model_copy(deep=True)
        section.items.append(item)
        self._refresh(session)
        return item

    def toggle_item_packed(
        self, session_id: UUID, section_id: UUID, item_id: UUID
    ) -> Item | None:
        located = self._locate(session_id, section_id)
        if not located:
            return None
        session, section = located
        item = section.find_item(item_id)
        if not item:
            return None

        if item.set_packed(not item.is_packed):
            self.identity.total_items_packed += 1
            self.statistics.total_items_ever_packed += 1
            if item.is_critical:
                self.statistics.critical_items_saved += 1

        self._refresh(session)
        return item

    def toggle_item_critical(
        self, session_id: UUID, section_id: UUID, item_id: UUID
    ) -> Item | None:
        located = self._locate(session_id, section_id)
        if not located:
            return None
        session, section = located
        item = section.find_item(item_id)
        if not item:
            return None

        item.is_critical = not item.is_critical
        self._refresh(session)
        return item

    # =========================================================================
    # Sections
    # =========================================================================

    def mark_section_complete(self, session_id: UUID, section_id: UUID) -> Section | None:
        located = self._locate(session_id, section_id)
        if not located:
            return None
        session, section = located

        for item in section.items:
            if item.set_packed(True):
                self.identity.total_items_packed += 1
                self.statistics.total_items_ever_packed += 1

        self._refresh(session)
        return section

    def reset_section(self, session_id: UUID, section_id: UUID) -> Section | None:
        located = self._locate(session_id, section_id)
        if not located:
            return None
        session, section = located

        for item in section.items:
            item.set_packed(False)

        self._refresh(session)
        return section

    def update_section(
        self,
        session_id: UUID,
        section_id: UUID,
        custom_name: str | None = None,
        is_collapsed: bool | None = None,
    ) -> Section | None:
        """Rename a section (an empty name restores the default) or collapse it."""
        located = self._locate(session_id, section_id)
        if not located:
            return None
        session, section = located

        if custom_name is not None:
            section.custom_name = custom_name.strip() or None
        if is_collapsed is not None:
            section.is_collapsed = is_collapsed

        self._refresh(session)
        return section

    # =========================================================================
    # Condition & rule catalog
    # =========================================================================

    def add_condition(
        self, name: str, icon: str = "bolt.circle", explanation: str = ""
    ) -> Condition:
        condition = Condition(
            name=_clean_name(name, "Condition"),
            icon=icon,
            explanation=explanation,
            is_built_in=False,
        )
        self.store.add_condition(condition)
        self._persist("conditions")
        return condition

    def update_condition(
        self,
        condition_id: UUID,
        name: str | None = None,
        icon: str | None = None,
        explanation: str | None = None,
    ) -> Condition | None:
        clean = _clean_name(name, "Condition") if name is not None else None
        condition = self.store.update_condition(condition_id, clean, icon, explanation)
        if condition:
            self._persist("conditions")
        return condition

    def delete_condition(self, condition_id: UUID) -> bool:
        deleted = self.store.delete_condition(condition_id)
        if deleted:
            self._persist("conditions", "rules")
        return deleted

    def add_rule(self, rule: Rule) -> Rule | None:
        """Add a rule to an existing condition. An empty reason gets a default."""
        rule.target_item_name = _clean_name(rule.target_item_name)
        if not self.store.get_condition(rule.condition_id):
            return None
        if not rule.reason_text.strip():
            label = rule.action.value.replace("_", " ").capitalize()
            rule.reason_text = f"{label}: {rule.target_item_name}"
        self.store.add_rule(rule)
        self._persist("conditions", "rules")
        return rule

    def delete_rule(self, rule_id: UUID) -> bool:
        deleted = self.store.delete_rule(rule_id)
        if deleted:
            self._persist("conditions", "rules")
        return deleted

    def rules_for_condition(self, condition_id: UUID) -> list[Rule] | None:
        if not self.store.get_condition(condition_id):
            return None
        return self.store.rules_for_condition(condition_id)

    # =========================================================================
    # Profile
    # =========================================================================

    def update_identity(
        self, display_name: str | None = None, avatar_emoji: str | None = None
    ) -> Identity:
        if display_name is not None:
            self.identity.display_name = _clean_name(display_name, "Display")
        if avatar_emoji is not None:
            self.identity.avatar_emoji = avatar_emoji
        self._persist("identity")
        return self.identity

    def complete_onboarding(self, step: int | None = None) -> OnboardingState:
        self.onboarding.has_completed_onboarding = True
        if step is not None:
            self.onboarding.last_onboarding_step = step
        self._persist("onboarding")
        return self.onboarding

    def export(self) -> dict:
        """Every document as JSON-compatible data, plus the export time."""
        payload = {
            name: _ADAPTERS[name].dump_python(self._document(name), mode="json")
            for name in DOCUMENT_NAMES
        }
        payload["exported_at"] = datetime.now(UTC).isoformat()
        return payload

    def reset_all_data(self) -> None:
        """Drop all sessions and custom catalog entries, then reseed built-ins."""
        self.sessions = []
        self.store.clear()
        self.identity = Identity()
        self.statistics = Statistics()
        self.onboarding = OnboardingState()
        self.store.seed_builtins()
        logger.warning("All vault data reset")
        self._persist_all()


def load_vault(
    session: Session, writer: SnapshotWriter | None, seed_builtins: bool = True
) -> Vault:
    """Load the vault from the database and make it the process-wide instance."""
    global _vault
    _vault = Vault.from_documents(read_documents(session), writer, seed_builtins)
    return _vault


_vault: Vault | None = None


def get_vault() -> Vault:
    """Dependency for getting the vault."""
    if _vault is None:
        raise RuntimeError("Vault not loaded")
    return _vault
