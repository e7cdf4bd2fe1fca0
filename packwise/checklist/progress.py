"""Bottom-up recomputation of cached progress counters."""
from collections.abc import Callable

from packwise.models import ItemOrigin, PackingSession, SectionProgress, SessionProgress


def recalculate_progress(
    session: PackingSession,
    on_session_completed: Callable[[PackingSession], None] | None = None,
) -> SessionProgress:
    """
    Recompute section and session progress from the live item tree.

    If the session is fully packed, ``on_session_completed`` is called
    once for this pass. A session that stays at 100% triggers the callback
    again on every later recalculation.
    """
    total = packed = critical = rule_added = 0

    for section in session.sections:
        s_total = len(section.items)
        s_packed = sum(1 for item in section.items if item.is_packed)
        s_critical = sum(
            1 for item in section.items if item.is_critical and not item.is_packed
        )
        rule_added += sum(1 for item in section.items if item.origin == ItemOrigin.rule)

        section.progress = SectionProgress(
            total_cells=s_total,
            packed_cells=s_packed,
            critical_remaining=s_critical,
        )
        total += s_total
        packed += s_packed
        critical += s_critical

    session.progress = SessionProgress(
        total_cells=total,
        packed_cells=packed,
        critical_remaining=critical,
        rule_added_count=rule_added,
    )

    if session.progress.is_complete and on_session_completed:
        on_session_completed(session)

    return session.progress
