"""Snapshot persistence for vault documents.

Mutations never wait on the database. Each mutation serializes the
documents it touched into JSON strings on the spot and hands them to the
SnapshotWriter. The scheduler later writes the newest snapshot of each
document to the vaultdocument table, one transaction per flush. Snapshots
are plain strings, so a later mutation of the live tree can never leak
into a pending write.
"""
import logging
import threading
from datetime import UTC, datetime

from sqlmodel import Session, select

from packwise.models import VaultDocument

logger = logging.getLogger(__name__)

DOCUMENT_NAMES = ("sessions", "conditions", "rules", "identity", "statistics", "onboarding")


class SnapshotWriter:
    """Collects the latest JSON snapshot per document until flushed."""

    def __init__(self):
        self._pending: dict[str, str] = {}
        # Flushes run on the scheduler's worker thread
        self._lock = threading.Lock()

    def enqueue(self, name: str, payload: str) -> None:
        with self._lock:
            self._pending[name] = payload

    def pending_names(self) -> list[str]:
        with self._lock:
            return sorted(self._pending)

    def flush(self, session: Session) -> int:
        """
        Write all pending snapshots in a single transaction.

        On failure the batch is put back (unless a newer snapshot of the same
        document arrived meanwhile) and the error is re-raised.

        Returns the number of documents written.
        """
        with self._lock:
            batch, self._pending = self._pending, {}

        if not batch:
            return 0

        try:
            for name, payload in batch.items():
                document = session.get(VaultDocument, name)
                if document:
                    document.payload = payload
                    document.updated_at = datetime.now(UTC)
                else:
                    document = VaultDocument(name=name, payload=payload)
                session.add(document)
            session.commit()
        except Exception as e:
            session.rollback()
            with self._lock:
                for name, payload in batch.items():
                    self._pending.setdefault(name, payload)
            logger.error(f"Snapshot flush failed: {e}")
            raise

        logger.info(f"Flushed {len(batch)} documents: {sorted(batch)}")
        return len(batch)


def read_documents(session: Session) -> dict[str, str]:
    """Read every stored document payload keyed by name."""
    documents = session.exec(select(VaultDocument)).all()
    return {document.name: document.payload for document in documents}


snapshot_writer = SnapshotWriter()
