"""Stored JSON document model for vault persistence.

This module defines the VaultDocument table. Each persisted document
(sessions, conditions, rules, identity, statistics, onboarding) is a single
row keyed by name and holding the full JSON payload. Saving overwrites the
row inside one transaction, so a reader never sees half a document.
"""

from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class VaultDocument(SQLModel, table=True):
    """One independently persisted JSON document.

    Attributes:
        name: Document name, e.g. "sessions" or "rules".
        payload: JSON text exactly as serialized at mutation time.
        updated_at: When the row was last written.
    """
    name: str = Field(primary_key=True)
    payload: str
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
