"""Storage Entry ORM — one row per key of the file-backed key-value substrate.

Invariants:
    - key is the primary key (at most one value per key)
    - value is the raw string payload; parsing belongs to the stores
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from ticketapp.db.base import Base


class StorageEntry(Base):
    """A single key → value record."""
    __tablename__ = "storage_entries"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
