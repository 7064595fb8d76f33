"""Key-Value Substrate — in-memory and SQLite-backed implementations of KeyValueStore.

Invariants:
    - get_item returns None for absent keys, never raises for them
    - set_item overwrites; remove_item is idempotent
    - Every SqlKeyValueStore call commits or rolls back before returning
    - All SQLAlchemy exceptions mapped to StorageError (core/errors.py)

Design Decisions:
    - Synchronous engine: the substrate is a local, synchronous store and a
      store's read-modify-write must not suspend
    - Table created on construction (create_all): a single fixed table
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as OrmSession, sessionmaker

from ticketapp.core.errors import ErrorContext, StorageError
from ticketapp.db.base import Base
from ticketapp.models.storage_entry import StorageEntry

logger = logging.getLogger(__name__)


class InMemoryKeyValueStore:
    """Process-local dict substrate. Contents vanish with the instance."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class SqlKeyValueStore:
    """File-backed substrate on a single SQLAlchemy table."""

    def __init__(self, database_url: str):
        self.engine = create_engine(database_url)
        Base.metadata.create_all(self.engine)
        self._session_factory = sessionmaker(
            self.engine, class_=OrmSession, expire_on_commit=False,
        )

    @contextmanager
    def _session(self, operation: str, key: str) -> Iterator[OrmSession]:
        """Provide session with auto-rollback; map driver errors to StorageError."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(
                f"Storage error: {e}",
                extra={"storage_key": key, "operation": operation},
            )
            raise StorageError(
                "Key-value operation failed", operation,
                ErrorContext(storage_key=key),
            )
        finally:
            session.close()

    def get_item(self, key: str) -> str | None:
        with self._session("get", key) as session:
            entry = session.execute(
                select(StorageEntry).where(StorageEntry.key == key),
            ).scalar_one_or_none()
            return entry.value if entry else None

    def set_item(self, key: str, value: str) -> None:
        with self._session("set", key) as session:
            entry = session.get(StorageEntry, key)
            if entry is None:
                session.add(StorageEntry(key=key, value=value))
            else:
                entry.value = value

    def remove_item(self, key: str) -> None:
        with self._session("remove", key) as session:
            entry = session.get(StorageEntry, key)
            if entry is not None:
                session.delete(entry)

    def dispose(self) -> None:
        self.engine.dispose()
