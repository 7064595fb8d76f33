"""Session Store — the single active-session slot over the key-value substrate.

Invariants:
    - At most one session is persisted, under SESSION_KEY
    - save() overwrites unconditionally (last write wins)
    - get() returns None when the slot is empty or its payload is malformed
      (with the default LenientDecoder)
    - clear() is idempotent
"""

import logging

from pydantic import TypeAdapter

from ticketapp.core.domain_types import SESSION_KEY
from ticketapp.core.repository_protocols import KeyValueStore, StateDecoder
from ticketapp.core.state_decoding import LenientDecoder
from ticketapp.schemas.auth import Session

logger = logging.getLogger(__name__)

_SESSION_ADAPTER = TypeAdapter(Session)


class SessionStore:
    """Owns raw read/write access to the persisted session."""

    def __init__(self, storage: KeyValueStore, decoder: StateDecoder | None = None):
        self._storage = storage
        self._decoder = decoder or LenientDecoder()

    def save(self, session: Session) -> None:
        self._storage.set_item(SESSION_KEY, session.model_dump_json())
        logger.info("Session saved", extra={"user_id": session.user.id})

    def get(self) -> Session | None:
        raw = self._storage.get_item(SESSION_KEY)
        if raw is None:
            return None
        return self._decoder.decode(SESSION_KEY, raw, _SESSION_ADAPTER)

    def clear(self) -> None:
        self._storage.remove_item(SESSION_KEY)
        logger.info("Session cleared")
