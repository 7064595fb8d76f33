"""State Decoding — lenient and strict policies for malformed persisted payloads.

Invariants:
    - LenientDecoder never raises: bad JSON or a bad shape yields None
    - StrictDecoder raises CorruptStateError for the same inputs
    - Neither decoder repairs or deletes the stored payload
"""

import logging
from typing import TypeVar

from pydantic import TypeAdapter, ValidationError

from ticketapp.core.errors import CorruptStateError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LenientDecoder:
    """Treat malformed payloads as absent."""

    def decode(self, key: str, raw: str, adapter: TypeAdapter[T]) -> T | None:
        try:
            return adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(
                f"Ignoring malformed payload: {e.error_count()} error(s)",
                extra={"storage_key": key},
            )
            return None


class StrictDecoder:
    """Surface malformed payloads as CorruptStateError."""

    def decode(self, key: str, raw: str, adapter: TypeAdapter[T]) -> T | None:
        try:
            return adapter.validate_json(raw)
        except ValidationError as e:
            raise CorruptStateError(key, f"{e.error_count()} validation error(s)")
