"""Boundary Protocols — contracts between the stores and their collaborators.

Invariants:
    - Stores never touch a concrete substrate; they receive a KeyValueStore
    - Persisted-payload parsing goes through a StateDecoder so the corrupt-data
      policy can change without touching stores or services
    - All methods are synchronous: a store's read-modify-write never suspends
"""

from typing import Protocol, TypeVar

from pydantic import TypeAdapter

T = TypeVar("T")


class KeyValueStore(Protocol):
    """Local string key → string value substrate (browser local storage shape)."""
    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class StateDecoder(Protocol):
    """Parses a raw persisted payload. Returns None when the payload is unusable."""
    def decode(self, key: str, raw: str, adapter: TypeAdapter[T]) -> T | None: ...
