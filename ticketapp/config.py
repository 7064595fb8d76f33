"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - Latencies are non-negative milliseconds; 0 disables the pause

Design Decisions:
    - Defaults reproduce the demo: file-backed storage, 500 ms auth, 300 ms tickets
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage substrate
    storage_backend: Literal["memory", "sqlite"] = "sqlite"
    storage_url: str = "sqlite:///ticketapp.db"
    # Raise CorruptStateError instead of treating malformed payloads as absent
    strict_state: bool = False

    # Simulated network latency
    auth_latency_ms: int = Field(500, ge=0)
    ticket_latency_ms: int = Field(300, ge=0)

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
