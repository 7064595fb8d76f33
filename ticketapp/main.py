"""TicketApp — composition root wiring substrate, stores and services.

Invariants:
    - The user directory is built here, once, seeded with the demo accounts
    - Both stores share one substrate instance
    - Nothing is wired through module-level singletons; every call builds a fresh app
"""

import asyncio
import logging
from dataclasses import dataclass

from ticketapp.config import Settings, get_settings
from ticketapp.core.repository_protocols import KeyValueStore, StateDecoder
from ticketapp.core.state_decoding import LenientDecoder, StrictDecoder
from ticketapp.infrastructure.kv_store import InMemoryKeyValueStore, SqlKeyValueStore
from ticketapp.infrastructure.observability import setup_logging
from ticketapp.services.auth_service import AuthService
from ticketapp.services.latency import Sleeper, SimulatedLatency
from ticketapp.services.ticket_service import TicketService
from ticketapp.stores.session_store import SessionStore
from ticketapp.stores.ticket_store import TicketStore
from ticketapp.stores.user_directory import UserDirectory

logger = logging.getLogger(__name__)


@dataclass
class TicketApp:
    """Everything the presentation layer calls into."""
    auth: AuthService
    tickets: TicketService
    storage: KeyValueStore


def build_storage(settings: Settings) -> KeyValueStore:
    if settings.storage_backend == "memory":
        return InMemoryKeyValueStore()
    return SqlKeyValueStore(settings.storage_url)


def create_app(
    settings: Settings | None = None,
    *,
    storage: KeyValueStore | None = None,
    sleep: Sleeper = asyncio.sleep,
) -> TicketApp:
    """Build a TicketApp from settings (defaults to get_settings())."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)

    storage = storage if storage is not None else build_storage(settings)
    decoder: StateDecoder = StrictDecoder() if settings.strict_state else LenientDecoder()

    auth = AuthService(
        SessionStore(storage, decoder),
        UserDirectory.with_demo_accounts(),
        SimulatedLatency(settings.auth_latency_ms, sleep),
    )
    tickets = TicketService(
        TicketStore(storage, decoder),
        SimulatedLatency(settings.ticket_latency_ms, sleep),
    )
    logger.info(
        f"TicketApp started ({settings.storage_backend} storage)",
        extra={"operation": "startup"},
    )
    return TicketApp(auth=auth, tickets=tickets, storage=storage)
