"""Ticket Store — the ordered ticket collection over the key-value substrate.

Invariants:
    - Ticket ids are unique within the collection and never change
    - Collection order is newest-first on insert (prepend); replace keeps position
    - First read of an empty substrate seeds SEED_TICKETS once and persists them
    - A malformed payload reads as the seed set (with the default LenientDecoder)
      and is left untouched until the next write
    - created_at == updated_at on insert; replace moves updated_at strictly forward
    - Every mutation is a whole-collection read-modify-write with no suspension point

Design Decisions:
    - Stats recomputed by a full scan on every call (core/ticket_stats.py):
      the dataset is local and small
    - Clock and id factory injected: deterministic tests without patching
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable

from pydantic import TypeAdapter

from ticketapp.core.domain_types import TICKETS_KEY, Clock, utc_now
from ticketapp.core.errors import TicketNotFoundError
from ticketapp.core.repository_protocols import KeyValueStore, StateDecoder
from ticketapp.core.state_decoding import LenientDecoder
from ticketapp.core.ticket_stats import compute_dashboard_stats
from ticketapp.schemas.ticket import DashboardStats, Ticket, TicketForm

logger = logging.getLogger(__name__)

_TICKETS_ADAPTER = TypeAdapter(list[Ticket])

MUTABLE_FIELDS = frozenset({"title", "description", "status", "priority"})

SEED_TICKETS = (
    {
        "id": "1",
        "title": "Setup project repository",
        "description": "Create initial project structure and setup Git repository",
        "status": "closed",
        "priority": "high",
        "createdAt": datetime(2025, 10, 20, tzinfo=timezone.utc),
        "updatedAt": datetime(2025, 10, 21, tzinfo=timezone.utc),
    },
    {
        "id": "2",
        "title": "Design landing page",
        "description": "Create wireframes and mockups for the landing page",
        "status": "in_progress",
        "priority": "high",
        "createdAt": datetime(2025, 10, 22, tzinfo=timezone.utc),
        "updatedAt": datetime(2025, 10, 23, tzinfo=timezone.utc),
    },
    {
        "id": "3",
        "title": "Implement authentication",
        "description": "Add login and signup functionality with form validation",
        "status": "open",
        "priority": "medium",
        "createdAt": datetime(2025, 10, 23, tzinfo=timezone.utc),
        "updatedAt": datetime(2025, 10, 23, tzinfo=timezone.utc),
    },
)


def seed_tickets() -> list[Ticket]:
    """Fresh copies of the demo tickets."""
    return [Ticket.model_validate(data) for data in SEED_TICKETS]


def new_ticket_id() -> str:
    return f"ticket_{uuid.uuid4().hex}"


class TicketStore:
    """Owns raw read/modify/write access to the persisted ticket collection."""

    def __init__(
        self,
        storage: KeyValueStore,
        decoder: StateDecoder | None = None,
        clock: Clock = utc_now,
        id_factory: Callable[[], str] = new_ticket_id,
    ):
        self._storage = storage
        self._decoder = decoder or LenientDecoder()
        self._clock = clock
        self._id_factory = id_factory

    def list_all(self) -> list[Ticket]:
        """All tickets in stored order, seeding an empty substrate first."""
        raw = self._storage.get_item(TICKETS_KEY)
        if raw is None:
            tickets = seed_tickets()
            self._write(tickets)
            logger.info(
                f"Seeded {len(tickets)} demo tickets",
                extra={"storage_key": TICKETS_KEY},
            )
            return tickets
        tickets = self._decoder.decode(TICKETS_KEY, raw, _TICKETS_ADAPTER)
        if tickets is None:
            return seed_tickets()
        return tickets

    def get_by_id(self, ticket_id: str) -> Ticket | None:
        return next((t for t in self.list_all() if t.id == ticket_id), None)

    def insert(self, form: TicketForm) -> Ticket:
        """Create a ticket from validated form data and prepend it."""
        tickets = self.list_all()
        existing_ids = {t.id for t in tickets}
        ticket_id = self._id_factory()
        while ticket_id in existing_ids:
            ticket_id = self._id_factory()

        now = self._clock()
        ticket = Ticket(
            id=ticket_id,
            title=form.title,
            description=form.description,
            status=form.status,
            priority=form.priority,
            created_at=now,
            updated_at=now,
        )
        tickets.insert(0, ticket)
        self._write(tickets)
        logger.info("Ticket created", extra={"ticket_id": ticket.id})
        return ticket

    def replace(self, ticket_id: str, changes: dict) -> Ticket:
        """Shallow-merge changes onto a ticket in place. Raises TicketNotFoundError."""
        tickets = self.list_all()
        index = next(
            (i for i, t in enumerate(tickets) if t.id == ticket_id), None,
        )
        if index is None:
            raise TicketNotFoundError(ticket_id)

        current = tickets[index]
        update = {k: v for k, v in changes.items() if k in MUTABLE_FIELDS}
        update["updated_at"] = self._next_timestamp(current.updated_at)
        updated = current.model_copy(update=update)
        tickets[index] = updated
        self._write(tickets)
        logger.info("Ticket updated", extra={"ticket_id": ticket_id})
        return updated

    def remove(self, ticket_id: str) -> None:
        """Delete a ticket. Raises TicketNotFoundError."""
        tickets = self.list_all()
        remaining = [t for t in tickets if t.id != ticket_id]
        if len(remaining) == len(tickets):
            raise TicketNotFoundError(ticket_id)
        self._write(remaining)
        logger.info("Ticket deleted", extra={"ticket_id": ticket_id})

    def stats(self) -> DashboardStats:
        return compute_dashboard_stats(self.list_all())

    def _next_timestamp(self, previous: datetime) -> datetime:
        now = self._clock()
        if now > previous:
            return now
        return previous + timedelta(microseconds=1)

    def _write(self, tickets: list[Ticket]) -> None:
        payload = _TICKETS_ADAPTER.dump_json(
            tickets, by_alias=True, exclude_none=True,
        )
        self._storage.set_item(TICKETS_KEY, payload.decode())
