"""Ticket Service — validated CRUD and dashboard stats over the TicketStore.

Invariants:
    - create/update validate form data first; on failure the store is never called
    - Every operation returns Ok or Err; NotFound and storage faults come back as Err
    - Every store-touching operation waits the simulated latency first
    - Once validation passes, the store call completes even if the caller
      stops waiting during the pause
    - update applies only the fields present in the form data
"""

import logging
from typing import Any

from ticketapp.core.result import Result, capture
from ticketapp.schemas.ticket import DashboardStats, Ticket
from ticketapp.schemas.validation import validate_ticket, validate_ticket_patch
from ticketapp.services.latency import SimulatedLatency
from ticketapp.stores.ticket_store import TicketStore

logger = logging.getLogger(__name__)

RECENT_TICKETS_LIMIT = 5


class TicketService:
    """Application-facing ticket operations."""

    def __init__(self, store: TicketStore, latency: SimulatedLatency | None = None):
        self._store = store
        self._latency = latency or SimulatedLatency.none()

    async def list_tickets(self) -> Result[list[Ticket]]:
        return await self._latency.run(capture, self._store.list_all)

    async def get_ticket(self, ticket_id: str) -> Result[Ticket | None]:
        return await self._latency.run(capture, self._store.get_by_id, ticket_id)

    async def create_ticket(self, form_data: Any) -> Result[Ticket]:
        validated = validate_ticket(form_data)
        if validated.is_err:
            logger.info(
                "Ticket form rejected", extra={"error_code": "VALIDATION_ERROR"},
            )
            return validated
        return await self._latency.run(capture, self._store.insert, validated.value)

    async def update_ticket(self, ticket_id: str, form_data: Any) -> Result[Ticket]:
        validated = validate_ticket_patch(form_data)
        if validated.is_err:
            logger.info(
                "Ticket update rejected",
                extra={"ticket_id": ticket_id, "error_code": "VALIDATION_ERROR"},
            )
            return validated
        return await self._latency.run(
            capture, self._store.replace, ticket_id, validated.value.changes(),
        )

    async def delete_ticket(self, ticket_id: str) -> Result[None]:
        return await self._latency.run(capture, self._store.remove, ticket_id)

    async def dashboard_stats(self) -> Result[DashboardStats]:
        return await self._latency.run(capture, self._store.stats)

    async def recent_tickets(
        self, limit: int = RECENT_TICKETS_LIMIT,
    ) -> Result[list[Ticket]]:
        """Newest tickets first, as shown in the dashboard activity view.

        A negative limit is treated as zero.
        """
        limit = max(limit, 0)
        return await self._latency.run(capture, lambda: self._store.list_all()[:limit])
