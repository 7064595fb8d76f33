"""Ticket Stats — pure computation of dashboard counts from the ticket collection.

Invariants:
    - Recomputed from the full list on every call (no cache, no staleness window)
    - open + in_progress + closed == total for any list of valid tickets
    - Never raises; an empty list yields all zeros
"""

from collections.abc import Iterable

from ticketapp.core.domain_types import TicketStatus
from ticketapp.schemas.ticket import DashboardStats, Ticket


def compute_dashboard_stats(tickets: Iterable[Ticket]) -> DashboardStats:
    """Count tickets by status. Pure, no IO."""
    tickets = list(tickets)
    return DashboardStats(
        total_tickets=len(tickets),
        open_tickets=sum(1 for t in tickets if t.status == TicketStatus.OPEN),
        in_progress_tickets=sum(
            1 for t in tickets if t.status == TicketStatus.IN_PROGRESS
        ),
        closed_tickets=sum(1 for t in tickets if t.status == TicketStatus.CLOSED),
    )
