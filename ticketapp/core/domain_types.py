"""Domain Types — enums, storage keys and the clock shared by schemas, stores and services.

Invariants:
    - TicketStatus and TicketPriority values are the persisted wire values
    - All timestamps are timezone-aware UTC
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Callable


# ─── Enums ───────────────────────────────────────────────────────

class TicketStatus(str, Enum):
    """Ticket lifecycle states."""
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"


class TicketPriority(str, Enum):
    """Optional ticket priority."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ─── Storage Keys ────────────────────────────────────────────────

SESSION_KEY = "ticketapp_session"
TICKETS_KEY = "ticketapp_tickets"


# ─── Clock ───────────────────────────────────────────────────────

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
