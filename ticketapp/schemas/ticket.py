"""Ticket Schemas — stored ticket records, create/update forms and dashboard stats.

Invariants:
    - TicketForm.title: required, 3-100 chars; description: optional, <= 500 chars
    - TicketForm.status: required enum; priority: optional enum
    - TicketPatch applies the same rules to whichever fields are present;
      title and status may not be cleared (explicit None is rejected)
    - Ticket (the stored record) is not length-checked: persisted data is trusted
      once its shape parses
    - Serialized with camelCase keys; absent optionals are omitted

Design Decisions:
    - Separate TicketPatch over TicketForm with all-optional fields: a patch
      only carries the keys the caller actually sent (model_fields_set)
"""

from pydantic import AwareDatetime, BaseModel, field_validator

from ticketapp.core.domain_types import TicketPriority, TicketStatus
from ticketapp.schemas.auth import CAMEL_CONFIG
from ticketapp.schemas.field_rules import check_choice, check_length


class Ticket(BaseModel):
    """Stored ticket: one element of the ticketapp_tickets array."""
    model_config = CAMEL_CONFIG

    id: str
    title: str
    description: str | None = None
    status: TicketStatus
    priority: TicketPriority | None = None
    created_at: AwareDatetime
    updated_at: AwareDatetime


class TicketForm(BaseModel):
    """Full ticket form, validated before create."""
    model_config = CAMEL_CONFIG

    title: str
    description: str | None = None
    status: TicketStatus
    priority: TicketPriority | None = None

    @field_validator("title")
    @classmethod
    def valid_title(cls, v: str) -> str:
        return check_length(v, "Title", min_length=3, max_length=100)

    @field_validator("description")
    @classmethod
    def valid_description(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return check_length(v, "Description", max_length=500, required=False)

    @field_validator("status", mode="before")
    @classmethod
    def valid_status(cls, v: object) -> TicketStatus:
        return check_choice(v, TicketStatus, "Status")

    @field_validator("priority", mode="before")
    @classmethod
    def valid_priority(cls, v: object) -> TicketPriority | None:
        if v is None:
            return v
        return check_choice(v, TicketPriority, "Priority")


class TicketPatch(BaseModel):
    """Partial ticket form, validated before update."""
    model_config = CAMEL_CONFIG

    title: str | None = None
    description: str | None = None
    status: TicketStatus | None = None
    priority: TicketPriority | None = None

    @field_validator("title")
    @classmethod
    def valid_title(cls, v: str | None) -> str:
        if v is None:
            return check_length("", "Title")
        return check_length(v, "Title", min_length=3, max_length=100)

    @field_validator("description")
    @classmethod
    def valid_description(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return check_length(v, "Description", max_length=500, required=False)

    @field_validator("status", mode="before")
    @classmethod
    def valid_status(cls, v: object) -> TicketStatus:
        return check_choice(v, TicketStatus, "Status")

    @field_validator("priority", mode="before")
    @classmethod
    def valid_priority(cls, v: object) -> TicketPriority | None:
        if v is None:
            return v
        return check_choice(v, TicketPriority, "Priority")

    def changes(self) -> dict:
        """Only the fields the caller supplied, keyed by attribute name."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class DashboardStats(BaseModel):
    """Derived counts over the whole ticket collection. Never stored."""
    model_config = CAMEL_CONFIG

    total_tickets: int
    open_tickets: int
    in_progress_tickets: int
    closed_tickets: int
