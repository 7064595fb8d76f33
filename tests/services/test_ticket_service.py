"""Ticket Service — validated CRUD, Result outcomes and dashboard stats.

Invariants:
    - Invalid form data never reaches the store (substrate stays untouched)
    - New tickets appear first with createdAt == updatedAt
    - Updates touch only patched fields and keep list position
    - open + in_progress + closed == total after any operation sequence
"""

import asyncio
import json

import pytest

from ticketapp.core.domain_types import TICKETS_KEY, TicketPriority, TicketStatus
from ticketapp.core.errors import (
    CorruptStateError,
    TicketNotFoundError,
    ValidationFailedError,
)
from ticketapp.core.state_decoding import StrictDecoder
from ticketapp.services.latency import SimulatedLatency
from ticketapp.services.ticket_service import TicketService
from ticketapp.stores.ticket_store import TicketStore


def _assert_stats_consistent(stats):
    assert (
        stats.open_tickets + stats.in_progress_tickets + stats.closed_tickets
        == stats.total_tickets
    )


async def test_created_ticket_is_listed_first(ticket_service, ticket_form):
    created = (await ticket_service.create_ticket(ticket_form)).value
    tickets = (await ticket_service.list_tickets()).value

    assert tickets[0] == created
    assert created.created_at == created.updated_at
    assert created.title == "Fix login redirect"
    assert created.priority is TicketPriority.HIGH
    assert [t.id for t in tickets].count(created.id) == 1


async def test_invalid_create_never_touches_store(ticket_service, storage):
    result = await ticket_service.create_ticket({"title": "ab", "status": "open"})
    assert isinstance(result.error, ValidationFailedError)
    assert result.error.field_errors == {"title": "Title must be at least 3 characters"}
    assert storage.get_item(TICKETS_KEY) is None


async def test_get_ticket_returns_none_for_unknown_id(ticket_service):
    result = await ticket_service.get_ticket("missing")
    assert result.is_ok
    assert result.value is None


async def test_update_changes_only_patched_fields(ticket_service):
    before = (await ticket_service.get_ticket("3")).value
    result = await ticket_service.update_ticket("3", {"status": "in_progress"})
    after = result.value

    assert after.status is TicketStatus.IN_PROGRESS
    assert after.title == before.title
    assert after.description == before.description
    assert after.priority == before.priority
    assert after.created_at == before.created_at
    assert after.updated_at > before.updated_at
    assert [t.id for t in (await ticket_service.list_tickets()).value] == ["1", "2", "3"]


async def test_update_created_ticket_keeps_it_first(ticket_service, ticket_form):
    created = (await ticket_service.create_ticket(ticket_form)).value
    updated = (await ticket_service.update_ticket(created.id, {"title": "Renamed"})).value
    tickets = (await ticket_service.list_tickets()).value
    assert tickets[0].id == created.id
    assert tickets[0].title == "Renamed"
    assert updated.updated_at > created.updated_at


async def test_invalid_update_leaves_ticket_unchanged(ticket_service):
    before = (await ticket_service.get_ticket("1")).value
    result = await ticket_service.update_ticket("1", {"priority": "urgent"})
    assert isinstance(result.error, ValidationFailedError)
    assert "priority" in result.error.field_errors
    assert (await ticket_service.get_ticket("1")).value == before


async def test_update_unknown_id_returns_not_found(ticket_service):
    result = await ticket_service.update_ticket("missing", {"title": "Valid title"})
    assert isinstance(result.error, TicketNotFoundError)
    assert result.error.code == "TICKET_NOT_FOUND"


async def test_update_validation_runs_before_lookup(ticket_service):
    result = await ticket_service.update_ticket("missing", {"title": "x"})
    assert isinstance(result.error, ValidationFailedError)


async def test_delete_removes_exactly_one(ticket_service):
    before = len((await ticket_service.list_tickets()).value)
    assert (await ticket_service.delete_ticket("2")).is_ok
    assert (await ticket_service.get_ticket("2")).value is None
    assert len((await ticket_service.list_tickets()).value) == before - 1


async def test_delete_unknown_id_returns_not_found(ticket_service):
    result = await ticket_service.delete_ticket("missing")
    assert isinstance(result.error, TicketNotFoundError)
    assert len((await ticket_service.list_tickets()).value) == 3


async def test_dashboard_stats_stay_consistent_across_operations(ticket_service, ticket_form):
    _assert_stats_consistent((await ticket_service.dashboard_stats()).value)

    created = (await ticket_service.create_ticket(ticket_form)).value
    _assert_stats_consistent((await ticket_service.dashboard_stats()).value)

    await ticket_service.update_ticket(created.id, {"status": "closed"})
    await ticket_service.update_ticket("3", {"status": "in_progress"})
    _assert_stats_consistent((await ticket_service.dashboard_stats()).value)

    await ticket_service.delete_ticket("1")
    stats = (await ticket_service.dashboard_stats()).value
    _assert_stats_consistent(stats)
    assert stats.total_tickets == 3
    assert stats.open_tickets == 0
    assert stats.in_progress_tickets == 2
    assert stats.closed_tickets == 1


async def test_recent_tickets_are_newest_first_and_limited(ticket_service, ticket_form):
    for i in range(4):
        await ticket_service.create_ticket({**ticket_form, "title": f"Ticket number {i}"})
    recent = (await ticket_service.recent_tickets()).value
    assert len(recent) == 5
    assert recent[0].title == "Ticket number 3"
    assert [t.id for t in (await ticket_service.recent_tickets(limit=2)).value] == [
        t.id for t in recent[:2]
    ]


async def test_corrupt_state_is_err_with_strict_decoder(storage):
    storage.set_item(TICKETS_KEY, "{not json")
    service = TicketService(TicketStore(storage, decoder=StrictDecoder()))
    result = await service.list_tickets()
    assert isinstance(result.error, CorruptStateError)


async def test_corrupt_state_falls_back_to_seed_by_default(ticket_service, storage):
    storage.set_item(TICKETS_KEY, "{not json")
    tickets = (await ticket_service.list_tickets()).value
    assert [t.id for t in tickets] == ["1", "2", "3"]


async def test_store_operations_wait_configured_latency(ticket_store, recording_sleep, ticket_form):
    service = TicketService(ticket_store, SimulatedLatency(300, recording_sleep))
    await service.list_tickets()
    await service.create_ticket(ticket_form)
    await service.create_ticket({"title": ""})
    assert recording_sleep.calls == [0.3, 0.3]


async def test_update_over_naive_timestamps_returns_err(ticket_service, storage):
    storage.set_item(TICKETS_KEY, json.dumps([{
        "id": "9",
        "title": "Imported ticket",
        "status": "open",
        "createdAt": "2025-10-20T00:00:00",
        "updatedAt": "2025-10-20T00:00:00",
    }]))
    result = await ticket_service.update_ticket("9", {"title": "Renamed"})
    assert isinstance(result.error, TicketNotFoundError)


async def test_recent_tickets_negative_limit_is_empty(ticket_service):
    assert (await ticket_service.recent_tickets(limit=-1)).value == []


# --- Cancellation -------------------------------------------------------------

async def test_create_completes_after_caller_stops_waiting(ticket_store, ticket_form, gated_sleep):
    latency = SimulatedLatency(300, gated_sleep)
    service = TicketService(ticket_store, latency)
    caller = asyncio.create_task(service.create_ticket(ticket_form))
    await gated_sleep.entered.wait()
    caller.cancel()
    with pytest.raises(asyncio.CancelledError):
        await caller

    gated_sleep.release()
    await latency.drain()
    assert ticket_store.list_all()[0].title == "Fix login redirect"


async def test_delete_completes_after_timeout(ticket_store, gated_sleep):
    latency = SimulatedLatency(300, gated_sleep)
    service = TicketService(ticket_store, latency)
    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(service.delete_ticket("2"), timeout=0.01)

    gated_sleep.release()
    await latency.drain()
    assert [t.id for t in ticket_store.list_all()] == ["1", "3"]
