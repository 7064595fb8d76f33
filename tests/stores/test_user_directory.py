"""User Directory — demo accounts, exact-match lookups, unique emails."""

import pytest

from ticketapp.schemas.auth import User
from ticketapp.stores.user_directory import UserDirectory


def test_demo_accounts_are_seeded():
    users = UserDirectory.with_demo_accounts()
    assert len(users) == 2
    assert users.find_by_email("demo@ticketapp.com").name == "Demo User"
    assert users.find_by_email("john@example.com").id == "2"


def test_each_call_builds_an_independent_directory():
    first = UserDirectory.with_demo_accounts()
    second = UserDirectory.with_demo_accounts()
    first.add(User(id="3", name="New", email="new@example.com", password="secret1"))
    assert len(second) == 2


def test_find_by_credentials_requires_both_to_match(users):
    assert users.find_by_credentials("demo@ticketapp.com", "demo123").id == "1"
    assert users.find_by_credentials("demo@ticketapp.com", "wrong") is None
    assert users.find_by_credentials("nobody@example.com", "demo123") is None


def test_email_compare_is_case_sensitive(users):
    assert users.find_by_email("Demo@TicketApp.com") is None


def test_add_rejects_duplicate_email(users):
    with pytest.raises(ValueError):
        users.add(User(id="9", name="Clone", email="demo@ticketapp.com", password="x" * 6))
    assert len(users) == 2
