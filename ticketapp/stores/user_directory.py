"""User Directory — in-memory user records consulted by AuthService.

Invariants:
    - No two users share an email (case-sensitive compare)
    - Lives only as long as the instance: never persisted
    - with_demo_accounts() builds a fresh directory holding the two demo users

Design Decisions:
    - Explicit container passed to AuthService instead of a module-level list,
      so each test builds its own
    - Passwords stored and compared as plain text: no hashing scheme is defined
"""

from ticketapp.schemas.auth import User

DEMO_ACCOUNTS = (
    {"id": "1", "name": "Demo User", "email": "demo@ticketapp.com", "password": "demo123"},
    {"id": "2", "name": "John Doe", "email": "john@example.com", "password": "password123"},
)


class UserDirectory:
    """Ordered collection of user records keyed by unique email."""

    def __init__(self, users: list[User] | None = None):
        self._users: list[User] = []
        for user in users or []:
            self.add(user)

    @classmethod
    def with_demo_accounts(cls) -> "UserDirectory":
        return cls([User.model_validate(account) for account in DEMO_ACCOUNTS])

    def __len__(self) -> int:
        return len(self._users)

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users if u.email == email), None)

    def find_by_credentials(self, email: str, password: str) -> User | None:
        return next(
            (u for u in self._users if u.email == email and u.password == password),
            None,
        )

    def add(self, user: User) -> None:
        """Append a user. Raises ValueError on a duplicate email."""
        if self.find_by_email(user.email) is not None:
            raise ValueError(f"duplicate email in user directory: {user.email}")
        self._users.append(user)
