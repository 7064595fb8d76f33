"""Auth Service — login, signup and logout against the user directory.

Invariants:
    - login() matches email AND password exactly (case-sensitive); any mismatch
      is InvalidCredentialsError, whatever field was wrong
    - signup() with a known email returns EmailAlreadyExistsError and leaves the
      directory and the persisted session untouched
    - A successful login/signup mints a fresh token, persists the session
      (overwriting any prior one) and returns it
    - logout() always succeeds
    - Expected failures come back as Err, never raised

Design Decisions:
    - Latency and directory lookup run in one shielded task: a caller that
      stops waiting does not abort the login or signup
    - *_form() variants validate raw form data first; invalid forms never reach
      the directory
"""

import logging
import uuid
from typing import Any, Callable

from ticketapp.core.errors import EmailAlreadyExistsError, InvalidCredentialsError
from ticketapp.core.result import Err, Result, capture
from ticketapp.schemas.auth import Session, User
from ticketapp.schemas.validation import validate_login, validate_signup
from ticketapp.services.latency import SimulatedLatency
from ticketapp.stores.session_store import SessionStore
from ticketapp.stores.user_directory import UserDirectory

logger = logging.getLogger(__name__)


def new_session_token() -> str:
    return f"token_{uuid.uuid4().hex}"


def new_user_id() -> str:
    return str(uuid.uuid4())


class AuthService:
    """Validates credentials and owns the session lifecycle."""

    def __init__(
        self,
        sessions: SessionStore,
        users: UserDirectory,
        latency: SimulatedLatency | None = None,
        token_factory: Callable[[], str] = new_session_token,
        user_id_factory: Callable[[], str] = new_user_id,
    ):
        self._sessions = sessions
        self._users = users
        self._latency = latency or SimulatedLatency.none()
        self._token_factory = token_factory
        self._user_id_factory = user_id_factory

    async def login(self, email: str, password: str) -> Result[Session]:
        return await self._latency.run(self._login, email, password)

    async def signup(self, name: str, email: str, password: str) -> Result[Session]:
        return await self._latency.run(self._signup, name, email, password)

    async def logout(self) -> Result[None]:
        return capture(self._sessions.clear)

    async def login_form(self, data: Any) -> Result[Session]:
        """Validate a login form, then log in."""
        validated = validate_login(data)
        if validated.is_err:
            return validated
        form = validated.value
        return await self.login(form.email, form.password)

    async def signup_form(self, data: Any) -> Result[Session]:
        """Validate a signup form, then sign up."""
        validated = validate_signup(data)
        if validated.is_err:
            return validated
        form = validated.value
        return await self.signup(form.name, form.email, form.password)

    def current_session(self) -> Result[Session | None]:
        """The persisted session, if any (restores auth state on start-up)."""
        return capture(self._sessions.get)

    def is_authenticated(self) -> bool:
        result = self.current_session()
        return result.is_ok and result.value is not None

    def _login(self, email: str, password: str) -> Result[Session]:
        user = self._users.find_by_credentials(email, password)
        if user is None:
            logger.info(
                "Login rejected", extra={"error_code": "INVALID_CREDENTIALS"},
            )
            return Err(InvalidCredentialsError())
        return capture(self._start_session, user)

    def _signup(self, name: str, email: str, password: str) -> Result[Session]:
        if self._users.find_by_email(email) is not None:
            logger.info(
                "Signup rejected", extra={"error_code": "EMAIL_ALREADY_EXISTS"},
            )
            return Err(EmailAlreadyExistsError())

        user = User(
            id=self._user_id_factory(), name=name, email=email, password=password,
        )
        self._users.add(user)
        logger.info("User registered", extra={"user_id": user.id})
        return capture(self._start_session, user)

    def _start_session(self, user: User) -> Session:
        session = Session(token=self._token_factory(), user=user.to_session_user())
        self._sessions.save(session)
        return session
