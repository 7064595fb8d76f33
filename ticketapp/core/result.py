"""Result — tagged success/failure returned by every service operation.

Invariants:
    - Ok carries the success value; Err carries a TicketAppError
    - Exactly one of is_ok / is_err is True
    - unwrap() on Err raises the carried error (tests and scripts only)
    - capture() converts TicketAppError only; any other exception propagates
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from ticketapp.core.errors import ErrorSeverity, TicketAppError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.INFO,
    ErrorSeverity.ERROR: logging.WARNING,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome."""
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Expected failure outcome."""
    error: TicketAppError

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise self.error


Result = Union[Ok[T], Err]


def capture(operation: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
    """Run a synchronous store operation, returning TicketAppError as Err."""
    try:
        return Ok(operation(*args, **kwargs))
    except TicketAppError as e:
        logger.log(
            _LOG_LEVELS[e.severity], f"{e.code}: {e.message}",
            extra={"error_code": e.code},
        )
        return Err(e)
