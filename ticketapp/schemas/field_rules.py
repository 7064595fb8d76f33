"""Field Rules — reusable checks behind the login, signup and ticket schemas.

Invariants:
    - Every check either returns the (possibly coerced) value or raises a
      PydanticCustomError whose message is shown to the user verbatim
    - Empty string is reported as "<Label> is required", never as too short
    - Enum checks accept either the enum member or its wire value
"""

import re
from enum import Enum
from typing import TypeVar

from pydantic_core import PydanticCustomError

E = TypeVar("E", bound=Enum)

EMAIL_PATTERN = re.compile(
    r"^(?!\.)(?!.*\.\.)[A-Z0-9_'+\-.]*[A-Z0-9_+\-]@([A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}$",
    re.IGNORECASE,
)


def field_error(message: str) -> PydanticCustomError:
    return PydanticCustomError("ticketapp_field", message)


def check_length(
    value: str,
    label: str,
    min_length: int | None = None,
    max_length: int | None = None,
    required: bool = True,
) -> str:
    """Check presence and length bounds, in that order."""
    if required and value == "":
        raise field_error(f"{label} is required")
    if min_length is not None and len(value) < min_length:
        raise field_error(f"{label} must be at least {min_length} characters")
    if max_length is not None and len(value) > max_length:
        raise field_error(f"{label} must not exceed {max_length} characters")
    return value


def check_email(value: str) -> str:
    if value == "":
        raise field_error("Email is required")
    if not EMAIL_PATTERN.fullmatch(value):
        raise field_error("Please enter a valid email address")
    return value


def check_choice(value: object, enum_cls: type[E], label: str) -> E:
    """Coerce a wire value into enum_cls, rejecting anything else (None included)."""
    if isinstance(value, enum_cls):
        return value
    allowed = [member.value for member in enum_cls]
    if isinstance(value, str) and value in allowed:
        return enum_cls(value)
    raise field_error(f"{label} must be one of: {', '.join(allowed)}")
