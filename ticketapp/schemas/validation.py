"""Validation — total, pure entry points for the login, signup and ticket schemas.

Invariants:
    - Never raises: any input (even a non-mapping) yields Ok(form) or Err(ValidationFailedError)
    - Failure maps are keyed by the external (camelCase) field name
    - Only the first message per field is kept; all fields are checked in one pass
    - Missing keys report the same "<Label> is required" message as empty strings
    - Signup reports a confirmation mismatch even when password itself is invalid
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from ticketapp.core.errors import ValidationFailedError
from ticketapp.core.result import Err, Ok, Result
from ticketapp.schemas.auth import LoginForm, SignupForm
from ticketapp.schemas.ticket import TicketForm, TicketPatch

FORM_FIELD = "form"

_REQUIRED_MESSAGES = {
    "name": "Name is required",
    "email": "Email is required",
    "password": "Password is required",
    "confirmPassword": "Please confirm your password",
    "title": "Title is required",
    "status": "Status is required",
}


def validate_login(data: Any) -> Result[LoginForm]:
    return _validate(LoginForm, data)


def validate_signup(data: Any) -> Result[SignupForm]:
    result = _validate(SignupForm, data)
    if result.is_err and isinstance(data, Mapping):
        _flag_password_mismatch(data, result.error.field_errors)
    return result


def validate_ticket(data: Any) -> Result[TicketForm]:
    return _validate(TicketForm, data)


def validate_ticket_patch(data: Any) -> Result[TicketPatch]:
    return _validate(TicketPatch, data)


def _validate(model: type[BaseModel], data: Any) -> Result:
    try:
        return Ok(model.model_validate(data))
    except ValidationError as exc:
        return Err(ValidationFailedError(_collect_field_errors(model, exc)))


def _collect_field_errors(model: type[BaseModel], exc: ValidationError) -> dict[str, str]:
    """Map pydantic errors to {external field name: first message}."""
    aliases = {name: info.alias or name for name, info in model.model_fields.items()}
    field_errors: dict[str, str] = {}
    for error in exc.errors():
        loc = error["loc"]
        field = aliases.get(str(loc[0]), str(loc[0])) if loc else FORM_FIELD
        if error["type"] == "missing":
            message = _REQUIRED_MESSAGES.get(field, error["msg"])
        else:
            message = error["msg"]
        field_errors.setdefault(field, message)
    return field_errors


def _flag_password_mismatch(data: Mapping, field_errors: dict[str, str]) -> None:
    """Report a confirmation mismatch even when password failed its own checks."""
    if "confirmPassword" in field_errors:
        return
    password = data.get("password")
    confirm = data.get("confirmPassword", data.get("confirm_password"))
    if isinstance(password, str) and isinstance(confirm, str) and confirm != password:
        field_errors["confirmPassword"] = "Passwords do not match"
