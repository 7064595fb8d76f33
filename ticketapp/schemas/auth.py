"""Auth Schemas — user directory records, sessions and the login/signup forms.

Invariants:
    - LoginForm.email: required, valid email; password: required, >= 6 chars
    - SignupForm.name: 2-50 chars; password: 6-100 chars
    - SignupForm.confirm_password must equal password (error attaches to confirmPassword)
    - Session.user is a denormalized {id, name, email} snapshot, never the password

Design Decisions:
    - camelCase aliases: form keys and persisted JSON match the presentation layer
    - field_validator raising PydanticCustomError: messages reach the user verbatim
"""

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from ticketapp.schemas.field_rules import check_email, check_length, field_error

CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class User(BaseModel):
    """User directory record. Password is kept as given (plain text)."""
    id: str
    name: str
    email: str
    password: str

    def to_session_user(self) -> "SessionUser":
        return SessionUser(id=self.id, name=self.name, email=self.email)


class SessionUser(BaseModel):
    """Public user snapshot stored inside a session."""
    id: str
    name: str
    email: str


class Session(BaseModel):
    """The single active session persisted under ticketapp_session."""
    token: str
    user: SessionUser


# --- Forms --------------------------------------------------------------------

class LoginForm(BaseModel):
    model_config = CAMEL_CONFIG

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def valid_email(cls, v: str) -> str:
        return check_email(v)

    @field_validator("password")
    @classmethod
    def valid_password(cls, v: str) -> str:
        return check_length(v, "Password", min_length=6)


class SignupForm(BaseModel):
    model_config = CAMEL_CONFIG

    name: str
    email: str
    password: str
    confirm_password: str

    @field_validator("name")
    @classmethod
    def valid_name(cls, v: str) -> str:
        return check_length(v, "Name", min_length=2, max_length=50)

    @field_validator("email")
    @classmethod
    def valid_email(cls, v: str) -> str:
        return check_email(v)

    @field_validator("password")
    @classmethod
    def valid_password(cls, v: str) -> str:
        return check_length(v, "Password", min_length=6, max_length=100)

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, v: str, info: ValidationInfo) -> str:
        if v == "":
            raise field_error("Please confirm your password")
        # password is absent from info.data when it failed its own checks
        password = info.data.get("password")
        if password is not None and v != password:
            raise field_error("Passwords do not match")
        return v
