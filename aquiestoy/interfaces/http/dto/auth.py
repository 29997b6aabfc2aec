from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

from aquiestoy.shared.errors.validation_types import ValidationErrorType

# bcrypt only looks at the first 72 bytes of a password.
_PASSWORD_MAX_BYTES = 72


def _strip_email(value: object) -> object:
    if not isinstance(value, str):
        return value
    stripped = value.strip()
    if not stripped:
        raise PydanticCustomError(ValidationErrorType.MISSING, "Email cannot be empty", {})
    return stripped


class RegisterRequestDTO(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: str = Field(min_length=1, max_length=255)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value: object) -> object:
        return _strip_email(value)

    @field_validator("email", mode="after")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, value: str) -> str:
        if len(value.encode("utf-8")) > _PASSWORD_MAX_BYTES:
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_TOO_LONG,
                "Password must be at most 72 bytes long",
                {"max_bytes": _PASSWORD_MAX_BYTES},
            )
        return value

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise PydanticCustomError(ValidationErrorType.NAME_BLANK, "Name cannot be blank", {})
        return stripped


class LoginRequestDTO(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)  # no length policy on login

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value: object) -> object:
        return _strip_email(value)

    @field_validator("email", mode="after")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()


class UserDTO(BaseModel):
    id: int
    email: str
    name: str
    token: str | None = None


class AuthResponseDTO(BaseModel):
    message: str
    user: UserDTO


class ProfileResponseDTO(BaseModel):
    user: UserDTO
