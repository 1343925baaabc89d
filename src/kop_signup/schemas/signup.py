from __future__ import annotations

import re
from datetime import date
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, EmailStr, Field, StrictBool, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from kop_signup.core.config import settings
from kop_signup.core.errors import AppError, ErrorCode


WhatsappMembership = Literal["yes", "no"]

NON_DIGITS = re.compile(r"[^0-9]")
ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def phone_digits(phone: str) -> str:
    return NON_DIGITS.sub("", phone)


def age_in_years(birth: date, today: date) -> int:
    # só a diferença de anos, sem olhar mês/dia
    return today.year - birth.year


# ---------- Requests ----------
class RegistrationRequest(BaseModel):
    """Formulário de cadastro já validado e normalizado."""
    name: str
    email: EmailStr
    phone: str
    dateOfBirth: date
    isAlreadyInWhatsapp: WhatsappMembership
    shouldInviteToWhatsapp: StrictBool = False
    shouldReceiveUpdates: StrictBool

    @field_validator("name")
    @classmethod
    def _name_length(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise PydanticCustomError("signup_name", "Name must be at least 2 characters")
        return value

    @field_validator("email")
    @classmethod
    def _email_lower(cls, value: str) -> str:
        return value.lower()

    @field_validator("phone")
    @classmethod
    def _phone_digits(cls, value: str) -> str:
        count = len(phone_digits(value))
        if not settings.PHONE_MIN_DIGITS <= count <= settings.PHONE_MAX_DIGITS:
            raise PydanticCustomError("signup_phone", "Please enter a valid international phone number")
        return value

    @field_validator("dateOfBirth", mode="before")
    @classmethod
    def _date_string(cls, value: Any) -> Any:
        # só aceita a data como texto (YYYY-MM-DD), nada de timestamp
        if not isinstance(value, str) or not ISO_DATE.fullmatch(value.strip()):
            raise PydanticCustomError("signup_date", "Please enter a valid date of birth")
        return value.strip()

    @field_validator("dateOfBirth")
    @classmethod
    def _old_enough(cls, value: date, info: ValidationInfo) -> date:
        today = (info.context or {}).get("today") or date.today()
        if age_in_years(value, today) < settings.MIN_AGE:
            raise PydanticCustomError(
                "signup_age",
                "You must be at least {min_age} years old",
                {"min_age": settings.MIN_AGE},
            )
        return value


class Violation(BaseModel):
    field: str
    message: str


class ValidationResult(BaseModel):
    request: Optional[RegistrationRequest] = None
    violations: List[Violation] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.request is not None and not self.violations


# ---------- Responses ----------
class ErrorBody(BaseModel):
    message: str
    code: ErrorCode


class SignUpSuccess(BaseModel):
    success: Literal[True] = True
    message: str


class SignUpFailure(BaseModel):
    success: Literal[False] = False
    error: ErrorBody

    @classmethod
    def from_error(cls, error: AppError) -> "SignUpFailure":
        return cls(error=ErrorBody(message=error.message, code=error.code))

    def to_error(self) -> AppError:
        return AppError(self.error.message, self.error.code)


SignUpResult = Union[SignUpSuccess, SignUpFailure]


class ValidationFailureResponse(SignUpFailure):
    violations: List[Violation]
