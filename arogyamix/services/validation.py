from __future__ import annotations

from datetime import datetime
from typing import Any, Generic, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from arogyamix.schemas.appointment import AppointmentForm
from arogyamix.schemas.partner import FarmerApplicationForm, PartnerApplicationForm
from arogyamix.schemas.profile import ProfileForm
from arogyamix.schemas.user import SignInForm, SignUpForm

FormT = TypeVar("FormT", bound=BaseModel)


class ValidationResult(Generic[FormT]):
    """Either a validated form (`value`) or the message of the first rule it broke (`error`)."""

    __slots__ = ("value", "error")

    def __init__(self, value: Optional[FormT] = None, error: Optional[str] = None):
        self.value = value
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def __repr__(self) -> str:
        if self.ok:
            return f"ValidationResult(value={self.value!r})"
        return f"ValidationResult(error={self.error!r})"


def first_error_message(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid input"
    error = errors[0]
    ctx_error = (error.get("ctx") or {}).get("error")
    if error.get("type") == "value_error" and ctx_error is not None:
        return str(ctx_error)
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    message = error.get("msg", "Invalid input")
    return f"{location}: {message}" if location else message


def validate_form(
    form_cls: Type[FormT],
    data: Any,
    context: Optional[dict] = None,
) -> ValidationResult[FormT]:
    if isinstance(data, form_cls):
        data = data.model_dump()
    try:
        return ValidationResult(value=form_cls.model_validate(data or {}, context=context))
    except ValidationError as exc:
        return ValidationResult(error=first_error_message(exc))


def validate_appointment(
    data: Any,
    now: Optional[datetime] = None,
    timezone_name: Optional[str] = None,
) -> ValidationResult[AppointmentForm]:
    return validate_form(AppointmentForm, data, {"now": now, "timezone": timezone_name})


def validate_profile(data: Any) -> ValidationResult[ProfileForm]:
    return validate_form(ProfileForm, data)


def validate_partner(data: Any) -> ValidationResult[PartnerApplicationForm]:
    return validate_form(PartnerApplicationForm, data)


def validate_farmer(data: Any) -> ValidationResult[FarmerApplicationForm]:
    return validate_form(FarmerApplicationForm, data)


def validate_sign_up(data: Any) -> ValidationResult[SignUpForm]:
    return validate_form(SignUpForm, data)


def validate_sign_in(data: Any) -> ValidationResult[SignInForm]:
    return validate_form(SignInForm, data)
