from datetime import date, datetime
from typing import List

from pydantic import BaseModel, field_validator

from arogyamix.utils.validators import (
    blank_to_none,
    check_list_limits,
    split_list_field,
    validate_phone,
)

EARLIEST_BIRTH_DATE = date(1900, 1, 1)


class ProfileForm(BaseModel):
    full_name: str | None = None
    phone: str | None = None
    date_of_birth: date | None = None
    health_goals: List[str] | None = None
    dietary_preferences: List[str] | None = None
    medical_conditions: List[str] | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def drop_blank_values(cls, value):
        return blank_to_none(value)

    @field_validator("full_name", "emergency_contact_name")
    @classmethod
    def validate_name(cls, value: str | None, info) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if len(value) > 100:
            label = "Full name" if info.field_name == "full_name" else "Emergency contact name"
            raise ValueError(f"{label} must be less than 100 characters")
        return value

    @field_validator("phone")
    @classmethod
    def validate_phone_number(cls, value: str | None) -> str | None:
        return validate_phone(value, "Phone number")

    @field_validator("emergency_contact_phone")
    @classmethod
    def validate_emergency_phone(cls, value: str | None) -> str | None:
        return validate_phone(value, "Emergency contact phone")

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def parse_date_of_birth(cls, value):
        value = blank_to_none(value)
        if value is None or isinstance(value, date):
            return value
        try:
            return datetime.fromisoformat(str(value).strip()).date()
        except ValueError as exc:
            raise ValueError("Invalid date of birth") from exc

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, value: date | None) -> date | None:
        if value is None:
            return None
        if value < EARLIEST_BIRTH_DATE or value > date.today():
            raise ValueError("Date of birth must be between 1900-01-01 and today")
        return value

    @field_validator("health_goals", "dietary_preferences", "medical_conditions", mode="before")
    @classmethod
    def split_lists(cls, value):
        return split_list_field(value)

    @field_validator("health_goals", "dietary_preferences", "medical_conditions")
    @classmethod
    def limit_lists(cls, value, info):
        label = info.field_name.replace("_", " ").capitalize()
        return check_list_limits(value, label)


class ProfileResponse(BaseModel):
    id: int
    user_id: int
    full_name: str | None = None
    phone: str | None = None
    date_of_birth: date | None = None
    health_goals: List[str] | None = None
    dietary_preferences: List[str] | None = None
    medical_conditions: List[str] | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
