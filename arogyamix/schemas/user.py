import re
from datetime import datetime

from pydantic import BaseModel, field_validator, model_validator

from arogyamix.utils.validators import normalize_email


class SignUpForm(BaseModel):
    email: str
    password: str
    full_name: str

    @model_validator(mode="before")
    @classmethod
    def require_all_fields(cls, data):
        if isinstance(data, dict):
            if not all(data.get(key) for key in ("email", "password", "full_name")):
                raise ValueError("Please fill in all fields")
        return data

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, value: str) -> str:
        if len(value) > 255:
            raise ValueError("Please enter a valid email address (max 255 characters)")
        return normalize_email(value, "Please enter a valid email address (max 255 characters)")

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, value: str) -> str:
        if len(value) < 8 or len(value) > 128:
            raise ValueError("Password must be between 8 and 128 characters")
        if not re.search(r"[A-Z]", value):
            raise ValueError("Password must contain at least one uppercase letter")
        if not re.search(r"[a-z]", value):
            raise ValueError("Password must contain at least one lowercase letter")
        if not re.search(r"[0-9]", value):
            raise ValueError("Password must contain at least one number")
        return value

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2 or len(value) > 100:
            raise ValueError("Full name must be between 2 and 100 characters")
        return value


class SignInForm(BaseModel):
    email: str
    password: str

    @model_validator(mode="before")
    @classmethod
    def require_credentials(cls, data):
        if isinstance(data, dict) and not (data.get("email") and data.get("password")):
            raise ValueError("Please enter both email and password")
        return data

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, value: str) -> str:
        return normalize_email(value)


class UserResponse(BaseModel):
    id: int
    email: str
    full_name: str | None = None
    is_active: bool
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class SessionResponse(BaseModel):
    id: int
    created_at: datetime
    expires_at: datetime | None = None

    model_config = {"from_attributes": True}
