"""Field-level helpers shared by the form schemas."""

import re
from typing import Iterable, List, Optional

from pydantic import validate_email
from pydantic_core import PydanticCustomError

PHONE_PATTERN = re.compile(r"^[0-9+\-\s()]*$")
SIMPLE_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MAX_LIST_ITEMS = 10
MAX_LIST_ITEM_LENGTH = 100


def blank_to_none(value):
    """Treat empty or whitespace-only strings as missing."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def normalize_email(value: str, message: str = "Please enter a valid email address") -> str:
    """
    Validate an email address and return it lowercased.

    Raises:
        ValueError: If the address is malformed
    """
    candidate = (value or "").strip()
    if not SIMPLE_EMAIL_PATTERN.match(candidate):
        raise ValueError(message)
    try:
        _, email = validate_email(candidate)
    except PydanticCustomError as exc:
        raise ValueError(message) from exc
    return email.lower()


def validate_phone(value: Optional[str], label: str = "Phone number", max_length: int = 20) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not PHONE_PATTERN.match(value):
        raise ValueError(f"{label} can only contain digits, spaces, +, -, ( and )")
    if len(value) > max_length:
        raise ValueError(f"{label} must be less than {max_length} characters")
    return value


def split_list_field(value) -> Optional[List[str]]:
    """Accept comma-separated text or a list; trim entries and drop empty ones."""
    if value is None:
        return None
    if isinstance(value, str):
        items: Iterable = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        raise ValueError("must be comma-separated text or a list")
    cleaned = [str(item).strip() for item in items if item is not None and str(item).strip()]
    return cleaned or None


def check_list_limits(values: Optional[List[str]], label: str) -> Optional[List[str]]:
    if not values:
        return None
    if len(values) > MAX_LIST_ITEMS:
        raise ValueError(f"{label}: maximum {MAX_LIST_ITEMS} items allowed")
    for item in values:
        if len(item) > MAX_LIST_ITEM_LENGTH:
            raise ValueError(f"{label}: each item must be less than {MAX_LIST_ITEM_LENGTH} characters")
    return values


def trimmed_list(values) -> List[str]:
    if not values:
        return []
    return [str(item).strip() for item in values if item is not None and str(item).strip()]
