from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Iterable, List, Optional, Tuple
from urllib.parse import urlparse
from zoneinfo import ZoneInfo

from arogyamix.config import settings
from arogyamix.models.appointment import AppointmentStatus

UPCOMING = "upcoming"
PAST = "past"


class InvalidAppointmentDate(ValueError):
    pass


def utcnow() -> datetime:
    return datetime.utcnow()


def combine(date_value: str | date, time_value: str | time, tz_name: Optional[str] = None) -> datetime:
    """
    Builds one timestamp from separate date (YYYY-MM-DD) and time (HH:MM) inputs.
    The wall-clock value is read in the configured timezone and returned as naive UTC,
    matching how timestamps are stored.
    """
    try:
        day = date_value if isinstance(date_value, date) else date.fromisoformat(str(date_value).strip())
        clock = time_value if isinstance(time_value, time) else time.fromisoformat(str(time_value).strip())
        zone = ZoneInfo(tz_name or settings.APP_TIMEZONE)
    except (TypeError, ValueError, KeyError) as exc:
        raise InvalidAppointmentDate("Invalid date") from exc

    local = datetime.combine(day, clock.replace(tzinfo=None)).replace(tzinfo=zone)
    return local.astimezone(timezone.utc).replace(tzinfo=None)


def validate_future(timestamp: datetime, now: Optional[datetime] = None) -> datetime:
    now = now or utcnow()
    if timestamp <= now:
        raise InvalidAppointmentDate("Appointment date must be in the future")
    return timestamp


def classify(appointment, now: Optional[datetime] = None) -> str:
    now = now or utcnow()
    status = getattr(appointment.status, "value", appointment.status)
    if appointment.appointment_date > now and status == AppointmentStatus.scheduled.value:
        return UPCOMING
    return PAST


def split_appointments(appointments: Iterable, now: Optional[datetime] = None) -> Tuple[List, List]:
    now = now or utcnow()
    upcoming, past = [], []
    for appointment in appointments:
        if classify(appointment, now) == UPCOMING:
            upcoming.append(appointment)
        else:
            past.append(appointment)
    return upcoming, past


def assign_meeting_link() -> str:
    # Static placeholder; no meeting is created per appointment.
    return settings.MEETING_LINK


def is_valid_meeting_link(url: Optional[str]) -> bool:
    if not url or not isinstance(url, str):
        return False
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    return parsed.scheme == "https" and parsed.hostname == settings.MEETING_HOST


def format_appointment_type(value: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in value.split("-"))
