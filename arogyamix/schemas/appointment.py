from datetime import datetime

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from arogyamix.models.appointment import AppointmentType
from arogyamix.services.scheduler import InvalidAppointmentDate, combine, validate_future

REQUIRED_FIELDS = ("title", "appointment_date", "appointment_time", "appointment_type")


class AppointmentForm(BaseModel):
    title: str
    description: str | None = None
    appointment_date: str
    appointment_time: str
    appointment_type: str

    # Filled in from date + time once the form validates
    scheduled_at: datetime | None = Field(default=None, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def require_fields(cls, data):
        if isinstance(data, dict):
            missing = [key for key in REQUIRED_FIELDS if not str(data.get(key) or "").strip()]
            if missing:
                raise ValueError("Please fill in all required fields")
        return data

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        value = value.strip()
        if len(value) > 200:
            raise ValueError("Title must be less than 200 characters")
        return value

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        if len(value) > 2000:
            raise ValueError("Description must be less than 2000 characters")
        return value.strip()

    @field_validator("appointment_type")
    @classmethod
    def validate_type(cls, value: str) -> str:
        allowed = [item.value for item in AppointmentType]
        if value not in allowed:
            raise ValueError(f"Appointment type must be one of: {', '.join(allowed)}")
        return value

    @model_validator(mode="after")
    def validate_schedule(self, info: ValidationInfo):
        context = info.context or {}
        try:
            timestamp = combine(self.appointment_date, self.appointment_time, context.get("timezone"))
            validate_future(timestamp, context.get("now"))
        except InvalidAppointmentDate as exc:
            raise ValueError(str(exc)) from exc
        self.scheduled_at = timestamp
        return self


class AppointmentResponse(BaseModel):
    id: int
    title: str
    description: str | None = None
    appointment_date: datetime
    appointment_type: str
    appointment_type_label: str | None = None
    status: str
    google_meet_link: str | None = None
    duration_minutes: int

    model_config = {"from_attributes": True}
