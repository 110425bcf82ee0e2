import logging

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from arogyamix.config import settings
from arogyamix.database import get_db
from arogyamix.models.appointment import Appointment, AppointmentStatus
from arogyamix.models.user import User
from arogyamix.schemas.appointment import AppointmentResponse
from arogyamix.services.auth_middleware import get_current_user
from arogyamix.services.scheduler import (
    assign_meeting_link,
    format_appointment_type,
    is_valid_meeting_link,
    split_appointments,
    utcnow,
)
from arogyamix.services.validation import validate_appointment
from arogyamix.utils.response import create_response, handle_exception, require_valid

router = APIRouter(prefix="/appointments", tags=["Appointments"])
logger = logging.getLogger(__name__)


def _appointment_payload(appointment: Appointment) -> dict:
    payload = AppointmentResponse.model_validate(appointment).model_dump()
    payload["appointment_type_label"] = format_appointment_type(appointment.appointment_type)
    return payload


@router.post("", status_code=status.HTTP_201_CREATED)
def book_appointment(
    payload: dict = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        form = require_valid(validate_appointment(payload, now=utcnow()))

        appointment = Appointment(
            user_id=current_user.id,
            title=form.title,
            description=form.description,
            appointment_date=form.scheduled_at,
            appointment_type=form.appointment_type,
            status=AppointmentStatus.scheduled.value,
            google_meet_link=assign_meeting_link(),
            duration_minutes=settings.DEFAULT_APPOINTMENT_DURATION_MINUTES,
        )
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        logger.info(
            "User %s booked appointment id=%s type=%s at %s",
            current_user.id,
            appointment.id,
            appointment.appointment_type,
            appointment.appointment_date.isoformat(),
        )

        return create_response(
            message="Your appointment has been booked successfully.",
            data=_appointment_payload(appointment),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        return handle_exception(exc, "Failed to book appointment", db=db)


@router.get("")
def list_appointments(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        appointments = (
            db.query(Appointment)
            .filter(Appointment.user_id == current_user.id)
            .order_by(Appointment.appointment_date.asc())
            .all()
        )
        upcoming, past = split_appointments(appointments, utcnow())
        return create_response(
            message="Appointments fetched",
            data={
                "count": len(appointments),
                "appointments": [_appointment_payload(item) for item in appointments],
                "upcoming": [_appointment_payload(item) for item in upcoming],
                "past": [_appointment_payload(item) for item in past],
            },
        )
    except Exception as exc:
        return handle_exception(exc, "Failed to load appointments")


@router.get("/{appointment_id}/join")
def join_appointment(
    appointment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        appointment = (
            db.query(Appointment)
            .filter(Appointment.id == appointment_id, Appointment.user_id == current_user.id)
            .first()
        )
        if not appointment:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Appointment not found")
        if not is_valid_meeting_link(appointment.google_meet_link):
            logger.warning(
                "Refusing meeting link for appointment %s: %s",
                appointment.id,
                appointment.google_meet_link,
            )
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid meeting link")
        return create_response(
            message="Meeting link fetched",
            data={"appointment_id": appointment.id, "google_meet_link": appointment.google_meet_link},
        )
    except Exception as exc:
        return handle_exception(exc)
