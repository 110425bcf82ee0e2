from datetime import datetime
from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from arogyamix.database import Base


class AppointmentType(str, Enum):
    consultation = "consultation"
    nutrition = "nutrition"
    fitness = "fitness"
    follow_up = "follow-up"
    emergency = "emergency"


class AppointmentStatus(str, Enum):
    scheduled = "scheduled"
    completed = "completed"
    cancelled = "cancelled"
    rescheduled = "rescheduled"


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    appointment_date = Column(DateTime, nullable=False, index=True)  # UTC
    appointment_type = Column(String, nullable=False)
    status = Column(String, default=AppointmentStatus.scheduled.value, nullable=False)
    google_meet_link = Column(String, nullable=True)
    duration_minutes = Column(Integer, default=30, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="appointments")
