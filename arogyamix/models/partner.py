from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text

from arogyamix.database import Base


class PartnerType(str, Enum):
    farmer = "farmer"
    nutritionist = "nutritionist"
    retailer = "retailer"


class Partner(Base):
    __tablename__ = "partners"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, nullable=False, index=True)
    full_name = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    partner_type = Column(String, nullable=False)
    business_name = Column(String, nullable=True)
    business_address = Column(Text, nullable=True)
    experience_years = Column(Integer, nullable=True)
    certifications = Column(JSON, nullable=True)
    specializations = Column(JSON, nullable=True)
    business_size = Column(String, nullable=True)
    current_suppliers = Column(JSON, nullable=True)
    target_market = Column(String, nullable=True)
    # Plain text, or a JSON document of farm details for farmer applications
    additional_info = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
