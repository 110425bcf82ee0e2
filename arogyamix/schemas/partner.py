import json
import math
from datetime import datetime
from typing import List

from pydantic import BaseModel, field_validator

from arogyamix.models.partner import PartnerType
from arogyamix.utils.validators import blank_to_none, normalize_email, trimmed_list

CROP_OPTIONS = [
    "Rice", "Wheat", "Maize", "Barley", "Millet",
    "Tomatoes", "Potatoes", "Onions", "Carrots", "Cabbage",
    "Spinach", "Lettuce", "Broccoli", "Cauliflower", "Beans",
    "Mangoes", "Bananas", "Apples", "Oranges", "Grapes",
    "Cotton", "Sugarcane", "Tea", "Coffee", "Spices",
]

FARMING_METHOD_OPTIONS = [
    "Organic Farming", "Conventional Farming", "Hydroponic Farming",
    "Precision Agriculture", "Sustainable Farming", "Integrated Pest Management",
    "Crop Rotation", "Permaculture", "Vertical Farming",
]

SOIL_TYPES = {"clay", "sandy", "loamy", "silt", "black", "red"}
IRRIGATION_SYSTEMS = {"drip", "sprinkler", "flood", "rainfed", "borewell", "canal"}
TRANSPORTATION_MODES = {"own_vehicle", "hired_transport", "cooperative", "buyer_pickup", "need_support"}
BUSINESS_SIZES = {"small", "medium", "large"}
FARM_SIZE_UNITS = {"acres", "hectares"}


class _ContactFields(BaseModel):
    email: str
    full_name: str
    phone: str

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Full name must be at least 2 characters")
        return value

    @field_validator("phone")
    @classmethod
    def validate_phone_length(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 10:
            raise ValueError("Please enter a valid phone number")
        return value

    @staticmethod
    def _check_experience(value: int | None) -> int | None:
        if value is None:
            return None
        if value < 0 or value > 50:
            raise ValueError("Experience years must be between 0 and 50")
        return value


class PartnerApplicationForm(_ContactFields):
    partner_type: str
    business_name: str | None = None
    business_address: str | None = None
    experience_years: int | None = None
    certifications: List[str] = []
    specializations: List[str] = []
    business_size: str | None = None
    current_suppliers: List[str] = []
    target_market: str | None = None
    additional_info: str | None = None

    @field_validator(
        "business_name", "business_address", "experience_years", "business_size",
        "target_market", "additional_info",
        mode="before",
    )
    @classmethod
    def drop_blank_values(cls, value):
        return blank_to_none(value)

    @field_validator("partner_type")
    @classmethod
    def validate_partner_type(cls, value: str) -> str:
        if value not in {item.value for item in PartnerType}:
            raise ValueError("Please select a partner type")
        return value

    @field_validator("experience_years")
    @classmethod
    def validate_experience(cls, value: int | None) -> int | None:
        return cls._check_experience(value)

    @field_validator("business_size")
    @classmethod
    def validate_business_size(cls, value: str | None) -> str | None:
        if value is not None and value not in BUSINESS_SIZES:
            raise ValueError("Business size must be small, medium or large")
        return value

    @field_validator("certifications", "specializations", "current_suppliers")
    @classmethod
    def clean_lists(cls, value: List[str]) -> List[str]:
        return trimmed_list(value)

    def to_partner_fields(self) -> dict:
        return self.model_dump()


class FarmerApplicationForm(_ContactFields):
    farm_name: str
    farm_address: str
    farm_size: float
    farm_size_unit: str
    experience_years: int
    crop_types: List[str]
    farming_methods: List[str]
    certifications: List[str] = []
    irrigation_system: str | None = None
    soil_type: str | None = None
    current_markets: List[str] = []
    monthly_production: str | None = None
    transportation_mode: str | None = None
    storage_capacity: str | None = None
    challenges: str | None = None
    expectations: str | None = None
    additional_info: str | None = None

    @field_validator(
        "irrigation_system", "soil_type", "monthly_production", "transportation_mode",
        "storage_capacity", "challenges", "expectations", "additional_info",
        mode="before",
    )
    @classmethod
    def drop_blank_values(cls, value):
        return blank_to_none(value)

    @field_validator("farm_name")
    @classmethod
    def validate_farm_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Farm name is required")
        return value

    @field_validator("farm_address")
    @classmethod
    def validate_farm_address(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 5:
            raise ValueError("Please provide complete farm address")
        return value

    @field_validator("farm_size")
    @classmethod
    def validate_farm_size(cls, value: float) -> float:
        if not math.isfinite(value) or value <= 0:
            raise ValueError("Farm size must be greater than 0")
        return value

    @field_validator("farm_size_unit")
    @classmethod
    def validate_farm_size_unit(cls, value: str) -> str:
        if value not in FARM_SIZE_UNITS:
            raise ValueError("Please select farm size unit")
        return value

    @field_validator("experience_years")
    @classmethod
    def validate_experience(cls, value: int) -> int:
        return cls._check_experience(value)

    @field_validator("crop_types")
    @classmethod
    def validate_crop_types(cls, value: List[str]) -> List[str]:
        value = trimmed_list(value)
        if not value:
            raise ValueError("Please select at least one crop type")
        unknown = [item for item in value if item not in CROP_OPTIONS]
        if unknown:
            raise ValueError(f"Unknown crop type: {unknown[0]}")
        return value

    @field_validator("farming_methods")
    @classmethod
    def validate_farming_methods(cls, value: List[str]) -> List[str]:
        value = trimmed_list(value)
        if not value:
            raise ValueError("Please select at least one farming method")
        unknown = [item for item in value if item not in FARMING_METHOD_OPTIONS]
        if unknown:
            raise ValueError(f"Unknown farming method: {unknown[0]}")
        return value

    @field_validator("irrigation_system")
    @classmethod
    def validate_irrigation(cls, value: str | None) -> str | None:
        if value is not None and value not in IRRIGATION_SYSTEMS:
            raise ValueError("Unknown irrigation system")
        return value

    @field_validator("soil_type")
    @classmethod
    def validate_soil_type(cls, value: str | None) -> str | None:
        if value is not None and value not in SOIL_TYPES:
            raise ValueError("Unknown soil type")
        return value

    @field_validator("transportation_mode")
    @classmethod
    def validate_transportation(cls, value: str | None) -> str | None:
        if value is not None and value not in TRANSPORTATION_MODES:
            raise ValueError("Unknown transportation mode")
        return value

    @field_validator("certifications", "current_markets")
    @classmethod
    def clean_lists(cls, value: List[str]) -> List[str]:
        return trimmed_list(value)

    def to_partner_fields(self) -> dict:
        """Map the farmer form onto a partner row; farm details travel as a JSON payload."""
        farm_details = {
            "farm_size": self.farm_size,
            "farm_size_unit": self.farm_size_unit,
            "farming_methods": self.farming_methods,
            "irrigation_system": self.irrigation_system,
            "soil_type": self.soil_type,
            "monthly_production": self.monthly_production,
            "transportation_mode": self.transportation_mode,
            "storage_capacity": self.storage_capacity,
            "challenges": self.challenges,
            "expectations": self.expectations,
            "additional_info": self.additional_info,
        }
        return {
            "email": self.email,
            "full_name": self.full_name,
            "phone": self.phone,
            "partner_type": PartnerType.farmer.value,
            "business_name": self.farm_name,
            "business_address": self.farm_address,
            "experience_years": self.experience_years,
            "certifications": self.certifications,
            "specializations": self.crop_types,
            "current_suppliers": self.current_markets,
            "additional_info": json.dumps(farm_details),
        }


class PartnerResponse(BaseModel):
    id: int
    email: str
    full_name: str
    partner_type: str
    business_name: str | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
