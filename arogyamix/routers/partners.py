import logging

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from arogyamix.database import get_db
from arogyamix.models.partner import Partner
from arogyamix.schemas.partner import CROP_OPTIONS, FARMING_METHOD_OPTIONS, PartnerResponse
from arogyamix.services.validation import validate_farmer, validate_partner
from arogyamix.utils.response import create_response, handle_exception, require_valid

router = APIRouter(prefix="/partners", tags=["Partners"])
logger = logging.getLogger(__name__)


def _save_application(db: Session, fields: dict) -> Partner:
    partner = Partner(**fields)
    db.add(partner)
    db.commit()
    db.refresh(partner)
    logger.info("Partner application id=%s type=%s from %s", partner.id, partner.partner_type, partner.email)
    return partner


@router.get("/options")
def farmer_form_options():
    return create_response(
        message="Partner form options",
        data={"crop_types": CROP_OPTIONS, "farming_methods": FARMING_METHOD_OPTIONS},
    )


@router.post("", status_code=status.HTTP_201_CREATED)
def submit_partner_application(payload: dict = Body(...), db: Session = Depends(get_db)):
    try:
        form = require_valid(validate_partner(payload))
        partner = _save_application(db, form.to_partner_fields())
        return create_response(
            message="Thank you for your interest in partnering with ArogyaMix. "
            "We'll review your application and get back to you soon.",
            data=PartnerResponse.model_validate(partner).model_dump(),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        return handle_exception(
            exc, "There was an error submitting your application. Please try again.", db=db
        )


@router.post("/farmers", status_code=status.HTTP_201_CREATED)
def submit_farmer_application(payload: dict = Body(...), db: Session = Depends(get_db)):
    try:
        form = require_valid(validate_farmer(payload))
        partner = _save_application(db, form.to_partner_fields())
        return create_response(
            message="Your farmer application has been submitted successfully. "
            "Our team will review it and contact you within 2-3 business days.",
            data=PartnerResponse.model_validate(partner).model_dump(),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        return handle_exception(
            exc, "There was an error submitting your application. Please try again.", db=db
        )
