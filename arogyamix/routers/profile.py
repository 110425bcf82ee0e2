import logging

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from arogyamix.database import get_db
from arogyamix.models.profile import Profile
from arogyamix.models.user import User
from arogyamix.schemas.profile import ProfileResponse
from arogyamix.services.auth_events import AuthEvent, auth_events
from arogyamix.services.auth_middleware import get_current_user
from arogyamix.services.validation import validate_profile
from arogyamix.utils.response import create_response, handle_exception, require_valid

router = APIRouter(prefix="/profile", tags=["Profile"])
logger = logging.getLogger(__name__)


@router.get("/me")
def get_profile(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        profile = db.query(Profile).filter(Profile.user_id == current_user.id).first()
        if not profile:
            return create_response(
                message="Profile not created yet",
                data=None,
                status_code=status.HTTP_200_OK
            )

        return create_response(
            message="Profile fetched successfully",
            data=ProfileResponse.model_validate(profile).model_dump(),
            status_code=status.HTTP_200_OK
        )
    except Exception as exc:
        return handle_exception(exc, "Failed to load profile")


@router.put("")
def save_profile(
    payload: dict = Body(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create or replace the caller's profile; every field not sent is cleared."""
    try:
        form = require_valid(validate_profile(payload))

        profile = db.query(Profile).filter(Profile.user_id == current_user.id).first()
        created = profile is None
        if created:
            profile = Profile(user_id=current_user.id)
            db.add(profile)

        for field, value in form.model_dump().items():
            setattr(profile, field, value)
        if form.full_name:
            current_user.full_name = form.full_name

        db.commit()
        db.refresh(profile)
        logger.info("User %s %s profile id=%s", current_user.id, "created" if created else "updated", profile.id)
        auth_events.publish(AuthEvent.user_updated, {"user_id": current_user.id})

        return create_response(
            message="Your profile has been updated successfully.",
            data=ProfileResponse.model_validate(profile).model_dump(),
            status_code=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )
    except Exception as exc:
        return handle_exception(exc, "Failed to save profile", db=db)
