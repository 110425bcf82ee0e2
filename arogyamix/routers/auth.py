import logging
import uuid
from datetime import datetime

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from arogyamix.database import get_db
from arogyamix.models.user import User
from arogyamix.models.user_session import UserSession
from arogyamix.schemas.user import SessionResponse, UserResponse
from arogyamix.services.auth_events import AuthEvent, auth_events
from arogyamix.services.auth_middleware import get_current_session
from arogyamix.services.auth_service import create_access_token, hash_password, verify_password
from arogyamix.services.validation import validate_sign_in, validate_sign_up
from arogyamix.utils.response import create_response, handle_exception, require_valid

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger(__name__)


def _user_payload(user: User) -> dict:
    return UserResponse.model_validate(user).model_dump()


@router.post("/signup", status_code=status.HTTP_201_CREATED)
def sign_up(payload: dict = Body(...), db: Session = Depends(get_db)):
    try:
        form = require_valid(validate_sign_up(payload))

        existing = db.query(User).filter(User.email == form.email).first()
        if existing:
            logger.info("Sign-up rejected, email already registered: %s", form.email)
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="This email is already registered. Please sign in instead.",
            )

        user = User(
            email=form.email,
            password_hash=hash_password(form.password),
            full_name=form.full_name,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("Created user id=%s email=%s", user.id, user.email)
        auth_events.publish(AuthEvent.signed_up, {"user_id": user.id, "email": user.email})

        return create_response(
            message="Account created successfully. Please sign in to continue.",
            data=_user_payload(user),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        return handle_exception(exc, "Failed to create account", db=db)


@router.post("/signin")
def sign_in(payload: dict = Body(...), db: Session = Depends(get_db)):
    try:
        form = require_valid(validate_sign_in(payload))

        user = db.query(User).filter(User.email == form.email).first()
        if not user or not verify_password(form.password, user.password_hash):
            logger.info("Sign-in failed for %s", form.email)
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is deactivated")

        jti = str(uuid.uuid4())
        token, expires_at = create_access_token({"sub": user.email, "jti": jti})
        session_record = UserSession(user_id=user.id, jti=jti, token=token, expires_at=expires_at)
        db.add(session_record)
        db.commit()
        db.refresh(session_record)
        auth_events.publish(AuthEvent.signed_in, {"user_id": user.id, "session_id": session_record.id})

        return create_response(
            message="Signed in successfully",
            data={
                "access_token": token,
                "token_type": "bearer",
                "expires_at": expires_at,
                "user": _user_payload(user),
            },
            status_code=status.HTTP_200_OK,
        )
    except Exception as exc:
        return handle_exception(exc, "Failed to sign in", db=db)


@router.get("/session")
def current_session(auth_context=Depends(get_current_session)):
    try:
        return create_response(
            message="Session fetched",
            data={
                "user": _user_payload(auth_context["user"]),
                "session": SessionResponse.model_validate(auth_context["session"]).model_dump(),
            },
        )
    except Exception as exc:
        return handle_exception(exc)


@router.post("/logout")
def logout_user(auth_context=Depends(get_current_session)):
    db: Session = auth_context["db"]
    try:
        session = auth_context["session"]
        user: User = auth_context["user"]

        session.is_active = False
        session.revoked_at = datetime.utcnow()
        session.token = None
        db.commit()
        auth_events.publish(AuthEvent.signed_out, {"user_id": user.id, "session_id": session.id})

        return create_response(
            message="Logout successful",
            data={"user_id": user.id, "session_id": session.id},
            status_code=status.HTTP_200_OK
        )
    except Exception as exc:
        return handle_exception(exc, db=db)
