"""
Auth Routes
Email/password accounts backed by a signed session cookie
"""

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from ..auth import get_current_user, login_user, logout_user
from ..config import FRONTEND_URL, PASSWORD_RESET_MAX_AGE
from ..database import get_db
from ..domain.notifications import send_email_best_effort
from ..email_service import send_password_reset_email
from ..models import Mentee, Mentor, User, UserRole
from ..rate_limiter import create_rate_limiter
from ..security_utils import (
    generate_timed_token,
    hash_password,
    verify_password,
    verify_timed_token,
)
from ..shared.validators import validate_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])

MIN_PASSWORD_LENGTH = 8


class SignupRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)
    role: Literal["mentor", "mentee"]
    full_name: Optional[str] = Field(None, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)


class LoginRequest(BaseModel):
    email: str
    password: str


class ForgotPasswordRequest(BaseModel):
    email: str


class ResetPasswordRequest(BaseModel):
    token: str
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)


class UserResponse(BaseModel):
    id: str
    email: str
    role: str
    full_name: Optional[str] = None
    profile_id: Optional[str] = None


def _password_fingerprint(user: User) -> str:
    # Changes whenever the password does, so a reset link works only once
    return user.password_hash[-16:]


def _user_response(user: User, db: Session) -> dict:
    profile_model = Mentor if user.role == UserRole.MENTOR.value else Mentee
    profile = db.query(profile_model).filter(profile_model.email == user.email).first()
    return {
        "id": user.id,
        "email": user.email,
        "role": user.role,
        "full_name": user.full_name,
        "profile_id": profile.id if profile else None,
    }


# Rate limiters
rate_limit_login = create_rate_limiter(
    limit=10,
    window_seconds=60,
    key_prefix="login",
    use_ip=True,
)

rate_limit_password_reset = create_rate_limiter(
    limit=10,
    window_seconds=3600,  # 1 hour
    key_prefix="password_reset",
    use_ip=True,
)


@router.post("/signup", response_model=UserResponse, status_code=201)
async def signup(
    data: SignupRequest,
    request: Request,
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit_login),
):
    """Create an account and start a session"""
    if db.query(User).filter(User.email == data.email).first():
        raise HTTPException(status_code=409, detail="An account with this email already exists")

    user = User(
        email=data.email,
        password_hash=hash_password(data.password),
        role=data.role,
        full_name=data.full_name.strip() if data.full_name else None,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    login_user(request, user)
    logger.info(f"✅ New {user.role} account {user.id}")
    return _user_response(user, db)


@router.post("/login", response_model=UserResponse)
async def login(
    data: LoginRequest,
    request: Request,
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit_login),
):
    email = (data.email or "").strip().lower()
    user = db.query(User).filter(User.email == email).first()

    if not user or not verify_password(data.password, user.password_hash):
        logger.warning(f"Failed login attempt for {email}")
        raise HTTPException(status_code=401, detail="Invalid email or password")

    login_user(request, user)
    logger.info(f"User {user.id} logged in")
    return _user_response(user, db)


@router.post("/logout")
async def logout(request: Request):
    logout_user(request)
    return {"message": "Logged out"}


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """The signed-in user and the id of their mentor or mentee profile"""
    return _user_response(current_user, db)


@router.post("/forgot-password")
async def forgot_password(
    data: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit_password_reset),
):
    """Email a password reset link; the response never reveals whether the account exists"""
    email = (data.email or "").strip().lower()
    user = db.query(User).filter(User.email == email).first()

    if user:
        token = generate_timed_token({"uid": user.id, "fp": _password_fingerprint(user)})
        reset_link = f"{FRONTEND_URL}/reset-password?token={token}"
        await send_email_best_effort(
            "Password reset", send_password_reset_email, to=user.email, reset_link=reset_link
        )
    else:
        logger.info(f"Password reset requested for unknown email {email}")

    return {"message": "If an account exists for this email, a reset link has been sent."}


@router.post("/reset-password")
async def reset_password(
    data: ResetPasswordRequest,
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit_password_reset),
):
    payload = verify_timed_token(data.token, max_age=PASSWORD_RESET_MAX_AGE)
    if not payload:
        raise HTTPException(status_code=400, detail="Invalid or expired reset link")

    user = db.query(User).filter(User.id == payload.get("uid")).first()
    if not user or payload.get("fp") != _password_fingerprint(user):
        raise HTTPException(status_code=400, detail="Invalid or expired reset link")

    user.password_hash = hash_password(data.new_password)
    db.commit()
    logger.info(f"Password reset for user {user.id}")
    return {"message": "Password reset successful", "success": True}
