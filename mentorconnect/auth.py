import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from .database import get_db
from .models import Mentee, Mentor, User, UserRole

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"


def login_user(request: Request, user: User) -> None:
    """Bind the user to the signed session cookie"""
    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id


def logout_user(request: Request) -> None:
    request.session.clear()


def get_optional_user(request: Request, db: Session = Depends(get_db)) -> Optional[User]:
    """Resolve the session user, or None for anonymous requests"""
    user_id = request.session.get(SESSION_USER_KEY)
    if not user_id:
        return None

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        # Stale cookie for a removed account
        logger.warning(f"Session references unknown user {user_id}")
        request.session.clear()
        return None
    return user


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def get_current_mentor(
    user: User = Depends(get_current_user), db: Session = Depends(get_db)
) -> Mentor:
    """The mentor profile owned by the session user"""
    if user.role != UserRole.MENTOR.value:
        raise HTTPException(status_code=403, detail="Mentor account required")

    mentor = db.query(Mentor).filter(Mentor.email == user.email).first()
    if not mentor:
        raise HTTPException(status_code=404, detail="Mentor profile not found")
    return mentor


def get_current_mentee(
    user: User = Depends(get_current_user), db: Session = Depends(get_db)
) -> Mentee:
    """The mentee profile owned by the session user"""
    if user.role != UserRole.MENTEE.value:
        raise HTTPException(status_code=403, detail="Mentee account required")

    mentee = db.query(Mentee).filter(Mentee.email == user.email).first()
    if not mentee:
        raise HTTPException(status_code=404, detail="Mentee profile not found")
    return mentee


def ensure_same_email(user: User, email: str, detail: str = "Not allowed") -> None:
    """Raise 403 unless the session user owns the given email address"""
    if not email or user.email.lower() != email.lower():
        logger.warning(f"Ownership check failed for user {user.id}")
        raise HTTPException(status_code=403, detail=detail)
