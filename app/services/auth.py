# app/services/auth.py
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.auth.jwt import create_access_token, get_password_hash, verify_password
from app.core.errors import ConflictError, UnauthorizedError
from app.models.profile import Profile
from app.models.user import User
from app.schemas.user import UserCreate

logger = logging.getLogger(__name__)


def _issue_token(user: User) -> dict:
    return {"user": user, "token": create_access_token(subject=str(user.id))}


def register(db: Session, payload: UserCreate) -> dict:
    """Create a user and its profile in one transaction; the email constraint decides duplicates."""
    email = payload.email.strip().lower()
    user = User(
        email=email,
        name=payload.name,
        role=payload.role,
        hashed_password=get_password_hash(payload.password),
    )
    user.profile = Profile(email=email, name=payload.name, role=payload.role)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Registration rejected: email already registered")
        raise ConflictError("Email already registered")
    db.refresh(user)
    logger.info("Registered %s user id=%s", user.role, user.id)
    return _issue_token(user)


def login(db: Session, email: str, password: str) -> dict:
    user = db.execute(select(User).where(User.email == email.strip().lower())).scalars().first()
    # same answer for unknown email and wrong password
    if not user or not verify_password(password, user.hashed_password):
        raise UnauthorizedError("Invalid email or password")
    return _issue_token(user)
