# app/auth/deps.py
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.auth.jwt import decode_access_token
from app.core.errors import ForbiddenError, UnauthorizedError
from app.db.session import get_db
from app.models.user import User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def _resolve_user(db: Session, token: str) -> User:
    user = db.get(User, decode_access_token(token))
    if user is None:
        raise UnauthorizedError("Invalid or expired token")
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Principal for routes that require a bearer token."""
    if credentials is None:
        raise UnauthorizedError()
    return _resolve_user(db, credentials.credentials)


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Principal when a valid token is sent; anonymous otherwise."""
    if credentials is None:
        return None
    try:
        return _resolve_user(db, credentials.credentials)
    except UnauthorizedError:
        logger.debug("Ignoring invalid token on public route")
        return None


def require_employer(user: User = Depends(get_current_user)) -> User:
    if user.role != "employer":
        raise ForbiddenError("Employer account required")
    return user


def require_jobseeker(user: User = Depends(get_current_user)) -> User:
    if user.role != "jobseeker":
        raise ForbiddenError("Job seeker account required")
    return user
