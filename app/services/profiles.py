# app/services/profiles.py
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.profile import Profile
from app.models.user import User
from app.schemas.profile import ProfileUpdate

logger = logging.getLogger(__name__)


def _is_blank(value) -> bool:
    return value is None or value == "" or value == []


def get_own_profile(db: Session, user: User) -> Profile:
    profile = db.execute(select(Profile).where(Profile.user_id == user.id)).scalars().first()
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


def update_own_profile(db: Session, user: User, payload: ProfileUpdate) -> Profile:
    """
    Partial update scoped to the caller. Null and empty values count as
    "not sent", so a field can be changed but never cleared here.
    """
    profile = get_own_profile(db, user)
    changes = {
        k: v for k, v in payload.model_dump(exclude_unset=True).items()
        if not _is_blank(v)
    }
    for field, value in changes.items():
        setattr(profile, field, value)
    if "name" in changes:
        user.name = changes["name"]
    db.commit()
    db.refresh(profile)
    logger.info("Profile updated for user id=%s (%s)", user.id, ", ".join(sorted(changes)) or "no changes")
    return profile
