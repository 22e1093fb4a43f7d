# app/api/profile_routes.py
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.deps import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.application import ApplicationWithJob
from app.schemas.profile import ProfileOut, ProfileUpdate
from app.services import applications as application_service
from app.services import profiles as profile_service

router = APIRouter(prefix="/api/profile", tags=["Profile"])

@router.get("", response_model=ProfileOut, summary="Own profile")
def get_profile(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return profile_service.get_own_profile(db, user)

@router.put("", response_model=ProfileOut, summary="Update own profile (partial)")
def update_profile(payload: ProfileUpdate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return profile_service.update_own_profile(db, user, payload)

@router.get("/applications", response_model=List[ApplicationWithJob], summary="Own applications (newest first)")
def my_applications(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return application_service.list_for_applicant(db, user)
