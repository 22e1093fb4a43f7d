# app/api/job_routes.py
from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.deps import get_current_user, get_optional_user, require_employer, require_jobseeker
from app.db.session import get_db
from app.models.user import User
from app.schemas.application import ApplicationCreate, ApplicationSubmitted
from app.schemas.auth import MessageOut
from app.schemas.job import (
    ExperienceLevel, JobCreate, JobDetail, JobListItem, JobOut, JobType, JobUpdate, ViewTracked,
)
from app.services import applications as application_service
from app.services import jobs as job_service

router = APIRouter(prefix="/api/jobs", tags=["Jobs"])

@router.post("", response_model=JobOut, status_code=201, summary="Create a job")
def create_job(payload: JobCreate, employer: User = Depends(require_employer), db: Session = Depends(get_db)):
    return job_service.create_job(db, employer, payload)

@router.get("", response_model=List[JobListItem], summary="List active jobs")
def list_jobs(
    search: Optional[str] = None,
    type: Optional[JobType] = None,
    experience: Optional[ExperienceLevel] = None,
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    return job_service.list_active_jobs(db, user, search=search, type=type, experience=experience)

@router.get("/employer/{employer_id}", response_model=List[JobOut], summary="List jobs by employer")
def jobs_by_employer(employer_id: int, db: Session = Depends(get_db)):
    return job_service.list_jobs_by_employer(db, employer_id)

@router.post("/{job_id}/view", response_model=ViewTracked, summary="Track a job view")
def track_view(job_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return job_service.record_view(db, job_id, user)

@router.get("/{job_id}", response_model=JobDetail, summary="Job detail with stats")
def get_job(job_id: int, user: Optional[User] = Depends(get_optional_user), db: Session = Depends(get_db)):
    return job_service.get_job_detail(db, job_id, user)

@router.patch("/{job_id}", response_model=JobOut, summary="Update own job (partial)")
def update_job(job_id: int, payload: JobUpdate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return job_service.update_job(db, job_id, user, payload)

@router.delete("/{job_id}", response_model=MessageOut, summary="Delete own job")
def delete_job(job_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    job_service.delete_job(db, job_id, user)
    return {"message": "Job deleted successfully"}

@router.post("/{job_id}/apply", response_model=ApplicationSubmitted, status_code=201, summary="Apply to a job")
def apply(
    job_id: int,
    payload: Optional[ApplicationCreate] = None,
    applicant: User = Depends(require_jobseeker),
    db: Session = Depends(get_db),
):
    cover_letter = payload.cover_letter if payload else None
    application = application_service.apply(db, job_id, applicant, cover_letter)
    return {"message": "Application submitted successfully", "application": application}
