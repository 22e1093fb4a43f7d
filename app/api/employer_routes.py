# app/api/employer_routes.py
from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.deps import require_employer
from app.db.session import get_db
from app.models.user import User
from app.schemas.application import (
    ApplicationOut, ApplicationUpdate, ApplicationWithApplicant, RecentApplications,
)
from app.schemas.auth import MessageOut
from app.schemas.job import (
    EmployerJobStats, ExperienceLevel, JobAnalytics, JobCreate, JobOut, JobStatus,
    JobStatusUpdate, JobType, JobUpdate,
)
from app.services import applications as application_service
from app.services import jobs as job_service

router = APIRouter(prefix="/api/employer", tags=["Employer"])

@router.get("/jobs", response_model=List[JobOut], summary="Own jobs (newest first)")
def my_jobs(employer: User = Depends(require_employer), db: Session = Depends(get_db)):
    return job_service.list_own_jobs(db, employer)

@router.post("/jobs", response_model=JobOut, status_code=201, summary="Create a job")
def create_job(payload: JobCreate, employer: User = Depends(require_employer), db: Session = Depends(get_db)):
    return job_service.create_job(db, employer, payload)

@router.put("/jobs/{job_id}", response_model=JobOut, summary="Update own job")
def update_job(job_id: int, payload: JobUpdate, employer: User = Depends(require_employer), db: Session = Depends(get_db)):
    return job_service.update_job(db, job_id, employer, payload)

@router.delete("/jobs/{job_id}", response_model=MessageOut, summary="Delete own job")
def delete_job(job_id: int, employer: User = Depends(require_employer), db: Session = Depends(get_db)):
    job_service.delete_job(db, job_id, employer)
    return {"message": "Job removed"}

@router.get("/jobs/{job_id}/stats", response_model=EmployerJobStats)
def job_stats(job_id: int, employer: User = Depends(require_employer), db: Session = Depends(get_db)):
    return job_service.job_stats(db, job_id, employer)

@router.patch("/jobs/{job_id}/status", response_model=JobOut)
def update_status(job_id: int, payload: JobStatusUpdate, employer: User = Depends(require_employer), db: Session = Depends(get_db)):
    return job_service.set_status(db, job_id, employer, payload.status)

@router.get("/jobs/{job_id}/applications", response_model=List[ApplicationWithApplicant])
def job_applications(job_id: int, employer: User = Depends(require_employer), db: Session = Depends(get_db)):
    return application_service.list_for_job(db, job_id, employer)

@router.get("/jobs/{job_id}/analytics", response_model=JobAnalytics)
def job_analytics(job_id: int, employer: User = Depends(require_employer), db: Session = Depends(get_db)):
    return job_service.job_analytics(db, job_id, employer)

@router.get("/recent-applications", response_model=RecentApplications, summary="Latest applications across own jobs")
def recent_applications(employer: User = Depends(require_employer), db: Session = Depends(get_db)):
    return {"applications": application_service.recent_for_employer(db, employer)}

@router.get("/filtered-jobs", response_model=List[JobOut], summary="Search own jobs")
def filtered_jobs(
    search: Optional[str] = None,
    status: Optional[JobStatus] = None,
    type: Optional[JobType] = None,
    experience: Optional[ExperienceLevel] = None,
    employer: User = Depends(require_employer),
    db: Session = Depends(get_db),
):
    return job_service.list_own_jobs(db, employer, search=search, status=status, type=type, experience=experience)

@router.patch("/applications/{application_id}", response_model=ApplicationOut, summary="Review an application")
def update_application(
    application_id: int,
    payload: ApplicationUpdate,
    employer: User = Depends(require_employer),
    db: Session = Depends(get_db),
):
    return application_service.update_application(db, application_id, employer, payload)
