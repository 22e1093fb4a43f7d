# app/services/applications.py
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, ForbiddenError, NotFoundError
from app.models.application import Application
from app.models.user import User
from app.schemas.application import (
    ApplicantSummary,
    ApplicationOut,
    ApplicationUpdate,
    ApplicationWithApplicant,
    ApplicationWithJob,
    JobBrief,
    RecentApplicantBrief,
    RecentApplication,
)
from app.services.jobs import get_job, get_owned_job

logger = logging.getLogger(__name__)

RECENT_LIMIT = 4

# fallbacks when a joined record is gone or incomplete
ANONYMOUS_NAME = "Anonymous"
NO_EMAIL = "No email provided"
UNTITLED_JOB = "Untitled job"
UNKNOWN_COMPANY = "Unknown company"


def _newest_first(stmt):
    return stmt.order_by(Application.created_at.desc(), Application.id.desc())


def _job_brief(app: Application) -> JobBrief:
    job = app.job
    if job is None:
        return JobBrief(id=app.job_id, title=UNTITLED_JOB, company=UNKNOWN_COMPANY)
    return JobBrief(id=job.id, title=job.title or UNTITLED_JOB, company=job.company or UNKNOWN_COMPANY)


def _applicant_summary(user: Optional[User]) -> Optional[ApplicantSummary]:
    if user is None:
        return None
    profile = user.profile
    return ApplicantSummary(
        id=user.id,
        name=user.name or ANONYMOUS_NAME,
        email=user.email or NO_EMAIL,
        location=profile.location if profile else None,
        headline=profile.headline if profile else None,
        skills=(profile.skills or []) if profile else [],
    )


def apply(db: Session, job_id: int, applicant: User, cover_letter: Optional[str] = None) -> Application:
    """
    Submit an application. The (job, applicant) unique constraint is the
    duplicate guard, so two racing submissions still yield one row.
    """
    job = get_job(db, job_id)
    application = Application(
        job_id=job.id,
        applicant_id=applicant.id,
        employer_id=job.employer_id,
        cover_letter=cover_letter,
        status="pending",
    )
    db.add(application)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Duplicate application rejected (job id=%s, user id=%s)", job_id, applicant.id)
        raise ConflictError("You have already applied for this job")
    db.refresh(application)
    logger.info(
        "Application id=%s submitted (job id=%s, user id=%s, employer id=%s)",
        application.id, job.id, applicant.id, job.employer_id,
    )
    return application


def list_for_job(db: Session, job_id: int, employer: User) -> List[ApplicationWithApplicant]:
    job = get_owned_job(db, job_id, employer, "view these applications")
    rows = db.execute(
        _newest_first(select(Application).where(Application.job_id == job.id))
    ).scalars().all()
    return [
        ApplicationWithApplicant.model_validate(
            {**ApplicationOut.model_validate(a).model_dump(), "applicant": _applicant_summary(a.applicant)}
        )
        for a in rows
    ]


def recent_for_employer(db: Session, employer: User, limit: int = RECENT_LIMIT) -> List[RecentApplication]:
    rows = db.execute(
        _newest_first(select(Application).where(Application.employer_id == employer.id)).limit(limit)
    ).scalars().all()
    out = []
    for a in rows:
        user = a.applicant
        out.append(RecentApplication(
            id=a.id,
            status=a.status,
            cover_letter=a.cover_letter,
            created_at=a.created_at,
            applicant=RecentApplicantBrief(
                id=user.id if user else None,
                name=(user.name if user else None) or ANONYMOUS_NAME,
                email=(user.email if user else None) or NO_EMAIL,
            ),
            job=_job_brief(a),
        ))
    return out


def list_for_applicant(db: Session, applicant: User) -> List[ApplicationWithJob]:
    rows = db.execute(
        _newest_first(select(Application).where(Application.applicant_id == applicant.id))
    ).scalars().all()
    return [
        ApplicationWithJob.model_validate({**ApplicationOut.model_validate(a).model_dump(), "job": _job_brief(a)})
        for a in rows
    ]


def update_application(db: Session, application_id: int, employer: User, payload: ApplicationUpdate) -> Application:
    application = db.get(Application, application_id)
    if application is None:
        raise NotFoundError("Application not found")
    if application.employer_id != employer.id:
        raise ForbiddenError("Not authorized to update this application")

    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in changes.items():
        setattr(application, field, value)
    db.commit()
    db.refresh(application)
    if "status" in changes:
        logger.info("Application id=%s status -> %s", application.id, application.status)
    return application
