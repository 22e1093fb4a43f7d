# app/services/jobs.py
import logging
from typing import List, Optional

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ForbiddenError, NotFoundError
from app.models.application import APPLICATION_STATUSES, Application
from app.models.job import Job, JobView, empty_analytics_data
from app.models.user import User
from app.schemas.job import (
    EmployerJobStats,
    JobAnalytics,
    JobCreate,
    JobDetail,
    JobListItem,
    JobOut,
    JobStats,
    JobSummary,
    JobUpdate,
    ViewTracked,
)

logger = logging.getLogger(__name__)

# shown until response times are actually measured
AVERAGE_RESPONSE_TIME = "N/A"


# ---------------------------
# Helper functions
# ---------------------------

def _like(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _filtered(stmt, search: Optional[str] = None, status: Optional[str] = None,
              type: Optional[str] = None, experience: Optional[str] = None):
    if search and search.strip():
        pattern = _like(search.strip())
        stmt = stmt.where(or_(
            Job.title.ilike(pattern, escape="\\"),
            Job.company.ilike(pattern, escape="\\"),
            Job.location.ilike(pattern, escape="\\"),
        ))
    if status:
        stmt = stmt.where(Job.status == status)
    if type:
        stmt = stmt.where(Job.type == type)
    if experience:
        stmt = stmt.where(Job.experience == experience)
    return stmt.order_by(Job.created_at.desc(), Job.id.desc())


def _application_count(db: Session, job_id: int) -> int:
    return db.execute(
        select(func.count(Application.id)).where(Application.job_id == job_id)
    ).scalar_one()


def get_job(db: Session, job_id: int) -> Job:
    job = db.get(Job, job_id)
    if job is None:
        raise NotFoundError("Job not found")
    return job


def get_owned_job(db: Session, job_id: int, user: User, action: str = "update this job") -> Job:
    """Load a job and make sure `user` posted it."""
    job = get_job(db, job_id)
    if job.employer_id != user.id:
        logger.warning("User id=%s denied: %s (job id=%s)", user.id, action, job_id)
        raise ForbiddenError(f"Not authorized to {action}")
    return job


def _insert_first_view(db: Session, job_id: int, viewer_id: int) -> bool:
    """Insert the (job, viewer) row unless it exists. True when this call wrote it."""
    dialect = db.get_bind().dialect.name
    if dialect in ("sqlite", "postgresql"):
        if dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert
        else:
            from sqlalchemy.dialects.postgresql import insert
        stmt = (
            insert(JobView.__table__)
            .values(job_id=job_id, user_id=viewer_id)
            .on_conflict_do_nothing(index_elements=["job_id", "user_id"])
        )
        return db.execute(stmt).rowcount == 1

    try:
        with db.begin_nested():
            db.add(JobView(job_id=job_id, user_id=viewer_id))
    except IntegrityError:
        return False
    return True


def track_view(db: Session, job: Job, viewer_id: int) -> Job:
    """
    Count one view of `job` by `viewer_id`. `views` always goes up by one;
    `uniqueViews` and `viewHistory` only move on the viewer's first view.
    Both counters are incremented inside the store, never read-modify-write.
    """
    db.execute(
        update(Job)
        .where(Job.id == job.id)
        .values(views=Job.views + 1)
        .execution_options(synchronize_session=False)
    )
    if _insert_first_view(db, job.id, viewer_id):
        db.execute(
            update(Job)
            .where(Job.id == job.id)
            .values(unique_views=Job.unique_views + 1)
            .execution_options(synchronize_session=False)
        )
    db.commit()
    db.expire(job)
    return job


# ---------------------------
# Job lifecycle
# ---------------------------

def create_job(db: Session, employer: User, payload: JobCreate) -> Job:
    job = Job(
        **payload.model_dump(),
        employer_id=employer.id,
        views=0,
        unique_views=0,
        analytics_data=empty_analytics_data(),
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info("Employer id=%s created job id=%s", employer.id, job.id)
    return job


def list_active_jobs(db: Session, user: Optional[User] = None, search: Optional[str] = None,
                     type: Optional[str] = None, experience: Optional[str] = None) -> List[JobListItem]:
    """Public listing; annotated with the caller's own application when signed in."""
    jobs = db.execute(
        _filtered(select(Job), search=search, status="active", type=type, experience=experience)
    ).scalars().all()
    items = [JobListItem.model_validate(j) for j in jobs]
    if user is None or not items:
        return items

    applied = dict(db.execute(
        select(Application.job_id, Application.status).where(
            Application.applicant_id == user.id,
            Application.job_id.in_([j.id for j in jobs]),
        )
    ).all())
    for item in items:
        if item.id in applied:
            item.is_applied = True
            item.application_status = applied[item.id]
    return items


def list_jobs_by_employer(db: Session, employer_id: int) -> List[Job]:
    return db.execute(_filtered(select(Job).where(Job.employer_id == employer_id))).scalars().all()


def list_own_jobs(db: Session, employer: User, search: Optional[str] = None, status: Optional[str] = None,
                  type: Optional[str] = None, experience: Optional[str] = None) -> List[Job]:
    stmt = _filtered(
        select(Job).where(Job.employer_id == employer.id),
        search=search, status=status, type=type, experience=experience,
    )
    return db.execute(stmt).scalars().all()


def get_job_detail(db: Session, job_id: int, user: Optional[User] = None) -> JobDetail:
    job = get_job(db, job_id)
    if user is not None:
        track_view(db, job, user.id)

    data = JobOut.model_validate(job).model_dump()
    data["stats"] = JobStats(
        views=job.views or 0,
        unique_views=job.unique_views or 0,
        application_count=_application_count(db, job.id),
    )
    return JobDetail.model_validate(data)


def record_view(db: Session, job_id: int, user: User) -> ViewTracked:
    job = track_view(db, get_job(db, job_id), user.id)
    return ViewTracked(message="View tracked successfully", views=job.views, unique_views=job.unique_views)


def update_job(db: Session, job_id: int, employer: User, payload: JobUpdate) -> Job:
    job = get_owned_job(db, job_id, employer, "update this job")
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in changes.items():
        setattr(job, field, value)
    db.commit()
    db.refresh(job)
    logger.info("Job id=%s updated (%s)", job.id, ", ".join(sorted(changes)) or "no changes")
    return job


def delete_job(db: Session, job_id: int, employer: User) -> None:
    job = get_owned_job(db, job_id, employer, "delete this job")
    db.delete(job)
    db.commit()
    logger.info("Job id=%s deleted by employer id=%s", job_id, employer.id)


def set_status(db: Session, job_id: int, employer: User, status: str) -> Job:
    job = get_owned_job(db, job_id, employer, "update this job")
    job.status = status
    db.commit()
    db.refresh(job)
    logger.info("Job id=%s status -> %s", job.id, status)
    return job


# ---------------------------
# Stats & analytics
# ---------------------------

def job_stats(db: Session, job_id: int, employer: User) -> EmployerJobStats:
    job = get_owned_job(db, job_id, employer, "view these stats")
    return EmployerJobStats(views=job.views or 0, applications=_application_count(db, job.id))


def job_analytics(db: Session, job_id: int, employer: User) -> JobAnalytics:
    """Read-only aggregate over the live applications of one job."""
    job = get_owned_job(db, job_id, employer, "view these analytics")

    by_status = {s: 0 for s in APPLICATION_STATUSES}
    rows = db.execute(
        select(Application.status, func.count(Application.id))
        .where(Application.job_id == job.id)
        .group_by(Application.status)
    ).all()
    for status, count in rows:
        by_status[status] = count

    total = sum(by_status.values())
    views = job.views or 0
    return JobAnalytics(
        job=JobSummary.model_validate(job),
        views=views,
        unique_views=job.unique_views or 0,
        applications=total,
        applications_by_status=by_status,
        conversion_rate=(total / views * 100) if views > 0 else 0,
        average_response_time=AVERAGE_RESPONSE_TIME,
    )
