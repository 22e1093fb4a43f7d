# app/schemas/job.py
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import BeforeValidator, Field

from app.models.job import JOB_STATUSES
from app.schemas.base import CamelModel

JobType = Literal["full-time", "part-time", "contract", "internship"]
ExperienceLevel = Literal["entry", "mid", "senior", "lead", "manager"]


def _canonical_status(v: Any):
    # "Active" / "CLOSED" are accepted and stored canonically
    if isinstance(v, str) and v.strip().lower() in JOB_STATUSES:
        return v.strip().lower()
    return v


JobStatus = Annotated[Literal["active", "closed", "draft"], BeforeValidator(_canonical_status)]


class JobCreate(CamelModel):
    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    location: str = Field(min_length=1)
    type: JobType
    description: str = Field(min_length=1)
    requirements: str = Field(min_length=1)
    salary: str = Field(min_length=1)
    experience: ExperienceLevel
    skills: str = Field(min_length=1)
    status: JobStatus = "active"


class JobUpdate(CamelModel):
    """Partial update; employer and counters are not writable."""
    title: Optional[str] = Field(default=None, min_length=1)
    company: Optional[str] = Field(default=None, min_length=1)
    location: Optional[str] = Field(default=None, min_length=1)
    type: Optional[JobType] = None
    description: Optional[str] = Field(default=None, min_length=1)
    requirements: Optional[str] = Field(default=None, min_length=1)
    salary: Optional[str] = Field(default=None, min_length=1)
    experience: Optional[ExperienceLevel] = None
    skills: Optional[str] = Field(default=None, min_length=1)
    status: Optional[JobStatus] = None


class JobStatusUpdate(CamelModel):
    status: JobStatus


class EmployerSummary(CamelModel):
    id: int
    name: str


class ViewEntry(CamelModel):
    user_id: int
    viewed_at: Optional[datetime] = None


class JobOut(CamelModel):
    id: int
    title: str
    company: str
    location: str
    type: str
    description: str
    requirements: str
    salary: str
    experience: str
    skills: str
    employer_id: int
    employer: Optional[EmployerSummary] = None
    status: str
    views: int = 0
    unique_views: int = 0
    view_history: List[ViewEntry] = []
    analytics_data: Dict[str, Any] = {}
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class JobListItem(JobOut):
    is_applied: bool = False
    application_status: Optional[str] = None


class JobStats(CamelModel):
    views: int
    unique_views: int
    application_count: int


class JobDetail(JobOut):
    stats: JobStats


class ViewTracked(CamelModel):
    message: str
    views: int
    unique_views: int


class EmployerJobStats(CamelModel):
    views: int
    applications: int


class JobSummary(CamelModel):
    id: int
    title: str
    company: str
    location: str
    status: str
    created_at: Optional[datetime] = None


class JobAnalytics(CamelModel):
    job: JobSummary
    views: int
    unique_views: int
    applications: int
    applications_by_status: Dict[str, int]
    conversion_rate: float
    average_response_time: str
