# app/schemas/application.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from app.schemas.base import CamelModel

ApplicationStatus = Literal["pending", "reviewed", "accepted", "rejected"]


class ApplicationCreate(CamelModel):
    cover_letter: Optional[str] = None


class ApplicationUpdate(CamelModel):
    status: Optional[ApplicationStatus] = None
    notes: Optional[str] = None


class ApplicationOut(CamelModel):
    id: int
    job_id: int
    applicant_id: int
    employer_id: int
    cover_letter: Optional[str] = None
    status: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ApplicationSubmitted(CamelModel):
    message: str
    application: ApplicationOut


class ApplicantSummary(CamelModel):
    id: int
    name: str
    email: str
    location: Optional[str] = None
    headline: Optional[str] = None
    skills: List[str] = []


class ApplicationWithApplicant(ApplicationOut):
    applicant: Optional[ApplicantSummary] = None


class JobBrief(CamelModel):
    id: Optional[int] = None
    title: str
    company: str


class ApplicationWithJob(ApplicationOut):
    job: JobBrief


class RecentApplicantBrief(CamelModel):
    id: Optional[int] = None
    name: str
    email: str


class RecentApplication(CamelModel):
    id: int
    status: str
    cover_letter: Optional[str] = None
    created_at: Optional[datetime] = None
    applicant: RecentApplicantBrief
    job: JobBrief


class RecentApplications(CamelModel):
    applications: List[RecentApplication] = Field(default_factory=list)
