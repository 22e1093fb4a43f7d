from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import (
    String, Integer, Text, DateTime, ForeignKey, JSON, UniqueConstraint, func,
)
from app.db.base import Base

JOB_STATUSES = ("active", "closed", "draft")


def empty_analytics_data() -> dict:
    return {
        "viewsByDate": [],
        "applicationsByDate": [],
        "applicationsByStatus": [],
        "timeOfDayData": [],
        "sourceBreakdown": [],
    }


class Job(Base):
    __tablename__ = "jobs"
    # never reuse a deleted job id; orphaned applications still reference it
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    company: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    requirements: Mapped[str] = mapped_column(Text, nullable=False)
    salary: Mapped[str] = mapped_column(String(100), nullable=False)
    experience: Mapped[str] = mapped_column(String(20), nullable=False)
    skills: Mapped[str] = mapped_column(Text, nullable=False)
    employer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False
    )
    status: Mapped[str] = mapped_column(String(20), default="active", index=True, nullable=False)

    # counters only ever move through in-store increments (see services.jobs.track_view)
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    unique_views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    analytics_data: Mapped[dict] = mapped_column(JSON, default=empty_analytics_data, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    employer = relationship("User", lazy="joined")
    view_history = relationship(
        "JobView",
        order_by="JobView.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )


class JobView(Base):
    """One row per distinct viewer of a job; the first view wins."""
    __tablename__ = "job_views"
    __table_args__ = (UniqueConstraint("job_id", "user_id", name="uq_job_views_job_user"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    job_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("jobs.id", ondelete="CASCADE"),
        index=True,
        nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )
    viewed_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
