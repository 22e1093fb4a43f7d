from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Integer, Text, DateTime, ForeignKey, UniqueConstraint, func
from app.db.base import Base

APPLICATION_STATUSES = ("pending", "reviewed", "accepted", "rejected")

class Application(Base):
    __tablename__ = "applications"
    # a user can only apply once to a job
    __table_args__ = (UniqueConstraint("job_id", "applicant_id", name="uq_applications_job_applicant"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    # no FK: applications are kept when their job is deleted
    job_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    applicant_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False
    )
    employer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False
    )
    cover_letter: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    job = relationship(
        "Job",
        primaryjoin="foreign(Application.job_id) == Job.id",
        viewonly=True,
        lazy="joined",
    )
    applicant = relationship("User", foreign_keys=[applicant_id], lazy="joined")
