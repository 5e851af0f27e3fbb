"""Job session history (one row per job execution)."""

from datetime import datetime

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from vbrstatus.models.base import Base


class JobSessionRow(Base):
    """Row of the [Backup.Model.JobSessions] view."""

    __tablename__ = "Backup.Model.JobSessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    job_id: Mapped[str] = mapped_column(String(36))
    job_type: Mapped[int] = mapped_column(Integer)
    job_name: Mapped[str] = mapped_column(String(255))
    result: Mapped[int] = mapped_column(Integer)  # -1 none, 0 success, 1 warning, 2 failed
    is_retry: Mapped[bool] = mapped_column(Boolean, default=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    log_xml: Mapped[str | None] = mapped_column(Text, nullable=True)
    progress: Mapped[int] = mapped_column(Integer, default=0)
    creation_time: Mapped[datetime | None] = mapped_column(nullable=True)
    end_time: Mapped[datetime | None] = mapped_column(nullable=True)
