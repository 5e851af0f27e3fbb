"""Configured job definitions."""

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from vbrstatus.models.base import Base


class BJobRow(Base):
    """Row of the [BJobs] table."""

    __tablename__ = "BJobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    type: Mapped[int] = mapped_column(Integer)
    schedule_enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    options: Mapped[str | None] = mapped_column(Text, nullable=True)  # JobOptionsRoot XML
