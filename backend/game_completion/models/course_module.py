"""SQLAlchemy model for the course-module row that places a game in a course."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, Column, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped
import ulid

from ..core.enums import CompletionTracking
from ..database import Base


class CourseModule(Base):
    """Completion settings the framework stores per activity placement."""

    __tablename__ = "course_modules"
    __table_args__ = (
        UniqueConstraint("modname", "instance", name="uq_course_modules_modname_instance"),
    )

    id: Mapped[str] = Column(
        String(26),
        primary_key=True,
        default=lambda: str(ulid.ULID()),
    )
    course_id: Mapped[str] = Column(String(26), nullable=False, index=True)
    modname: Mapped[str] = Column(String(20), nullable=False, default="game")
    instance: Mapped[str] = Column(String(26), nullable=False)
    completion: Mapped[int] = Column(
        Integer,
        nullable=False,
        default=CompletionTracking.DISABLED.value,
    )
    completionview: Mapped[bool] = Column(Boolean, nullable=False, default=False)
    # None means "require grade" is off; otherwise the grade item number to check
    completiongradeitemnumber: Mapped[Optional[int]] = Column(Integer, nullable=True)

    @property
    def tracking(self) -> CompletionTracking:
        return CompletionTracking(self.completion)
