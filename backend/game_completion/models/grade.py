"""
SQLAlchemy models for grade book items and learner grades.

The grade book is owned by the host platform; these mappings cover the
columns needed to decide whether a learner passed an activity.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Column, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, relationship
import ulid

from ..core.constants import COMPONENT_NAME, DEFAULT_GRADE_ITEM_NUMBER, ITEM_TYPE_MOD
from ..core.enums import GradeType
from ..database import Base


class GradeItem(Base):
    """A gradable column in the course grade book."""

    __tablename__ = "grade_items"

    id: Mapped[str] = Column(
        String(26),
        primary_key=True,
        default=lambda: str(ulid.ULID()),
    )
    course_id: Mapped[str] = Column(String(26), nullable=False, index=True)
    itemname: Mapped[Optional[str]] = Column(String(255), nullable=True)
    itemtype: Mapped[str] = Column(String(30), nullable=False, default=ITEM_TYPE_MOD)
    itemmodule: Mapped[Optional[str]] = Column(String(30), nullable=True, default=COMPONENT_NAME)
    iteminstance: Mapped[Optional[str]] = Column(String(26), nullable=True)
    itemnumber: Mapped[Optional[int]] = Column(
        Integer,
        nullable=True,
        default=DEFAULT_GRADE_ITEM_NUMBER,
    )
    outcome_id: Mapped[Optional[str]] = Column(String(26), nullable=True)
    gradetype: Mapped[int] = Column(Integer, nullable=False, default=GradeType.VALUE.value)
    grademax: Mapped[float] = Column(Float, nullable=False, default=100.0)
    grademin: Mapped[float] = Column(Float, nullable=False, default=0.0)
    gradepass: Mapped[Optional[float]] = Column(Float, nullable=True, default=0.0)

    grades: Mapped[list["GradeGrade"]] = relationship(
        "GradeGrade",
        back_populates="item",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class GradeGrade(Base):
    """A learner's grade for one grade item."""

    __tablename__ = "grade_grades"
    __table_args__ = (
        UniqueConstraint("item_id", "user_id", name="uq_grade_grades_item_user"),
    )

    id: Mapped[str] = Column(
        String(26),
        primary_key=True,
        default=lambda: str(ulid.ULID()),
    )
    item_id: Mapped[str] = Column(
        String(26),
        ForeignKey("grade_items.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = Column(String(26), nullable=False, index=True)
    rawgrade: Mapped[Optional[float]] = Column(Float, nullable=True)
    finalgrade: Mapped[Optional[float]] = Column(Float, nullable=True)

    item: Mapped[GradeItem] = relationship("GradeItem", back_populates="grades")
