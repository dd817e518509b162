# backend/game_completion/repositories/grade_repository.py
"""
Repository for grade book lookups.

Reads grade items and learner grades; deciding whether a grade passes is
left to the grading service.
"""

from __future__ import annotations

from typing import Optional, Tuple

from sqlalchemy.orm import Session

from ..core.constants import COMPONENT_NAME, DEFAULT_GRADE_ITEM_NUMBER, ITEM_TYPE_MOD
from ..models.grade import GradeGrade, GradeItem
from .base_repository import BaseRepository


class GradeRepository(BaseRepository[GradeItem]):
    """Data access helpers for grade items and grades."""

    def __init__(self, db: Session):
        super().__init__(db, GradeItem)

    def fetch_activity_grade(
        self,
        instance_id: str,
        user_id: str,
        *,
        itemmodule: str = COMPONENT_NAME,
        itemnumber: int = DEFAULT_GRADE_ITEM_NUMBER,
    ) -> Optional[Tuple[GradeItem, GradeGrade]]:
        """
        Return (grade item, grade) for the learner in one query.

        None when the activity has no grade item or the learner has no grade row.
        """
        query = (
            self.db.query(GradeItem, GradeGrade)
            .join(GradeGrade, GradeGrade.item_id == GradeItem.id)
            .filter(
                *self._activity_item_filters(instance_id, itemmodule, itemnumber),
                GradeGrade.user_id == user_id,
            )
        )
        row = self._execute_first(query)
        if row is None:
            return None
        item, grade = row
        return item, grade

    @staticmethod
    def _activity_item_filters(instance_id: str, itemmodule: str, itemnumber: int) -> tuple:
        # Outcome items share the module/instance of the main item
        return (
            GradeItem.itemtype == ITEM_TYPE_MOD,
            GradeItem.itemmodule == itemmodule,
            GradeItem.iteminstance == instance_id,
            GradeItem.itemnumber == itemnumber,
            GradeItem.outcome_id.is_(None),
        )
