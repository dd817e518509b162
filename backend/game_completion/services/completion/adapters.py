# backend/game_completion/services/completion/adapters.py
"""
Repository-backed implementations of the completion lookups.

Each adapter turns ORM rows into the immutable snapshots the evaluator works
with. Store errors propagate as RepositoryException; a missing game raises
ActivityNotFoundException.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...core.enums import GradeType
from ...repositories.factory import RepositoryFactory
from ...schemas.completion import ActivityConfiguration, GradeRecord
from .. import grading

logger = logging.getLogger(__name__)


class RepositoryActivityConfigReader:
    def __init__(self, db: Session):
        self.game_repository = RepositoryFactory.create_game_repository(db)

    def get_activity_config(self, activity_id: str) -> ActivityConfiguration:
        game = self.game_repository.get_game_or_raise(activity_id)
        return ActivityConfiguration(
            activity_id=game.id,
            course_id=game.course_id,
            completion_pass=bool(game.completionpass),
            completion_attempts_exhausted=bool(game.completionattemptsexhausted),
            max_attempts=max(int(game.maxattempts or 0), 0),
            grade_enabled=(game.grade or 0) > 0,
        )


class RepositoryGradeLookup:
    def __init__(self, db: Session):
        self.grade_repository = RepositoryFactory.create_grade_repository(db)

    def get_grade_record(self, activity_id: str, learner_id: str) -> Optional[GradeRecord]:
        row = self.grade_repository.fetch_activity_grade(activity_id, learner_id)
        if row is None:
            return None

        item, grade = row
        return GradeRecord(
            learner_id=grade.user_id,
            raw_grade=grade.rawgrade,
            final_grade=grade.finalgrade,
            pass_threshold=item.gradepass,
            grade_min=item.grademin,
            grade_max=item.grademax,
            grade_type=_grade_type(item.gradetype, item.id),
        )

    def is_passed(self, record: GradeRecord) -> Optional[bool]:
        return grading.is_passed(record)


class RepositoryAttemptCounter:
    def __init__(self, db: Session):
        self.game_repository = RepositoryFactory.create_game_repository(db)

    def count_attempts(self, activity_id: str, learner_id: str) -> int:
        return self.game_repository.count_attempts(activity_id, learner_id)


def _grade_type(value: int, item_id: str) -> GradeType:
    try:
        return GradeType(value)
    except ValueError:
        # Unknown types from newer grade book versions are compared as values
        logger.warning(
            "Grade item %s has unknown grade type %r; treating as value", item_id, value
        )
        return GradeType.VALUE
