# backend/game_completion/schemas/completion.py
"""
Pydantic snapshots passed between the store adapters and the rule evaluator.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import GradeType


class ActivityConfiguration(BaseModel):
    """Completion settings of one game instance, read fresh per evaluation."""

    activity_id: str
    course_id: Optional[str] = None
    completion_pass: bool = False
    completion_attempts_exhausted: bool = False
    max_attempts: int = Field(default=0, ge=0)
    grade_enabled: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")


class GradeRecord(BaseModel):
    """A learner's grade joined with the pass settings of its grade item."""

    learner_id: str
    raw_grade: Optional[float] = None
    final_grade: Optional[float] = None
    pass_threshold: Optional[float] = None
    grade_min: float = 0.0
    grade_max: float = 100.0
    grade_type: GradeType = GradeType.VALUE

    model_config = ConfigDict(frozen=True)
