"""
Database models for the game completion package.

- Game / GameAttempt: activity settings and learner attempts
- CourseModule: framework-level completion tracking per activity
- GradeItem / GradeGrade: grade book rows used by the pass rule
"""

from .course_module import CourseModule
from .game import Game, GameAttempt
from .grade import GradeGrade, GradeItem

__all__ = [
    "CourseModule",
    "Game",
    "GameAttempt",
    "GradeGrade",
    "GradeItem",
]
