# backend/game_completion/repositories/factory.py
"""
Repository Factory for the game completion package.

Provides centralized creation of repository instances so services and
adapters receive consistently initialized data access objects.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

# Avoid circular imports
if TYPE_CHECKING:
    from .course_module_repository import CourseModuleRepository
    from .game_repository import GameRepository
    from .grade_repository import GradeRepository


class RepositoryFactory:
    """Factory class for creating repository instances."""

    @staticmethod
    def create_game_repository(db: Session) -> "GameRepository":
        """Create repository for game instances and attempts."""
        from .game_repository import GameRepository

        return GameRepository(db)

    @staticmethod
    def create_grade_repository(db: Session) -> "GradeRepository":
        """Create repository for grade book lookups."""
        from .grade_repository import GradeRepository

        return GradeRepository(db)

    @staticmethod
    def create_course_module_repository(db: Session) -> "CourseModuleRepository":
        """Create repository for course-module placement rows."""
        from .course_module_repository import CourseModuleRepository

        return CourseModuleRepository(db)
