# backend/game_completion/repositories/__init__.py
"""
Repository layer for the game completion package.

Key Components:
- BaseRepository: generic lookups shared by all repositories
- GameRepository: game instances and attempt counts
- GradeRepository: grade items and learner grades
- CourseModuleRepository: framework completion settings per activity
- RepositoryFactory: factory for creating repository instances

Usage:
    from game_completion.repositories import RepositoryFactory

    games = RepositoryFactory.create_game_repository(db)
    attempts = games.count_attempts(game_id, user_id)
"""

from .base_repository import BaseRepository
from .course_module_repository import CourseModuleRepository
from .factory import RepositoryFactory
from .game_repository import GameRepository
from .grade_repository import GradeRepository

__all__ = [
    "BaseRepository",
    "CourseModuleRepository",
    "GameRepository",
    "GradeRepository",
    "RepositoryFactory",
]
