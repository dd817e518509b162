# backend/game_completion/services/dependencies.py
"""
Factory functions that wire services to their collaborators.

The completion-tracking framework calls these with the session it owns.
"""

from typing import Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from .completion.adapters import (
    RepositoryActivityConfigReader,
    RepositoryAttemptCounter,
    RepositoryGradeLookup,
)
from .completion.completion_state_service import GameCompletionService
from .completion.game_custom_completion import GameCustomCompletion
from .strings import StringManager


def get_string_manager(language: Optional[str] = None) -> StringManager:
    return StringManager(language or settings.language)


def build_game_custom_completion(
    db: Session, language: Optional[str] = None
) -> GameCustomCompletion:
    """Build the game's rule evaluator on top of the SQL store."""
    return GameCustomCompletion(
        config_reader=RepositoryActivityConfigReader(db),
        grade_lookup=RepositoryGradeLookup(db),
        attempt_counter=RepositoryAttemptCounter(db),
        strings=get_string_manager(language),
    )


def get_game_completion_service(db: Session) -> GameCompletionService:
    return GameCompletionService(db, custom_completion=build_game_custom_completion(db))
