# backend/game_completion/repositories/game_repository.py
"""
Repository for game instances and learner attempts.

All methods are database-only and free of completion logic.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..core.exceptions import ActivityNotFoundException
from ..models.game import Game, GameAttempt
from .base_repository import BaseRepository


class GameRepository(BaseRepository[Game]):
    """Data access for the game table and its attempts."""

    def __init__(self, db: Session):
        super().__init__(db, Game)

    def get_game_or_raise(self, game_id: str) -> Game:
        """Return the game row, raising ActivityNotFoundException when missing."""
        game = self.get_by_id(game_id)
        if game is None:
            self.logger.warning("Game %s requested but not found", game_id)
            raise ActivityNotFoundException(game_id)
        return game

    def count_attempts(self, game_id: str, user_id: str) -> int:
        """Count every attempt the user has started on the game, finished or not."""
        query = self.db.query(func.count(GameAttempt.id)).filter(
            GameAttempt.game_id == game_id,
            GameAttempt.user_id == user_id,
        )
        return int(self._execute_scalar(query) or 0)

    def record_attempt(
        self,
        game_id: str,
        user_id: str,
        *,
        timestart: Optional[datetime] = None,
        timefinish: Optional[datetime] = None,
        score: Optional[float] = None,
    ) -> GameAttempt:
        """Insert an attempt row. The caller owns the commit."""
        return self._persist(
            GameAttempt(
                game_id=game_id,
                user_id=user_id,
                timestart=timestart,
                timefinish=timefinish,
                score=score,
            )
        )
