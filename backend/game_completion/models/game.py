"""
SQLAlchemy models for game instances and learner attempts.

Only the columns read by the completion rules and the attempt bookkeeping
are mapped here; the game engines own the rest of their state.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base


class Game(Base):
    """A game activity instance with its completion settings."""

    __tablename__ = "game"

    id: Mapped[str] = Column(
        String(26),
        primary_key=True,
        default=lambda: str(ulid.ULID()),
    )
    course_id: Mapped[str] = Column(String(26), nullable=False, index=True)
    name: Mapped[str] = Column(String(255), nullable=False)
    gamekind: Mapped[Optional[str]] = Column(String(20), nullable=True)
    # Maximum grade; 0 means the game is not graded
    grade: Mapped[float] = Column(Float, nullable=False, default=0.0)
    maxattempts: Mapped[int] = Column(Integer, nullable=False, default=0)
    completionpass: Mapped[bool] = Column(Boolean, nullable=False, default=False)
    completionattemptsexhausted: Mapped[bool] = Column(Boolean, nullable=False, default=False)
    timecreated: Mapped[datetime] = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    timemodified: Mapped[Optional[datetime]] = Column(
        DateTime(timezone=True),
        nullable=True,
        onupdate=func.now(),
    )

    attempts: Mapped[list["GameAttempt"]] = relationship(
        "GameAttempt",
        back_populates="game",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Game {self.id} {self.name!r}>"


class GameAttempt(Base):
    """One play-through of a game by a learner."""

    __tablename__ = "game_attempts"
    __table_args__ = (Index("ix_game_attempts_game_user", "game_id", "user_id"),)

    id: Mapped[str] = Column(
        String(26),
        primary_key=True,
        default=lambda: str(ulid.ULID()),
    )
    game_id: Mapped[str] = Column(
        String(26),
        ForeignKey("game.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = Column(String(26), nullable=False)
    timestart: Mapped[Optional[datetime]] = Column(DateTime(timezone=True), nullable=True)
    timefinish: Mapped[Optional[datetime]] = Column(DateTime(timezone=True), nullable=True)
    score: Mapped[Optional[float]] = Column(Float, nullable=True)

    game: Mapped[Game] = relationship("Game", back_populates="attempts")

    @property
    def is_finished(self) -> bool:
        return self.timefinish is not None
