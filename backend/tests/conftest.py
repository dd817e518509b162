# backend/tests/conftest.py
"""
Pytest configuration for the game completion package.

Tests run against an in-memory SQLite database; nothing here ever touches the
store configured for a real deployment.
"""

import os
import sys

# Set testing mode BEFORE any package imports
os.environ["GAME_ENVIRONMENT"] = "test"
os.environ["GAME_DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ.setdefault("CI", "true")

# Add the backend directory to Python path so imports work
backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, backend_dir)

from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from game_completion.core.enums import CompletionTracking, GradeType
from game_completion.database import Base

# Import models so Base.metadata is populated for create_all.
import game_completion.models  # noqa: F401
from game_completion.models import CourseModule, Game, GameAttempt, GradeGrade, GradeItem

COURSE_ID = "01HCOURSE00000000000000001"
LEARNER_ID = "01HLEARNER0000000000000001"


@pytest.fixture(scope="session")
def _unit_engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # pysqlite defers BEGIN on its own; emit it explicitly so SAVEPOINTs nest
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def unit_db(_unit_engine) -> Session:
    """
    Provide a transactional session bound to the shared in-memory engine.

    Service commits and rollbacks act on a SAVEPOINT inside the outer
    transaction, so everything a test writes is rolled back when it finishes.
    """
    connection = _unit_engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        expire_on_commit=False,
        future=True,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


# ============================================================================
# Builders
# ============================================================================


@pytest.fixture
def create_game(unit_db):
    """Create a game plus its course-module row."""

    def _create(
        *,
        completionpass: bool = False,
        completionattemptsexhausted: bool = False,
        maxattempts: int = 0,
        grade: float = 100.0,
        completion: CompletionTracking = CompletionTracking.AUTOMATIC,
        completiongradeitemnumber: Optional[int] = None,
    ) -> Game:
        game = Game(
            course_id=COURSE_ID,
            name="Hangman: chapter 1",
            gamekind="hangman",
            grade=grade,
            maxattempts=maxattempts,
            completionpass=completionpass,
            completionattemptsexhausted=completionattemptsexhausted,
        )
        unit_db.add(game)
        unit_db.flush()
        unit_db.add(
            CourseModule(
                course_id=COURSE_ID,
                modname="game",
                instance=game.id,
                completion=completion.value,
                completiongradeitemnumber=completiongradeitemnumber,
            )
        )
        unit_db.flush()
        return game

    return _create


@pytest.fixture
def create_grade_item(unit_db):
    def _create(
        game: Game,
        *,
        gradepass: Optional[float] = 60.0,
        grademin: float = 0.0,
        gradetype: GradeType = GradeType.VALUE,
        itemnumber: int = 0,
    ) -> GradeItem:
        item = GradeItem(
            course_id=game.course_id,
            itemname=game.name,
            itemtype="mod",
            itemmodule="game",
            iteminstance=game.id,
            itemnumber=itemnumber,
            gradetype=gradetype.value,
            grademax=100.0,
            grademin=grademin,
            gradepass=gradepass,
        )
        unit_db.add(item)
        unit_db.flush()
        return item

    return _create


@pytest.fixture
def set_user_grade(unit_db):
    """Insert or update a learner's grade for a grade item."""

    def _set(item: GradeItem, grade: Optional[float], user_id: str = LEARNER_ID) -> GradeGrade:
        row = (
            unit_db.query(GradeGrade)
            .filter(GradeGrade.item_id == item.id, GradeGrade.user_id == user_id)
            .first()
        )
        if row is None:
            row = GradeGrade(item_id=item.id, user_id=user_id)
            unit_db.add(row)
        row.rawgrade = grade
        row.finalgrade = grade
        unit_db.flush()
        return row

    return _set


@pytest.fixture
def add_attempts(unit_db):
    def _add(game: Game, count: int, user_id: str = LEARNER_ID) -> None:
        now = datetime.now(timezone.utc)
        for _ in range(count):
            unit_db.add(
                GameAttempt(
                    game_id=game.id,
                    user_id=user_id,
                    timestart=now - timedelta(hours=1),
                    timefinish=now - timedelta(minutes=50),
                    score=0.5,
                )
            )
        unit_db.flush()

    return _add


@pytest.fixture
def learner_id() -> str:
    return LEARNER_ID
