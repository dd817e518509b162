# backend/game_completion/repositories/base_repository.py
"""
Base repository for the game completion package.

Repositories only read and write rows; they hold no business rules. Every
SQLAlchemy failure is logged and re-raised as RepositoryException so callers
see one exception type for store problems.
"""

import logging
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..core.exceptions import RepositoryException

# Type variable for generic model support
T = TypeVar("T")
E = TypeVar("E")


class BaseRepository(Generic[T]):
    """
    Shared lookups and error wrapping for one primary model.

    Attributes:
        db: SQLAlchemy session
        model: SQLAlchemy model class the lookups target
    """

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    def get_by_id(self, id: str) -> Optional[T]:
        try:
            return self.db.query(self.model).filter(self.model.id == id).first()
        except SQLAlchemyError as exc:
            self.logger.error("Lookup of %s %s failed: %s", self.model.__name__, id, exc)
            raise RepositoryException(f"Failed to load {self.model.__name__} {id}: {exc}") from exc

    def find_one_by(self, **criteria: Any) -> Optional[T]:
        """First row of the primary model matching exact-match criteria, or None."""
        try:
            return self.db.query(self.model).filter_by(**criteria).first()
        except SQLAlchemyError as exc:
            self.logger.error("Lookup of %s by %s failed: %s", self.model.__name__, criteria, exc)
            raise RepositoryException(f"Failed to find {self.model.__name__}: {exc}") from exc

    # Protected helpers for subclasses

    def _persist(self, entity: E) -> E:
        """
        Add and flush a new row of any mapped class.

        Does not commit; the session owner decides when to commit.
        """
        entity_name = type(entity).__name__
        try:
            self.db.add(entity)
            self.db.flush()
            return entity
        except IntegrityError as exc:
            self.logger.error("Integrity error storing %s: %s", entity_name, exc, exc_info=True)
            self.db.rollback()
            raise RepositoryException(f"Integrity constraint violated: {exc}") from exc
        except SQLAlchemyError as exc:
            self.logger.error("Storing %s failed: %s", entity_name, exc)
            self.db.rollback()
            raise RepositoryException(f"Failed to store {entity_name}: {exc}") from exc

    def _execute_first(self, query: Query) -> Optional[Any]:
        try:
            return query.first()
        except SQLAlchemyError as exc:
            self.logger.error("Query execution error: %s", exc)
            raise RepositoryException(f"Query failed: {exc}") from exc

    def _execute_scalar(self, query: Query) -> Any:
        try:
            return query.scalar()
        except SQLAlchemyError as exc:
            self.logger.error("Scalar query error: %s", exc)
            raise RepositoryException(f"Scalar query failed: {exc}") from exc
