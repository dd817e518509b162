# backend/game_completion/core/exceptions.py
"""
Domain-specific exceptions for the game completion package.

These exceptions carry a business-focused message plus a machine-readable
code, so the host framework can decide how to surface them.
"""

from typing import Any, Dict, Optional


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }


class ValidationException(DomainException):
    """Raised when business validation fails."""


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""


class ServiceException(DomainException):
    """Raised when a service operation fails."""


# Specific business exceptions


class InvalidRuleException(ValidationException):
    """
    Raised when a completion rule outside the defined set is requested.

    Rule identifiers are fixed in code, so this signals a caller bug rather
    than bad user input.
    """

    def __init__(self, rule: Any, defined_rules: Optional[list] = None):
        rule_name = getattr(rule, "value", rule)
        super().__init__(
            message=f"Undefined custom completion rule '{rule_name}'",
            code="INVALID_COMPLETION_RULE",
            details={
                "rule": rule_name,
                "defined_rules": [getattr(r, "value", r) for r in (defined_rules or [])],
            },
        )


class ActivityNotFoundException(NotFoundException):
    """Raised when a game instance does not exist."""

    def __init__(self, activity_id: str):
        super().__init__(
            message=f"Game activity {activity_id} not found",
            code="ACTIVITY_NOT_FOUND",
            details={"activity_id": activity_id},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations.
    """
