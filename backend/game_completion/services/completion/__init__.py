"""Custom completion rules for the game activity."""

from .game_custom_completion import GameCustomCompletion
from .interfaces import (
    ActivityConfigReader,
    ActivityCustomCompletion,
    AttemptCounter,
    GradeLookup,
    StringProvider,
    is_available,
    is_defined,
    overall_completion_state,
    validate_rule,
)

__all__ = [
    "ActivityConfigReader",
    "ActivityCustomCompletion",
    "AttemptCounter",
    "GameCustomCompletion",
    "GradeLookup",
    "StringProvider",
    "is_available",
    "is_defined",
    "overall_completion_state",
    "validate_rule",
]
