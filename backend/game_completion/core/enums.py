# backend/game_completion/core/enums.py
"""
Core enums for the game completion package.

Numeric enums mirror the values the host platform stores in its completion
and grade tables, so they can be compared directly with persisted columns.
"""

from enum import Enum


class CompletionState(int, Enum):
    """Completion state reported to the completion-tracking framework."""

    INCOMPLETE = 0
    COMPLETE = 1
    COMPLETE_PASS = 2
    COMPLETE_FAIL = 3


class CompletionTracking(int, Enum):
    """Completion tracking mode configured on a course module."""

    DISABLED = 0
    MANUAL = 1
    AUTOMATIC = 2


class CompletionAggregation(str, Enum):
    """How several completion conditions are combined by the legacy check."""

    AND = "and"
    OR = "or"

    @property
    def identity(self) -> bool:
        """Value returned when no condition contributes to the result."""
        return self is CompletionAggregation.AND


class CompletionRule(str, Enum):
    """
    Completion rule identifiers.

    Only COMPLETION_PASS and COMPLETION_ATTEMPTS_EXHAUSTED are custom rules
    evaluated by this module. The other two are standard rules owned by the
    framework and appear here only so they can be placed in the display order.
    """

    COMPLETION_VIEW = "completionview"
    COMPLETION_USE_GRADE = "completionusegrade"
    COMPLETION_PASS = "completionpass"
    COMPLETION_ATTEMPTS_EXHAUSTED = "completionattemptsexhausted"


class GradeType(int, Enum):
    """Grade item types as stored by the grade book."""

    NONE = 0
    VALUE = 1
    SCALE = 2
    TEXT = 3


class ModuleFeature(str, Enum):
    """Features the host framework may ask an activity module about."""

    COMPLETION_TRACKS_VIEWS = "completion_tracks_views"
    COMPLETION_HAS_RULES = "completion_has_rules"
    GRADE_HAS_GRADE = "grade_has_grade"
    GRADE_OUTCOMES = "outcomes"
    BACKUP_MOODLE2 = "backup_moodle2"
    SHOW_DESCRIPTION = "showdescription"
    GROUPS = "groups"
