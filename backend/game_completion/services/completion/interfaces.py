# backend/game_completion/services/completion/interfaces.py
"""
Interfaces for custom completion rules and the lookups they depend on.

The completion-tracking framework talks to an activity through
ActivityCustomCompletion. Implementations receive their data sources as
constructor arguments, so any object matching these protocols works: the
SQLAlchemy adapters in production, simple fakes in tests.

The module-level helpers at the bottom hold behaviour the framework applies
to every implementation (rule validation, availability, overall state).
"""

from __future__ import annotations

from typing import Dict, List, Optional, Protocol, Sequence, Tuple, Union

from ...core.enums import CompletionRule, CompletionState
from ...core.exceptions import InvalidRuleException
from ...schemas.completion import ActivityConfiguration, GradeRecord

RuleLike = Union[CompletionRule, str]


class ActivityConfigReader(Protocol):
    """Reads the completion settings of an activity."""

    def get_activity_config(self, activity_id: str) -> ActivityConfiguration:
        """Return the settings snapshot; raise NotFoundException if the activity is missing."""
        ...


class GradeLookup(Protocol):
    """Grade book access used by the pass rule."""

    def get_grade_record(self, activity_id: str, learner_id: str) -> Optional[GradeRecord]:
        """Return the learner's grade for the activity, or None if there is none."""
        ...

    def is_passed(self, record: GradeRecord) -> Optional[bool]:
        """Grade book pass judgement; None when pass/fail is undefined."""
        ...


class AttemptCounter(Protocol):
    def count_attempts(self, activity_id: str, learner_id: str) -> int:
        ...


class StringProvider(Protocol):
    def get_string(self, key: str) -> str:
        ...


class ActivityCustomCompletion(Protocol):
    """Custom completion rules of one activity type."""

    def list_available_rules(self, activity_config: ActivityConfiguration) -> List[CompletionRule]:
        """Defined rules that are switched on in this activity's settings."""
        ...

    def evaluate(
        self,
        rule: RuleLike,
        activity_config: ActivityConfiguration,
        learner_id: str,
    ) -> CompletionState:
        """State of one rule for one learner; raise InvalidRuleException for undefined rules."""
        ...

    def defined_rules(self) -> Tuple[CompletionRule, ...]:
        ...

    def rule_descriptions(self) -> Dict[CompletionRule, str]:
        ...

    def display_sort_order(self) -> Tuple[CompletionRule, ...]:
        ...


def coerce_rule(rule: RuleLike) -> Optional[CompletionRule]:
    """Map a rule identifier to the enum, or None if it is not a known identifier."""
    if isinstance(rule, CompletionRule):
        return rule
    try:
        return CompletionRule(rule)
    except ValueError:
        return None


def is_defined(completion: ActivityCustomCompletion, rule: RuleLike) -> bool:
    return coerce_rule(rule) in completion.defined_rules()


def validate_rule(completion: ActivityCustomCompletion, rule: RuleLike) -> CompletionRule:
    """Return the rule as an enum member, raising InvalidRuleException if undefined."""
    defined: Sequence[CompletionRule] = completion.defined_rules()
    resolved = coerce_rule(rule)
    if resolved is None or resolved not in defined:
        raise InvalidRuleException(rule, list(defined))
    return resolved


def is_available(
    completion: ActivityCustomCompletion,
    rule: RuleLike,
    activity_config: ActivityConfiguration,
) -> bool:
    return coerce_rule(rule) in completion.list_available_rules(activity_config)


def overall_completion_state(
    completion: ActivityCustomCompletion,
    activity_config: ActivityConfiguration,
    learner_id: str,
) -> CompletionState:
    """
    COMPLETE when every available custom rule is COMPLETE.

    An activity with no available custom rules has nothing to satisfy here and
    reports INCOMPLETE; the framework's standard rules decide completion then.
    """
    available = completion.list_available_rules(activity_config)
    if not available:
        return CompletionState.INCOMPLETE

    for rule in available:
        if completion.evaluate(rule, activity_config, learner_id) is not CompletionState.COMPLETE:
            return CompletionState.INCOMPLETE
    return CompletionState.COMPLETE
