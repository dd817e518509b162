# backend/game_completion/services/completion/game_custom_completion.py
"""Custom completion rules of the game activity."""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from ...core.constants import (
    STRING_KEY_COMPLETION_ATTEMPTS_EXHAUSTED,
    STRING_KEY_COMPLETION_PASS,
    UNLIMITED_ATTEMPTS,
)
from ...core.enums import CompletionRule, CompletionState
from ...schemas.completion import ActivityConfiguration
from .interfaces import (
    ActivityConfigReader,
    AttemptCounter,
    GradeLookup,
    RuleLike,
    StringProvider,
    overall_completion_state,
    validate_rule,
)

logger = logging.getLogger(__name__)


class GameCustomCompletion:
    """
    Evaluates the game's "pass grade" and "attempts exhausted" rules.

    Stateless: every call reads the grade or attempt count it needs through
    the injected lookups, so results always reflect the current store.
    """

    DEFINED_RULES: Tuple[CompletionRule, ...] = (
        CompletionRule.COMPLETION_PASS,
        CompletionRule.COMPLETION_ATTEMPTS_EXHAUSTED,
    )
    SORT_ORDER: Tuple[CompletionRule, ...] = (
        CompletionRule.COMPLETION_VIEW,
        CompletionRule.COMPLETION_USE_GRADE,
        CompletionRule.COMPLETION_PASS,
        CompletionRule.COMPLETION_ATTEMPTS_EXHAUSTED,
    )
    RULE_STRING_KEYS: Dict[CompletionRule, str] = {
        CompletionRule.COMPLETION_PASS: STRING_KEY_COMPLETION_PASS,
        CompletionRule.COMPLETION_ATTEMPTS_EXHAUSTED: STRING_KEY_COMPLETION_ATTEMPTS_EXHAUSTED,
    }

    def __init__(
        self,
        config_reader: ActivityConfigReader,
        grade_lookup: GradeLookup,
        attempt_counter: AttemptCounter,
        strings: StringProvider,
    ):
        self.config_reader = config_reader
        self.grade_lookup = grade_lookup
        self.attempt_counter = attempt_counter
        self.strings = strings

    # ------------------------------------------------------------------
    # Rule metadata
    # ------------------------------------------------------------------

    @classmethod
    def defined_rules(cls) -> Tuple[CompletionRule, ...]:
        return cls.DEFINED_RULES

    @classmethod
    def display_sort_order(cls) -> Tuple[CompletionRule, ...]:
        """All completion rules in the order the completion UI lists them."""
        return cls.SORT_ORDER

    def rule_descriptions(self) -> Dict[CompletionRule, str]:
        return {
            rule: self.strings.get_string(self.RULE_STRING_KEYS[rule])
            for rule in self.DEFINED_RULES
        }

    def list_available_rules(self, activity_config: ActivityConfiguration) -> List[CompletionRule]:
        """Rules switched on in the game's settings, in defined order."""
        enabled = {
            CompletionRule.COMPLETION_PASS: activity_config.completion_pass,
            CompletionRule.COMPLETION_ATTEMPTS_EXHAUSTED: activity_config.completion_attempts_exhausted,
        }
        return [rule for rule in self.DEFINED_RULES if enabled[rule]]

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate(
        self,
        rule: RuleLike,
        activity_config: ActivityConfiguration,
        learner_id: str,
    ) -> CompletionState:
        resolved = validate_rule(self, rule)

        if resolved is CompletionRule.COMPLETION_PASS:
            state = self._pass_state(activity_config, learner_id)
        else:
            state = self._attempts_exhausted_state(activity_config, learner_id)

        logger.debug(
            "Rule %s for game %s learner %s -> %s",
            resolved.value,
            activity_config.activity_id,
            learner_id,
            state.name,
        )
        return state

    def get_state(self, rule: RuleLike, activity_id: str, learner_id: str) -> CompletionState:
        """Read the game's settings and evaluate one rule for a learner."""
        validate_rule(self, rule)
        activity_config = self.config_reader.get_activity_config(activity_id)
        return self.evaluate(rule, activity_config, learner_id)

    def get_overall_state(self, activity_id: str, learner_id: str) -> CompletionState:
        activity_config = self.config_reader.get_activity_config(activity_id)
        return overall_completion_state(self, activity_config, learner_id)

    def _pass_state(self, activity_config: ActivityConfiguration, learner_id: str) -> CompletionState:
        if not activity_config.completion_pass:
            return CompletionState.INCOMPLETE

        record = self.grade_lookup.get_grade_record(activity_config.activity_id, learner_id)
        if record is None:
            return CompletionState.INCOMPLETE

        if self.grade_lookup.is_passed(record):
            return CompletionState.COMPLETE
        return CompletionState.INCOMPLETE

    def _attempts_exhausted_state(
        self, activity_config: ActivityConfiguration, learner_id: str
    ) -> CompletionState:
        if not activity_config.completion_attempts_exhausted:
            return CompletionState.INCOMPLETE

        # Unlimited attempts can never be exhausted
        max_attempts = activity_config.max_attempts or UNLIMITED_ATTEMPTS
        if max_attempts == UNLIMITED_ATTEMPTS:
            return CompletionState.INCOMPLETE

        attempts = self.attempt_counter.count_attempts(activity_config.activity_id, learner_id)
        if attempts >= max_attempts:
            return CompletionState.COMPLETE
        return CompletionState.INCOMPLETE
