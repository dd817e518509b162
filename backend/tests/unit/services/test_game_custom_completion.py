"""
Unit tests for GameCustomCompletion with in-memory lookups.

No database here: the grade lookup, attempt counter, config reader and
string provider are plain fakes injected through the constructor.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple
from unittest.mock import MagicMock

import pytest

from game_completion.core.enums import CompletionRule, CompletionState
from game_completion.core.exceptions import ActivityNotFoundException, InvalidRuleException
from game_completion.schemas.completion import ActivityConfiguration, GradeRecord
from game_completion.services import grading
from game_completion.services.completion import (
    GameCustomCompletion,
    is_available,
    is_defined,
    overall_completion_state,
    validate_rule,
)
from game_completion.services.strings import StringManager

LEARNER = "learner-1"
GAME = "game-1"


class FakeGradeLookup:
    def __init__(self, final_grade: Optional[float] = None, pass_threshold: Optional[float] = 60.0):
        self.grades: Dict[Tuple[str, str], GradeRecord] = {}
        self.calls = 0
        if final_grade is not None:
            self.set_grade(GAME, LEARNER, final_grade, pass_threshold)

    def set_grade(self, activity_id, learner_id, grade, pass_threshold=60.0):
        self.grades[(activity_id, learner_id)] = GradeRecord(
            learner_id=learner_id,
            raw_grade=grade,
            final_grade=grade,
            pass_threshold=pass_threshold,
        )

    def get_grade_record(self, activity_id, learner_id):
        self.calls += 1
        return self.grades.get((activity_id, learner_id))

    def is_passed(self, record):
        return grading.is_passed(record)


class FakeAttemptCounter:
    def __init__(self, count: int = 0):
        self.count = count
        self.calls = 0

    def count_attempts(self, activity_id, learner_id):
        self.calls += 1
        return self.count


def _config(**overrides) -> ActivityConfiguration:
    values = {
        "activity_id": GAME,
        "course_id": "course-1",
        "completion_pass": True,
        "completion_attempts_exhausted": True,
        "max_attempts": 3,
        "grade_enabled": True,
    }
    values.update(overrides)
    return ActivityConfiguration(**values)


def _make_completion(
    grade_lookup=None, attempt_counter=None, config: Optional[ActivityConfiguration] = None
) -> GameCustomCompletion:
    config_reader = MagicMock()
    config_reader.get_activity_config.return_value = config or _config()
    return GameCustomCompletion(
        config_reader=config_reader,
        grade_lookup=grade_lookup or FakeGradeLookup(),
        attempt_counter=attempt_counter or FakeAttemptCounter(),
        strings=StringManager("en"),
    )


class TestRuleMetadata:
    def test_defined_rules_are_fixed(self):
        assert GameCustomCompletion.defined_rules() == (
            CompletionRule.COMPLETION_PASS,
            CompletionRule.COMPLETION_ATTEMPTS_EXHAUSTED,
        )

    def test_sort_order_includes_presentation_rules(self):
        order = _make_completion().display_sort_order()
        assert [rule.value for rule in order] == [
            "completionview",
            "completionusegrade",
            "completionpass",
            "completionattemptsexhausted",
        ]

    def test_rule_descriptions_come_from_string_provider(self):
        completion = _make_completion()
        completion.strings = MagicMock()
        completion.strings.get_string.side_effect = lambda key: f"label:{key}"

        descriptions = completion.rule_descriptions()

        assert descriptions == {
            CompletionRule.COMPLETION_PASS: "label:completiondetail_pass",
            CompletionRule.COMPLETION_ATTEMPTS_EXHAUSTED: "label:completiondetail_attemptsexhausted",
        }

    @pytest.mark.parametrize(
        "pass_flag, attempts_flag, expected",
        [
            (False, False, []),
            (True, False, [CompletionRule.COMPLETION_PASS]),
            (False, True, [CompletionRule.COMPLETION_ATTEMPTS_EXHAUSTED]),
            (
                True,
                True,
                [CompletionRule.COMPLETION_PASS, CompletionRule.COMPLETION_ATTEMPTS_EXHAUSTED],
            ),
        ],
    )
    def test_list_available_rules_follows_flags(self, pass_flag, attempts_flag, expected):
        config = _config(completion_pass=pass_flag, completion_attempts_exhausted=attempts_flag)
        assert _make_completion().list_available_rules(config) == expected


class TestInvalidRule:
    @pytest.mark.parametrize("rule", ["not_a_real_rule", "completionrule", "completionview", ""])
    def test_undefined_rule_raises(self, rule):
        with pytest.raises(InvalidRuleException) as exc_info:
            _make_completion().evaluate(rule, _config(), LEARNER)
        assert exc_info.value.code == "INVALID_COMPLETION_RULE"
        assert exc_info.value.details["rule"] == rule

    def test_get_state_rejects_rule_before_reading_config(self):
        completion = _make_completion()
        with pytest.raises(InvalidRuleException):
            completion.get_state("not_a_real_rule", GAME, LEARNER)
        completion.config_reader.get_activity_config.assert_not_called()

    def test_string_identifiers_are_accepted(self):
        state = _make_completion(attempt_counter=FakeAttemptCounter(3)).evaluate(
            "completionattemptsexhausted", _config(), LEARNER
        )
        assert state is CompletionState.COMPLETE


class TestPassRule:
    def test_flag_off_is_incomplete_even_with_passing_grade(self):
        lookup = FakeGradeLookup(final_grade=95)
        state = _make_completion(grade_lookup=lookup).evaluate(
            CompletionRule.COMPLETION_PASS, _config(completion_pass=False), LEARNER
        )
        assert state is CompletionState.INCOMPLETE
        assert lookup.calls == 0

    def test_no_grade_record_is_incomplete(self):
        state = _make_completion(grade_lookup=FakeGradeLookup()).evaluate(
            CompletionRule.COMPLETION_PASS, _config(), LEARNER
        )
        assert state is CompletionState.INCOMPLETE

    def test_crossing_threshold_moves_to_complete(self):
        lookup = FakeGradeLookup(final_grade=40, pass_threshold=60)
        completion = _make_completion(grade_lookup=lookup)

        assert (
            completion.evaluate(CompletionRule.COMPLETION_PASS, _config(), LEARNER)
            is CompletionState.INCOMPLETE
        )

        lookup.set_grade(GAME, LEARNER, 80, pass_threshold=60)
        assert (
            completion.evaluate(CompletionRule.COMPLETION_PASS, _config(), LEARNER)
            is CompletionState.COMPLETE
        )

    def test_undefined_pass_judgement_is_incomplete(self):
        lookup = FakeGradeLookup(final_grade=80, pass_threshold=None)
        state = _make_completion(grade_lookup=lookup).evaluate(
            CompletionRule.COMPLETION_PASS, _config(), LEARNER
        )
        assert state is CompletionState.INCOMPLETE

    def test_pass_judgement_is_delegated(self):
        lookup = MagicMock()
        lookup.get_grade_record.return_value = GradeRecord(learner_id=LEARNER, final_grade=1.0)
        lookup.is_passed.return_value = True

        state = _make_completion(grade_lookup=lookup).evaluate(
            CompletionRule.COMPLETION_PASS, _config(), LEARNER
        )

        assert state is CompletionState.COMPLETE
        lookup.is_passed.assert_called_once_with(lookup.get_grade_record.return_value)


class TestAttemptsExhaustedRule:
    @pytest.mark.parametrize(
        "attempts, expected",
        [
            (0, CompletionState.INCOMPLETE),
            (1, CompletionState.INCOMPLETE),
            (2, CompletionState.INCOMPLETE),
            (3, CompletionState.COMPLETE),
            (5, CompletionState.COMPLETE),
        ],
    )
    def test_against_max_attempts_three(self, attempts, expected):
        state = _make_completion(attempt_counter=FakeAttemptCounter(attempts)).evaluate(
            CompletionRule.COMPLETION_ATTEMPTS_EXHAUSTED, _config(max_attempts=3), LEARNER
        )
        assert state is expected

    @pytest.mark.parametrize("attempts", [0, 1, 50])
    def test_unlimited_attempts_never_exhaust(self, attempts):
        counter = FakeAttemptCounter(attempts)
        state = _make_completion(attempt_counter=counter).evaluate(
            CompletionRule.COMPLETION_ATTEMPTS_EXHAUSTED, _config(max_attempts=0), LEARNER
        )
        assert state is CompletionState.INCOMPLETE

    def test_flag_off_is_incomplete(self):
        counter = FakeAttemptCounter(10)
        state = _make_completion(attempt_counter=counter).evaluate(
            CompletionRule.COMPLETION_ATTEMPTS_EXHAUSTED,
            _config(completion_attempts_exhausted=False),
            LEARNER,
        )
        assert state is CompletionState.INCOMPLETE
        assert counter.calls == 0

    def test_more_attempts_never_lower_the_state(self):
        counter = FakeAttemptCounter(0)
        completion = _make_completion(attempt_counter=counter)
        states = []
        for count in range(6):
            counter.count = count
            states.append(
                completion.evaluate(
                    CompletionRule.COMPLETION_ATTEMPTS_EXHAUSTED, _config(max_attempts=3), LEARNER
                )
            )
        assert states == sorted(states)


class TestFrameworkHelpers:
    def test_is_defined(self):
        completion = _make_completion()
        assert is_defined(completion, "completionpass")
        assert is_defined(completion, CompletionRule.COMPLETION_ATTEMPTS_EXHAUSTED)
        assert not is_defined(completion, "completionusegrade")
        assert not is_defined(completion, "bogus")

    def test_validate_rule_returns_enum_member(self):
        assert (
            validate_rule(_make_completion(), "completionpass") is CompletionRule.COMPLETION_PASS
        )

    def test_is_available(self):
        config = _config(completion_pass=False)
        completion = _make_completion()
        assert not is_available(completion, "completionpass", config)
        assert is_available(completion, "completionattemptsexhausted", config)

    def test_overall_state_needs_every_available_rule(self):
        lookup = FakeGradeLookup(final_grade=80)
        counter = FakeAttemptCounter(1)
        completion = _make_completion(grade_lookup=lookup, attempt_counter=counter)

        assert overall_completion_state(completion, _config(), LEARNER) is CompletionState.INCOMPLETE

        counter.count = 3
        assert overall_completion_state(completion, _config(), LEARNER) is CompletionState.COMPLETE

    def test_overall_state_without_available_rules(self):
        config = _config(completion_pass=False, completion_attempts_exhausted=False)
        assert (
            overall_completion_state(_make_completion(), config, LEARNER)
            is CompletionState.INCOMPLETE
        )


class TestGetState:
    def test_reads_config_through_reader(self):
        completion = _make_completion(attempt_counter=FakeAttemptCounter(3))

        state = completion.get_state("completionattemptsexhausted", GAME, LEARNER)

        assert state is CompletionState.COMPLETE
        completion.config_reader.get_activity_config.assert_called_once_with(GAME)

    def test_missing_activity_propagates(self):
        completion = _make_completion()
        completion.config_reader.get_activity_config.side_effect = ActivityNotFoundException(GAME)

        with pytest.raises(ActivityNotFoundException):
            completion.get_state("completionpass", GAME, LEARNER)

    def test_get_overall_state(self):
        completion = _make_completion(
            grade_lookup=FakeGradeLookup(final_grade=75), attempt_counter=FakeAttemptCounter(3)
        )
        assert completion.get_overall_state(GAME, LEARNER) is CompletionState.COMPLETE
