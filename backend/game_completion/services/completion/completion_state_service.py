# backend/game_completion/services/completion/completion_state_service.py
"""
Completion state service for the game activity.

Serves the combined completion check used by older completion tracking code
(all enabled conditions folded with AND/OR into one boolean) and the batch
per-rule states used by report pages and recalculation sweeps.
"""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from ...core.enums import (
    CompletionAggregation,
    CompletionRule,
    CompletionState,
    CompletionTracking,
)
from ...core.exceptions import NotFoundException
from ...repositories.factory import RepositoryFactory
from ..base import BaseService
from .game_custom_completion import GameCustomCompletion

logger = logging.getLogger(__name__)


class GameCompletionService(BaseService):
    """Completion queries for game activities that go beyond a single rule."""

    def __init__(self, db: Session, custom_completion: Optional[GameCustomCompletion] = None):
        super().__init__(db)
        self.course_module_repository = RepositoryFactory.create_course_module_repository(db)
        self.game_repository = RepositoryFactory.create_game_repository(db)
        self.grade_repository = RepositoryFactory.create_grade_repository(db)
        if custom_completion is None:
            from ..dependencies import build_game_custom_completion

            custom_completion = build_game_custom_completion(db)
        self.custom_completion = custom_completion

    @BaseService.measure_operation("get_completion_state")
    def get_completion_state(
        self,
        activity_id: str,
        user_id: str,
        aggregation: CompletionAggregation = CompletionAggregation.AND,
    ) -> bool:
        """
        Fold every enabled completion condition into one boolean.

        With tracking disabled, or no condition enabled, the aggregation's
        identity is returned unchanged (True for AND, False for OR).
        """
        course_module = self.course_module_repository.get_by_instance(activity_id)
        if course_module is None:
            raise NotFoundException(
                message=f"No course module for game {activity_id}",
                code="COURSE_MODULE_NOT_FOUND",
                details={"activity_id": activity_id},
            )

        result = aggregation.identity
        if course_module.tracking is CompletionTracking.DISABLED:
            return result

        config = self.custom_completion.config_reader.get_activity_config(activity_id)
        conditions: List[bool] = []

        if course_module.completiongradeitemnumber is not None:
            row = self.grade_repository.fetch_activity_grade(
                activity_id, user_id, itemnumber=course_module.completiongradeitemnumber
            )
            conditions.append(row is not None and row[1].finalgrade is not None)

        for rule in self.custom_completion.list_available_rules(config):
            state = self.custom_completion.evaluate(rule, config, user_id)
            conditions.append(state is CompletionState.COMPLETE)

        for value in conditions:
            if aggregation is CompletionAggregation.AND:
                result = result and value
            else:
                result = result or value

        self.logger.debug(
            "Completion state for game %s user %s (%s over %d conditions): %s",
            activity_id,
            user_id,
            aggregation.value,
            len(conditions),
            result,
        )
        return result

    @BaseService.measure_operation("get_rule_states")
    def get_rule_states(
        self, activity_id: str, user_ids: Iterable[str]
    ) -> Dict[str, Dict[CompletionRule, CompletionState]]:
        """
        Evaluate every available custom rule for several learners.

        The game's settings are read once for the batch; grades and attempt
        counts are read per learner.
        """
        config = self.custom_completion.config_reader.get_activity_config(activity_id)
        rules = self.custom_completion.list_available_rules(config)

        states: Dict[str, Dict[CompletionRule, CompletionState]] = {}
        for user_id in user_ids:
            states[user_id] = {
                rule: self.custom_completion.evaluate(rule, config, user_id) for rule in rules
            }

        logger.info(
            "Evaluated %d rule(s) for %d learner(s) on game %s",
            len(rules),
            len(states),
            activity_id,
        )
        return states

    @BaseService.measure_operation("record_attempt")
    def record_attempt(
        self,
        activity_id: str,
        user_id: str,
        *,
        timestart: Optional[datetime] = None,
        timefinish: Optional[datetime] = None,
        score: Optional[float] = None,
    ) -> Dict[CompletionRule, CompletionState]:
        """
        Store a learner attempt and return the learner's refreshed rule states.

        Raises:
            ActivityNotFoundException: If the game does not exist
        """
        with self.transaction():
            self.game_repository.get_game_or_raise(activity_id)
            self.game_repository.record_attempt(
                activity_id,
                user_id,
                timestart=timestart,
                timefinish=timefinish,
                score=score,
            )

        self.logger.info("Recorded attempt on game %s for user %s", activity_id, user_id)
        return self.get_rule_states(activity_id, [user_id])[user_id]
