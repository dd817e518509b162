# backend/game_completion/services/grading.py
"""
Grade book pass/fail semantics.

Mirrors how the grade book itself decides whether a grade is a pass, so the
completion rules never compare raw numbers on their own.
"""

from __future__ import annotations

import math
from typing import Optional

from ..core.enums import GradeType
from ..schemas.completion import GradeRecord

# Tolerance used by the grade book when comparing stored floats
GRADE_FLOAT_TOLERANCE = 1e-5


def grade_floats_different(first: Optional[float], second: Optional[float]) -> bool:
    if first is None or second is None:
        return (first is None) != (second is None)
    return not math.isclose(first, second, rel_tol=0.0, abs_tol=GRADE_FLOAT_TOLERANCE)


def is_passed(record: GradeRecord) -> Optional[bool]:
    """
    Decide whether a grade passes its item.

    Returns None when pass/fail is undefined: no final grade, no pass
    threshold, a threshold equal to the minimum grade, or a scale item
    whose threshold is zero.
    """
    if record.final_grade is None:
        return None
    if record.pass_threshold is None:
        return None
    if not grade_floats_different(record.pass_threshold, record.grade_min):
        return None
    if record.grade_type is GradeType.SCALE and not grade_floats_different(
        record.pass_threshold, 0.0
    ):
        return None
    return record.final_grade >= record.pass_threshold
