"""
Answer Scorer Module

This module provides the deterministic keyword-coverage scorer used when the AI
analysis of an answer is unavailable. A key point counts as covered when its
lower-cased text appears anywhere inside the lower-cased, trimmed answer.

Coverage only ever contributes up to 70 of the 100 available points, so a
fallback score can never claim full credit.

The function is pure: it performs no I/O, keeps no state and accepts every
input, including empty answers and empty key point lists.

Dependencies:
- math: For half-up rounding.
- mock_interview.schemas.scoring: For the Difficulty and ScoreResult models.
"""

import math
from typing import Sequence, Union
from mock_interview.schemas.scoring import Difficulty, ScoreResult

COVERAGE_WEIGHT = 0.7


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded up."""
    return int(math.floor(value + 0.5))


def score(user_answer: str, key_points: Sequence[str], difficulty: Union[Difficulty, str] = Difficulty.MEDIUM) -> ScoreResult:
    """
    Score an answer by the share of key points it mentions.

    Args:
        user_answer (str): The candidate's free-text answer, possibly empty.
        key_points (Sequence[str]): Ordered key points the ideal answer covers.
        difficulty (Difficulty | str): Question difficulty. Accepted for parity
            with the AI analysis path; it does not change the result.

    Returns:
        ScoreResult: Score, coverage summary and the covered/missed partition
            of the key points, both in their original order.

    Example:
        >>> score("contains x and y", ["x", "y"]).score
        70
    """
    normalized_answer = (user_answer or "").lower().strip()
    points = list(key_points or [])

    covered, missed = [], []
    for point in points:
        # A blank key point names nothing, so it is never covered
        if point.strip() and point.lower() in normalized_answer:
            covered.append(point)
        else:
            missed.append(point)

    coverage = (len(covered) / len(points)) * 100 if points else 0.0

    return ScoreResult(
        score=round_half_up(coverage * COVERAGE_WEIGHT),
        feedback=f"You've covered {round_half_up(coverage)}% of the key points.",
        points_covered=covered,
        points_missed=missed,
        coverage=coverage
    )
