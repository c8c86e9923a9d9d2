from .score_result import Difficulty, ScoreResult

__all__ = [
    "Difficulty",
    "ScoreResult"
]
