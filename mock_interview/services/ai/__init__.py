"""
AI Services Package

Question generation, answer analysis and doubt resolution backed by the local
inference server, each with a deterministic fallback.
"""

from .question_generator import QuestionGenerator, fallback_questions
from .answer_analysis import AnswerAnalyzer, SOURCE_AI, SOURCE_FALLBACK
from .doubt_resolver import DoubtResolver

__all__ = [
    "QuestionGenerator",
    "fallback_questions",
    "AnswerAnalyzer",
    "SOURCE_AI",
    "SOURCE_FALLBACK",
    "DoubtResolver"
]
