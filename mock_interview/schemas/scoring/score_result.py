"""
Description:
This module defines the schemas shared by every answer-scoring path: the
difficulty levels a question can have and the scored result of one answer.

Dependencies:
- pydantic: For data validation and serialization.
- enum: For the difficulty enumeration.
"""
from enum import Enum
from typing import List
from pydantic import BaseModel, ConfigDict, Field


class Difficulty(str, Enum):
    """Difficulty level of an interview or a question."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class ScoreResult(BaseModel):
    """
    Scored and annotated outcome of evaluating one answer.

    Results are produced fresh for every submission and never modified after
    they are attached to an interview's feedback log.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    score: int = Field(..., ge=0, le=100, description="Answer score between 0 and 100")
    feedback: str = Field(default="", description="Short summary of the answer quality")
    points_covered: List[str] = Field(default_factory=list, alias="pointsCovered", description="Key points found in the answer")
    points_missed: List[str] = Field(default_factory=list, alias="pointsMissed", description="Key points absent from the answer")
    coverage: float = Field(default=0.0, ge=0, le=100, description="Percentage of key points covered")
