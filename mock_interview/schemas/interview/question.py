"""
Description: 
This module defines the schema for a generated interview question.

Dependencies:
- pydantic: For data validation and settings management.
- mock_interview.schemas.scoring: For the Difficulty enumeration.
"""
from typing import List
from pydantic import BaseModel, ConfigDict, Field
from mock_interview.schemas.scoring import Difficulty

class QuestionSchema(BaseModel):
    """
    A single interview question with its reference answer.

    Questions are immutable once generated for an interview; the key points
    are what the fallback scorer matches answers against.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, from_attributes=True)

    text: str
    difficulty: Difficulty = Difficulty.MEDIUM
    ideal_answer: str = Field(default="", alias="idealAnswer")
    key_points: List[str] = Field(default_factory=list, alias="keyPoints")
    category: str = "general"
