"""
Description: 
Schemas for submitting an answer to an interview question and the scored
feedback returned for it.

Dependencies:
- pydantic: For data validation and settings management.
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

class SubmitAnswerRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    answer: Optional[str] = None
    question_text: Optional[str] = Field(default=None, alias="questionText")

class SubmitAnswerResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    feedback: str
    score: int = Field(ge=0, le=100)
    points_covered: List[str] = Field(default_factory=list, alias="pointsCovered")
    points_missed: List[str] = Field(default_factory=list, alias="pointsMissed")
    coverage: float = 0.0
    source: str
    is_complete: bool = Field(..., alias="isComplete", description="True once every question has been answered")
