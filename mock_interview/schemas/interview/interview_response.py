"""
Description: 
This module defines the response schemas for interviews and their feedback log.

Dependencies:
- pydantic: For data validation and serialization.
- uuid, datetime: For identifier and timestamp fields.
"""
import uuid
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from mock_interview.schemas.scoring import Difficulty
from mock_interview.schemas.interview.question import QuestionSchema

class FeedbackEntry(BaseModel):
    """One scored answer in an interview's feedback log."""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    question: str
    user_answer: str = Field(..., alias="userAnswer")
    feedback: str
    score: int
    points_covered: List[str] = Field(default_factory=list, alias="pointsCovered")
    points_missed: List[str] = Field(default_factory=list, alias="pointsMissed")
    coverage: float = 0.0
    source: str = Field(..., description="'ai' when scored by the model, 'fallback' when scored by keyword coverage")
    created_at: Optional[datetime] = Field(default=None, alias="timestamp")

class InterviewResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: uuid.UUID
    title: str
    topics: List[str]
    domains: List[str] = Field(default_factory=list)
    difficulty: Difficulty
    creator_uid: str = Field(..., alias="creatorId")
    questions: List[QuestionSchema] = Field(default_factory=list)
    feedbacks: List[FeedbackEntry] = Field(default_factory=list)
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

class CreateInterviewResponse(BaseModel):
    success: bool
    message: str
    interview: InterviewResponse

class DeleteInterviewResponse(BaseModel):
    message: str
