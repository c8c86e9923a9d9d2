"""
Description: 
Schemas for the follow-up "doubt" exchange after a candidate receives feedback.

Dependencies:
- pydantic: For data validation and settings management.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class DoubtRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: str = Field(default="", description="The interview question that was asked")
    user_answer: str = Field(default="", alias="userAnswer")
    doubt: str = Field(..., description="The candidate's follow-up question")
    context: str = Field(default="", description="Feedback the candidate received")

class DoubtResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    response: Optional[str] = None
    message: Optional[str] = None
    fallback_response: Optional[str] = Field(default=None, alias="fallbackResponse")
