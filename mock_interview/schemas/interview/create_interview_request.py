"""
Description: 
Schema for interview creation requests. Title and topics are checked by the
interview service so that a missing value is reported as a 400 with a readable
message rather than a schema error.

Dependencies:
- pydantic: For data validation and settings management.
"""
from typing import List, Optional
from pydantic import BaseModel, Field
from mock_interview.schemas.scoring import Difficulty

class CreateInterviewRequest(BaseModel):
    title: Optional[str] = None
    topics: Optional[List[str]] = None
    difficulty: Difficulty = Difficulty.MEDIUM
    domains: List[str] = Field(default_factory=list)
