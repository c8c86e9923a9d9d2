"""
Description: 
Schemas for transcribing a spoken answer.

Dependencies:
- pydantic: For data validation and settings management.
"""
from pydantic import BaseModel, Field

class TranscriptionRequest(BaseModel):
    data: str = Field(..., description="Base64 encoded WebM/Opus audio")

class TranscriptionResponse(BaseModel):
    text: str
