from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import datetime, timezone

class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr
    password: str

class PartialProfileData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)  # allows camelcase and snake_case interchangeably

    name: Optional[str] = Field(None, max_length=30)
    email: Optional[EmailStr] = None
    last_login: Optional[datetime] = Field(default_factory=lambda: datetime.now(timezone.utc), alias="lastLogin")

class UserProfileResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    firebase_uid: str = Field(..., alias="firebaseUid")
    name: Optional[str] = None
    email: str
    last_login: Optional[datetime] = Field(None, alias="lastLogin")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
