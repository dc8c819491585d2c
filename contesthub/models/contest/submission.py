from pydantic import BaseModel, Field
from typing import Optional, Any
from datetime import datetime
from enum import Enum


ANONYMOUS_PARTICIPANT = "Anonymous"


class SubmissionStatus(str, Enum):
    """Submission status flag"""
    WINNER = "winner"


class SubmissionCreate(BaseModel):
    """Schema for submitting a task entry"""
    submission: Any = None


class WinnerDeclaration(BaseModel):
    """Schema for declaring a contest winner"""
    user_email: Optional[str] = Field(None, alias="userEmail")
    
    class Config:
        populate_by_name = True


class SubmissionInDB(BaseModel):
    """Submission embedded in a contest document"""
    user_email: str = Field(..., alias="userEmail")
    participant_name: str = Field(ANONYMOUS_PARTICIPANT, alias="participantName")
    submission: Any
    submitted_at: datetime = Field(default_factory=datetime.utcnow, alias="submittedAt")
    status: Optional[SubmissionStatus] = None
    
    class Config:
        populate_by_name = True
        use_enum_values = True
