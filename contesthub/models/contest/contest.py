from pydantic import BaseModel, Field
from typing import Optional, List, Any
from datetime import datetime, timedelta
from enum import Enum


DEFAULT_CONTEST_DURATION = timedelta(days=3)

# Fields a creator may change at any status through the partial update route
UPDATABLE_FIELDS = (
    "title",
    "description",
    "image",
    "price",
    "prizeMoney",
    "taskInstruction",
    "category",
    "endDate",
    "isActive",
)

# "All" in the category filter means no filter
ALL_CATEGORIES = "All"


class ContestStatus(str, Enum):
    """
    Contest status types - State Machine
    
    State Transitions:
    - PENDING -> CONFIRMED (admin)
    - PENDING -> REJECTED (admin)
    """
    PENDING = "pending"  # Awaiting admin review, owner can edit
    CONFIRMED = "confirmed"  # Approved and listed
    REJECTED = "rejected"  # Rejected by admin


class ContestCreate(BaseModel):
    """Schema for creating a contest"""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    category: str = ""
    image: Optional[str] = None
    price: float = Field(0, ge=0)
    prize_money: float = Field(0, ge=0, alias="prizeMoney")
    task_instruction: str = Field("", alias="taskInstruction")
    end_date: Optional[datetime] = Field(None, alias="endDate")
    
    class Config:
        populate_by_name = True


class ContestEdit(BaseModel):
    """Schema for the full edit of a pending contest"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    prize_money: Optional[float] = Field(None, ge=0, alias="prizeMoney")
    task_instruction: Optional[str] = Field(None, alias="taskInstruction")
    end_date: Optional[datetime] = Field(None, alias="endDate")
    
    class Config:
        populate_by_name = True


class ContestFieldsUpdate(ContestEdit):
    """Schema for the allow-listed partial update (any status)"""
    is_active: Optional[bool] = Field(None, alias="isActive")


class ContestStatusUpdate(BaseModel):
    """Schema for admin status change"""
    status: Optional[str] = None


class ContestInDB(BaseModel):
    """Schema for contest stored in database"""
    title: str
    description: str = ""
    category: str = ""
    image: Optional[str] = None
    price: float = 0
    prize_money: float = Field(0, alias="prizeMoney")
    task_instruction: str = Field("", alias="taskInstruction")
    creator_email: str = Field(..., alias="creatorEmail")
    status: ContestStatus = ContestStatus.PENDING.value
    end_date: datetime = Field(..., alias="endDate")
    created_at: datetime = Field(default_factory=datetime.utcnow, alias="createdAt")
    participants: List[str] = []
    submissions: List[Any] = []
    
    class Config:
        populate_by_name = True
        use_enum_values = True
