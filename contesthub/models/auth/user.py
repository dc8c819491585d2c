from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from enum import Enum


DEFAULT_CONTEST_LIMIT = 2


class Role(str, Enum):
    """User roles"""
    USER = "user"
    CREATOR = "creator"
    ADMIN = "admin"


class UserInDB(BaseModel):
    """Schema for user stored in database"""
    name: Optional[str] = None
    email: str
    password: Optional[str] = None  # bcrypt hash, None for Google-only accounts
    role: Role = Role.USER.value
    photo_url: Optional[str] = Field(None, alias="photoURL")
    bio: str = ""
    contest_limit: int = Field(DEFAULT_CONTEST_LIMIT, alias="contestLimit")
    package: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow, alias="createdAt")
    
    class Config:
        populate_by_name = True
        use_enum_values = True


class ProfileUpdate(BaseModel):
    """Schema for updating own profile (only supplied fields are written)"""
    name: Optional[str] = Field(None, max_length=100)
    photo_url: Optional[str] = Field(None, alias="photoURL")
    bio: Optional[str] = Field(None, max_length=5000)
    
    class Config:
        populate_by_name = True


class RoleUpdate(BaseModel):
    """Schema for admin role change"""
    role: str
