from pydantic import BaseModel, Field
from typing import Optional

from contesthub.models.auth.user import Role


class TokenData(BaseModel):
    """Token payload data"""
    email: str
    role: Role


class RegisterRequest(BaseModel):
    """Schema for email/password registration"""
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = None
    password: Optional[str] = Field(None, max_length=72)
    role: Optional[str] = None


class LoginRequest(BaseModel):
    """Schema for email/password login"""
    email: Optional[str] = None
    password: Optional[str] = None


class GoogleLoginRequest(BaseModel):
    """
    Schema for Google login.
    
    `idToken` is verified with Google when present; otherwise the
    client-asserted email/name are used.
    """
    email: Optional[str] = None
    name: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoURL")
    id_token: Optional[str] = Field(None, alias="idToken")
    
    class Config:
        populate_by_name = True
