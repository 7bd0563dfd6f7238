# ============================================================================
# FILE: justvibe/schemas/user.py
# ============================================================================
from pydantic import BaseModel
from typing import Optional

class UserCreate(BaseModel):
    """Schema for user registration"""
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

class UserLogin(BaseModel):
    """Schema for user login"""
    email: Optional[str] = None
    password: Optional[str] = None

class UsernameRequest(BaseModel):
    """Token sent by the frontend to resolve the display name"""
    csrid: Optional[str] = None

class CurrentUser(BaseModel):
    """Identity attached to a request by the auth gate"""
    id: str
    email: str
    username: str
