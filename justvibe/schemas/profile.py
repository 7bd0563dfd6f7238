# ============================================================================
# FILE: justvibe/schemas/profile.py
# ============================================================================
from pydantic import BaseModel, EmailStr
from typing import Optional, Dict, Any

class ProfileUpdate(BaseModel):
    """Schema for profile updates, including credential changes"""
    username: Optional[str] = None
    email: Optional[EmailStr] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    socialLinks: Optional[Dict[str, str]] = None
    preferences: Optional[Dict[str, Any]] = None
    currentPassword: Optional[str] = None
    newPassword: Optional[str] = None
