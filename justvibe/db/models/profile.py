# ============================================================================
# FILE: justvibe/db/models/profile.py
# ============================================================================
from sqlalchemy import Column, String, DateTime, ForeignKey, Text, JSON, Index, func
from sqlalchemy.orm import relationship
from datetime import datetime
from justvibe.db.base import Base

DEFAULT_PREFERENCES = {
    "theme": "dark",
    "notifications": True,
    "privacy": "public",
    "language": "en",
}

class UserProfile(Base):
    """User-facing metadata, one row per identity"""
    __tablename__ = "user_profiles"
    
    id = Column(String(36), ForeignKey("identities.id", ondelete="CASCADE"), primary_key=True)
    username = Column(String(50), unique=True, nullable=False)
    bio = Column(Text, nullable=True)
    location = Column(String(100), nullable=True)
    profile_picture = Column(Text, nullable=True)
    social_links = Column(JSON, default=dict)
    preferences = Column(JSON, default=lambda: dict(DEFAULT_PREFERENCES))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    identity = relationship("Identity", back_populates="profile")

    __table_args__ = (
        Index("ix_user_profiles_username_lower", func.lower(username), unique=True),
    )
