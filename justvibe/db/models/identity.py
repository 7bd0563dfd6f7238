# ============================================================================
# FILE: justvibe/db/models/identity.py
# ============================================================================
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from justvibe.db.base import Base, generate_uuid

class Identity(Base):
    """Account record owned by the identity provider"""
    __tablename__ = "identities"
    
    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Everything a user owns goes with the account
    profile = relationship("UserProfile", back_populates="identity", uselist=False,
                           cascade="all, delete-orphan", passive_deletes=True)
    favorites = relationship("Favorite", cascade="all, delete-orphan", passive_deletes=True)
    playlists = relationship("Playlist", cascade="all, delete-orphan", passive_deletes=True)
    history = relationship("ListeningHistory", cascade="all, delete-orphan", passive_deletes=True)
