# ============================================================================
# FILE: justvibe/db/models/catalog.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from datetime import datetime
from justvibe.db.base import Base, generate_uuid

class Album(Base):
    """Catalog album; ids are assigned by whoever loads the catalog"""
    __tablename__ = "albums"
    
    id = Column(String(100), primary_key=True)
    title = Column(String(200), nullable=False)
    artist = Column(String(100), nullable=False)
    img = Column(Text, nullable=True)
    category = Column(String(50), nullable=True)
    genre = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    songs = relationship("Song", back_populates="album", cascade="all, delete-orphan",
                         passive_deletes=True, order_by="Song.created_at")

class Song(Base):
    __tablename__ = "songs"
    
    id = Column(String(36), primary_key=True, default=generate_uuid)
    album_id = Column(String(100), ForeignKey("albums.id", ondelete="CASCADE"), index=True)
    title = Column(String(200), nullable=False)
    src = Column(Text, nullable=False)
    img = Column(Text, nullable=True)
    duration = Column(Integer, nullable=True)  # Duration in seconds
    created_at = Column(DateTime, default=datetime.utcnow)
    
    album = relationship("Album", back_populates="songs")
