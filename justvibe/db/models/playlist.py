# ============================================================================
# FILE: justvibe/db/models/playlist.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Index, func
from sqlalchemy.orm import relationship
from datetime import datetime
from justvibe.db.base import Base, generate_uuid

class Playlist(Base):
    """Playlist model for user-created playlists"""
    __tablename__ = "playlists"
    
    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("identities.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    cover_image = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    songs = relationship("PlaylistSong", back_populates="playlist",
                         cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        # Names are unique per owner regardless of case
        Index("ix_playlists_user_name_lower", user_id, func.lower(name), unique=True),
    )

class PlaylistSong(Base):
    """Song entry inside a playlist, holding a copy of the song fields"""
    __tablename__ = "playlist_songs"
    
    id = Column(String(36), primary_key=True, default=generate_uuid)
    playlist_id = Column(String(36), ForeignKey("playlists.id", ondelete="CASCADE"), nullable=False, index=True)
    song_title = Column(String(200), nullable=False)
    song_src = Column(Text, nullable=True)
    song_img = Column(Text, nullable=True)
    album_id = Column(String(100), nullable=True)
    artist = Column(String(100), nullable=True)
    position = Column(Integer, nullable=True)
    added_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    playlist = relationship("Playlist", back_populates="songs")
