# ============================================================================
# FILE: justvibe/db/models/favorite.py
# ============================================================================
from sqlalchemy import Column, String, DateTime, ForeignKey, Text, UniqueConstraint
from datetime import datetime
from justvibe.db.base import Base, generate_uuid

class Favorite(Base):
    """A user's bookmark of a song, holding a copy of the song fields"""
    __tablename__ = "favorites"
    
    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("identities.id", ondelete="CASCADE"), nullable=False, index=True)
    song_title = Column(String(200), nullable=False, index=True)
    song_src = Column(Text, nullable=True)
    song_img = Column(Text, nullable=True)
    album_id = Column(String(100), nullable=True)
    album_cover = Column(Text, nullable=True)
    artist = Column(String(100), nullable=True)
    added_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "song_title", name="uq_favorites_user_song_title"),
    )
