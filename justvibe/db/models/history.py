# ============================================================================
# FILE: justvibe/db/models/history.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from datetime import datetime
from justvibe.db.base import Base, generate_uuid

class ListeningHistory(Base):
    """History model to track played songs for logged-in users"""
    __tablename__ = "listening_history"
    
    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("identities.id", ondelete="CASCADE"), nullable=False, index=True)
    song_title = Column(String(200), nullable=False)
    song_src = Column(Text, nullable=True)
    song_img = Column(Text, nullable=True)
    album_id = Column(String(100), nullable=True)
    album_cover = Column(Text, nullable=True)
    artist = Column(String(100), nullable=True)
    duration = Column(Integer, nullable=True)
    played_at = Column(DateTime, default=datetime.utcnow, index=True)
