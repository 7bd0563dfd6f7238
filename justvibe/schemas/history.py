# ============================================================================
# FILE: justvibe/schemas/history.py
# ============================================================================
from pydantic import BaseModel
from typing import Optional

class HistoryCreate(BaseModel):
    """Schema for recording a played song"""
    songTitle: Optional[str] = None
    songSrc: Optional[str] = None
    songImg: Optional[str] = None
    albumId: Optional[str] = None
    albumCover: Optional[str] = None
    artist: Optional[str] = None
    duration: Optional[int] = None  # Seconds listened
