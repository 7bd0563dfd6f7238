# ============================================================================
# FILE: justvibe/schemas/favorite.py
# ============================================================================
from pydantic import BaseModel
from typing import Optional

class FavoriteSong(BaseModel):
    """Song fields copied into a favorite"""
    songTitle: Optional[str] = None
    songSrc: Optional[str] = None
    songImg: Optional[str] = None
    albumId: Optional[str] = None
    albumCover: Optional[str] = None
    artist: Optional[str] = None

class FavoriteTitle(BaseModel):
    songTitle: Optional[str] = None
