# ============================================================================
# FILE: justvibe/api/endpoints/favorites.py
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional
from justvibe.db.session import get_db
from justvibe.api.dependencies import get_current_user
from justvibe.schemas.favorite import FavoriteSong, FavoriteTitle
from justvibe.schemas.user import CurrentUser
from justvibe.services.favorite_service import favorite_service

# All favorites routes require authentication
router = APIRouter(dependencies=[Depends(get_current_user)])

@router.get("/user")
async def get_favorites(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Get all favorites for the current user"""
    return {"favorites": favorite_service.get_user_favorites(db, current_user.id)}

@router.post("/add")
async def add_favorite(
    song: FavoriteSong,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Add a song to favorites"""
    favorite = favorite_service.add_favorite(db, current_user.id, song)
    return {"message": "Song added to favorites successfully", "favorite": favorite}

@router.delete("/remove")
async def remove_favorite(
    body: FavoriteTitle,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Remove a song from favorites"""
    favorite_service.remove_favorite(db, current_user.id, body.songTitle)
    return {"message": "Song removed from favorites successfully"}

@router.post("/check")
async def check_favorite(
    body: Optional[FavoriteTitle] = None,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Check if a song is in favorites"""
    return {"isFavorite": favorite_service.is_favorite(db, current_user.id, body.songTitle if body else None)}

@router.post("/toggle")
async def toggle_favorite(
    song: FavoriteSong,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Add the song if it is not a favorite yet, remove it otherwise"""
    return favorite_service.toggle_favorite(db, current_user.id, song)

@router.get("/count")
async def count_favorites(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Get favorites count"""
    return {"count": favorite_service.count_favorites(db, current_user.id)}
