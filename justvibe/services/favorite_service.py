# ============================================================================
# FILE: justvibe/services/favorite_service.py
# ============================================================================
from typing import Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from justvibe.core.errors import ConflictError, UpstreamError, ValidationError
from justvibe.db.models.favorite import Favorite
from justvibe.schemas.favorite import FavoriteSong
import logging

logger = logging.getLogger(__name__)

ALREADY_FAVORITE = "Song already in favorites"

def format_favorite(favorite: Favorite) -> Dict:
    """External representation of a favorite row"""
    return {
        "id": favorite.id,
        "songTitle": favorite.song_title,
        "songSrc": favorite.song_src,
        "songImg": favorite.song_img,
        "albumId": favorite.album_id,
        "albumCover": favorite.album_cover,
        "artist": favorite.artist,
        "addedAt": favorite.added_at,
    }

class FavoriteService:
    """
    Service layer for favorites

    A user can favorite a given song title once. The (user_id, song_title)
    unique constraint in the store is what guarantees it; the read before
    each write only exists to produce a specific error message, and a
    unique violation on insert is reported as the same conflict.
    """

    def get_user_favorites(self, db: Session, user_id: str) -> List[Dict]:
        """All favorites for a user, most recently added first"""
        try:
            favorites = db.query(Favorite).filter(
                Favorite.user_id == user_id
            ).order_by(Favorite.added_at.desc()).all()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching favorites: {e}")
            raise UpstreamError("Failed to fetch favorites") from e
        return [format_favorite(fav) for fav in favorites]

    def find_favorite(self, db: Session, user_id: str, song_title: str) -> Optional[Favorite]:
        return db.query(Favorite).filter(
            Favorite.user_id == user_id,
            Favorite.song_title == song_title
        ).first()

    def add_favorite(self, db: Session, user_id: str, song: FavoriteSong) -> Dict:
        """Add a song to favorites, ConflictError if it is already there"""
        if not song.songTitle:
            raise ValidationError("Song title is required")

        try:
            existing = self.find_favorite(db, user_id, song.songTitle)
        except SQLAlchemyError as e:
            logger.error(f"Error checking favorite: {e}")
            raise UpstreamError("Failed to add to favorites") from e
        if existing:
            raise ConflictError(ALREADY_FAVORITE)

        return format_favorite(self._insert(db, user_id, song))

    def remove_favorite(self, db: Session, user_id: str, song_title: Optional[str]) -> int:
        """Delete by (user, title); removing a song that is not favorited is not an error"""
        if not song_title:
            raise ValidationError("Song title is required")
        try:
            deleted = db.query(Favorite).filter(
                Favorite.user_id == user_id,
                Favorite.song_title == song_title
            ).delete(synchronize_session=False)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error removing favorite: {e}")
            raise UpstreamError("Failed to remove from favorites") from e
        if deleted:
            logger.info(f"Favorite removed for user {user_id}: {song_title}")
        return deleted

    def is_favorite(self, db: Session, user_id: str, song_title: Optional[str]) -> bool:
        """Never raises: lookup failures are logged and read as not favorited"""
        if not song_title:
            return False
        try:
            return self.find_favorite(db, user_id, song_title) is not None
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error checking favorite: {e}")
            return False

    def toggle_favorite(self, db: Session, user_id: str, song: FavoriteSong) -> Dict:
        """
        Remove the song if it is favorited, add it otherwise
        Not atomic: two concurrent toggles can both see the same state
        """
        if not song.songTitle:
            raise ValidationError("Song title is required")

        try:
            existing = self.find_favorite(db, user_id, song.songTitle)
        except SQLAlchemyError as e:
            logger.error(f"Error checking favorite: {e}")
            raise UpstreamError("Failed to toggle favorite") from e

        if existing:
            self.remove_favorite(db, user_id, song.songTitle)
            return {
                "action": "removed",
                "message": "Song removed from favorites",
                "isFavorite": False,
            }

        favorite = self._insert(db, user_id, song)
        return {
            "action": "added",
            "message": "Song added to favorites",
            "favorite": format_favorite(favorite),
            "isFavorite": True,
        }

    def count_favorites(self, db: Session, user_id: str) -> int:
        try:
            count = db.query(func.count(Favorite.id)).filter(
                Favorite.user_id == user_id
            ).scalar()
        except SQLAlchemyError as e:
            logger.error(f"Error getting favorites count: {e}")
            raise UpstreamError("Failed to get favorites count") from e
        return count or 0

    def _insert(self, db: Session, user_id: str, song: FavoriteSong) -> Favorite:
        try:
            favorite = Favorite(
                user_id=user_id,
                song_title=song.songTitle,
                song_src=song.songSrc,
                song_img=song.songImg,
                album_id=song.albumId,
                album_cover=song.albumCover,
                artist=song.artist,
            )
            db.add(favorite)
            db.commit()
            db.refresh(favorite)
        except IntegrityError as e:
            # Lost the race against a concurrent insert of the same title
            db.rollback()
            logger.info(f"Duplicate favorite rejected by store for user {user_id}: {song.songTitle}")
            raise ConflictError(ALREADY_FAVORITE) from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error adding favorite: {e}")
            raise UpstreamError("Failed to add to favorites") from e
        logger.info(f"Favorite added for user {user_id}: {song.songTitle}")
        return favorite

# Create singleton instance
favorite_service = FavoriteService()
