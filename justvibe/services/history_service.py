# ============================================================================
# FILE: justvibe/services/history_service.py
# ============================================================================
from typing import Dict, List
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from justvibe.core.errors import UpstreamError, ValidationError
from justvibe.db.models.catalog import Album
from justvibe.db.models.history import ListeningHistory
from justvibe.schemas.history import HistoryCreate
import logging

logger = logging.getLogger(__name__)

def format_history_entry(entry: ListeningHistory) -> Dict:
    return {
        "id": entry.id,
        "songTitle": entry.song_title,
        "songSrc": entry.song_src,
        "songImg": entry.song_img,
        "albumId": entry.album_id,
        "albumCover": entry.album_cover,
        "artist": entry.artist,
        "duration": entry.duration,
        "playedAt": entry.played_at,
    }

class HistoryService:
    """Service layer for the listening history"""

    def record_play(self, db: Session, user_id: str, entry_data: HistoryCreate) -> Dict:
        if not entry_data.songTitle:
            raise ValidationError("Song title is required")
        if entry_data.duration is not None and entry_data.duration < 0:
            raise ValidationError("Duration cannot be negative")
        try:
            entry = ListeningHistory(
                user_id=user_id,
                song_title=entry_data.songTitle,
                song_src=entry_data.songSrc,
                song_img=entry_data.songImg,
                album_id=entry_data.albumId,
                album_cover=entry_data.albumCover,
                artist=entry_data.artist,
                duration=entry_data.duration,
            )
            db.add(entry)
            db.commit()
            db.refresh(entry)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error recording play: {e}")
            raise UpstreamError("Failed to record play") from e
        return format_history_entry(entry)

    def get_history(self, db: Session, user_id: str, limit: int = 50) -> List[Dict]:
        """Most recent plays first"""
        try:
            entries = db.query(ListeningHistory).filter(
                ListeningHistory.user_id == user_id
            ).order_by(ListeningHistory.played_at.desc()).limit(limit).all()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching history: {e}")
            raise UpstreamError("Failed to fetch listening history") from e
        return [format_history_entry(entry) for entry in entries]

    def clear_history(self, db: Session, user_id: str) -> int:
        try:
            deleted = db.query(ListeningHistory).filter(
                ListeningHistory.user_id == user_id
            ).delete(synchronize_session=False)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error clearing history: {e}")
            raise UpstreamError("Failed to clear listening history") from e
        logger.info(f"Cleared {deleted} history entries for user {user_id}")
        return deleted

    def get_stats(self, db: Session, user_id: str, top: int = 5) -> Dict:
        """
        Listening totals plus the most played artists and genres
        Genres come from the catalog album each play points at
        """
        base = db.query(ListeningHistory).filter(ListeningHistory.user_id == user_id)
        total_plays = base.count()
        total_seconds = db.query(func.coalesce(func.sum(ListeningHistory.duration), 0)).filter(
            ListeningHistory.user_id == user_id
        ).scalar() or 0

        artist_rows = db.query(
            ListeningHistory.artist, func.count(ListeningHistory.id).label("plays")
        ).filter(
            ListeningHistory.user_id == user_id,
            ListeningHistory.artist.isnot(None)
        ).group_by(ListeningHistory.artist).order_by(
            func.count(ListeningHistory.id).desc(), ListeningHistory.artist
        ).limit(top).all()

        genre_rows = db.query(
            Album.genre, func.count(ListeningHistory.id).label("plays")
        ).join(
            Album, Album.id == ListeningHistory.album_id
        ).filter(
            ListeningHistory.user_id == user_id,
            Album.genre.isnot(None)
        ).group_by(Album.genre).order_by(
            func.count(ListeningHistory.id).desc(), Album.genre
        ).limit(top).all()

        recent = base.order_by(ListeningHistory.played_at.desc()).limit(top).all()

        minutes_played = int(total_seconds) // 60
        return {
            "totalPlays": total_plays,
            "minutesPlayed": minutes_played,
            "hoursPlayed": minutes_played // 60,
            "topArtists": [{"name": row.artist, "plays": row.plays} for row in artist_rows],
            "topGenres": [{"name": row.genre, "plays": row.plays} for row in genre_rows],
            "recentlyPlayed": [format_history_entry(entry) for entry in recent],
        }

# Create singleton instance
history_service = HistoryService()
