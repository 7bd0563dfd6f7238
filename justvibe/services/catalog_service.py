# ============================================================================
# FILE: justvibe/services/catalog_service.py
# ============================================================================
from typing import Dict, Iterable, List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from justvibe.core.errors import NotFoundError, UpstreamError
from justvibe.db.models.catalog import Album, Song
import logging

logger = logging.getLogger(__name__)

def unique_songs(songs: Iterable[Song]) -> List[Song]:
    """Drop repeated (title, src) pairs, keeping the first occurrence"""
    seen = set()
    result = []
    for song in songs:
        key = (song.title, song.src)
        if key in seen:
            continue
        seen.add(key)
        result.append(song)
    return result

def format_album(album: Album) -> Dict:
    return {
        "id": album.id,
        "title": album.title,
        "artist": album.artist,
        "img": album.img,
        "category": album.category,
        "genre": album.genre,
        "description": album.description,
        "songs": [
            {
                "title": song.title,
                "src": song.src,
                "img": song.img or album.img,
                "duration": song.duration,
            }
            for song in unique_songs(album.songs)
        ],
    }

class CatalogService:
    """Read-only access to albums and their songs"""

    def list_albums(self, db: Session) -> List[Dict]:
        """All albums, newest first"""
        try:
            albums = db.query(Album).options(
                selectinload(Album.songs)
            ).order_by(Album.created_at.desc()).all()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching albums: {e}")
            raise UpstreamError("Failed to fetch albums") from e
        return [format_album(album) for album in albums]

    def get_album(self, db: Session, album_id: str) -> Dict:
        try:
            album = db.query(Album).options(
                selectinload(Album.songs)
            ).filter(Album.id == album_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching album {album_id}: {e}")
            raise UpstreamError("Failed to fetch album") from e
        if not album:
            raise NotFoundError("Album not found")
        return format_album(album)

# Create singleton instance
catalog_service = CatalogService()
