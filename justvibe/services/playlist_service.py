# ============================================================================
# FILE: justvibe/services/playlist_service.py
# ============================================================================
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from justvibe.core.errors import ConflictError, NotFoundError, UpstreamError, ValidationError
from justvibe.db.models.playlist import Playlist, PlaylistSong
from justvibe.schemas.playlist import PlaylistCreate, PlaylistUpdate, PlaylistSongAdd
import logging

logger = logging.getLogger(__name__)

PLAYLIST_NOT_FOUND = "Playlist not found"

def format_playlist_song(song: PlaylistSong) -> Dict:
    return {
        "title": song.song_title,
        "src": song.song_src,
        "img": song.song_img,
        "albumId": song.album_id,
        "albumCover": song.song_img,
        "artist": song.artist,
        "position": song.position,
        "addedAt": song.added_at,
    }

def format_playlist(playlist: Playlist, songs: Optional[List[PlaylistSong]] = None) -> Dict:
    data = {
        "id": playlist.id,
        "name": playlist.name,
        "description": playlist.description,
        "coverImage": playlist.cover_image,
        "createdAt": playlist.created_at,
        "updatedAt": playlist.updated_at,
    }
    if songs is not None:
        data["songs"] = [format_playlist_song(song) for song in songs]
    return data

def name_taken_message(name: str) -> str:
    return f'A playlist with the name "{name}" already exists'

class PlaylistService:
    """
    Service layer for playlist operations

    Every operation on an existing playlist starts with an ownership check
    that answers "not found" both for missing playlists and for playlists
    owned by someone else.

    Song positions are handed out once, at insertion, as max(position) + 1
    onwards. They are never renumbered, so removals leave gaps, and two
    concurrent adds to the same playlist can hand out the same position.
    """

    def get_user_playlists(self, db: Session, user_id: str) -> List[Dict]:
        """All playlists for a user, newest first, each with its songs"""
        try:
            playlists = db.query(Playlist).filter(
                Playlist.user_id == user_id
            ).order_by(Playlist.created_at.desc()).all()

            songs_by_playlist = defaultdict(list)
            if playlists:
                songs = self._ordered_songs(db).filter(
                    PlaylistSong.playlist_id.in_([p.id for p in playlists])
                ).all()
                for song in songs:
                    songs_by_playlist[song.playlist_id].append(song)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching playlists: {e}")
            raise UpstreamError("Failed to fetch playlists") from e

        return [format_playlist(p, songs_by_playlist[p.id]) for p in playlists]

    def get_playlist(self, db: Session, playlist_id: str, user_id: str) -> Optional[Playlist]:
        """Get a specific playlist (verify ownership)"""
        try:
            return db.query(Playlist).filter(
                Playlist.id == playlist_id,
                Playlist.user_id == user_id
            ).first()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching playlist {playlist_id}: {e}")
            raise UpstreamError("Failed to fetch playlist") from e

    def require_playlist(self, db: Session, playlist_id: str, user_id: str) -> Playlist:
        playlist = self.get_playlist(db, playlist_id, user_id)
        if not playlist:
            raise NotFoundError(PLAYLIST_NOT_FOUND)
        return playlist

    def find_by_name(self, db: Session, user_id: str, name: str) -> Optional[Playlist]:
        """Case-insensitive name lookup within one owner's playlists"""
        return db.query(Playlist).filter(
            Playlist.user_id == user_id,
            func.lower(Playlist.name) == name.lower()
        ).first()

    def create_playlist(self, db: Session, user_id: str, playlist_data: PlaylistCreate) -> Dict:
        """Create a new playlist for a user"""
        if not playlist_data.name or not playlist_data.name.strip():
            raise ValidationError("Playlist name is required")
        name = playlist_data.name.strip()

        try:
            existing = self.find_by_name(db, user_id, name)
        except SQLAlchemyError as e:
            logger.error(f"Error checking playlist name: {e}")
            raise UpstreamError("Failed to create playlist") from e
        if existing:
            raise ConflictError(name_taken_message(name))

        try:
            playlist = Playlist(
                user_id=user_id,
                name=name,
                description=playlist_data.description or None,
                cover_image=playlist_data.coverImage or None,
            )
            db.add(playlist)
            db.commit()
            db.refresh(playlist)
        except IntegrityError as e:
            db.rollback()
            logger.info(f"Duplicate playlist name rejected by store for user {user_id}: {name}")
            raise ConflictError(name_taken_message(name)) from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error creating playlist: {e}")
            raise UpstreamError("Failed to create playlist") from e

        logger.info(f"Playlist created: {playlist.id} for user {user_id}")
        return format_playlist(playlist, [])

    def update_playlist(self, db: Session, playlist_id: str, user_id: str, update_data: PlaylistUpdate) -> Dict:
        """Apply only the fields present in the request; updated_at always moves"""
        playlist = self.require_playlist(db, playlist_id, user_id)
        provided = update_data.model_fields_set

        new_name = None
        if "name" in provided:
            if not update_data.name or not update_data.name.strip():
                raise ValidationError("Playlist name is required")
            new_name = update_data.name.strip()
            clash = self.find_by_name(db, user_id, new_name)
            if clash and clash.id != playlist.id:
                raise ConflictError(name_taken_message(new_name))

        try:
            if new_name is not None:
                playlist.name = new_name
            if "description" in provided:
                playlist.description = update_data.description
            if "coverImage" in provided:
                playlist.cover_image = update_data.coverImage
            playlist.updated_at = datetime.utcnow()

            db.commit()
            db.refresh(playlist)
        except IntegrityError as e:
            db.rollback()
            raise ConflictError(name_taken_message(new_name or playlist.name)) from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating playlist: {e}")
            raise UpstreamError("Failed to update playlist") from e

        logger.info(f"Playlist updated: {playlist_id}")
        return format_playlist(playlist)

    def delete_playlist(self, db: Session, playlist_id: str, user_id: str) -> None:
        """Delete a playlist; its songs are removed by the cascade"""
        playlist = self.require_playlist(db, playlist_id, user_id)
        try:
            db.delete(playlist)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error deleting playlist: {e}")
            raise UpstreamError("Failed to delete playlist") from e
        logger.info(f"Playlist deleted: {playlist_id}")

    def get_playlist_songs(self, db: Session, playlist_id: str, user_id: str) -> List[Dict]:
        self.require_playlist(db, playlist_id, user_id)
        try:
            songs = self._ordered_songs(db).filter(PlaylistSong.playlist_id == playlist_id).all()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching playlist songs: {e}")
            raise UpstreamError("Failed to fetch playlist songs") from e
        return [format_playlist_song(song) for song in songs]

    def add_songs(self, db: Session, playlist_id: str, user_id: str,
                  songs: Optional[List[PlaylistSongAdd]]) -> List[Dict]:
        """
        Add songs to a playlist, skipping titles it already holds

        Songs keep their submission order: the first new song gets
        max(position) + 1 (or 1 for an empty playlist) and each following
        new song the next number. Skipped duplicates do not use up a
        position. ConflictError if nothing is left to add.
        """
        if not songs:
            raise ValidationError("Songs array is required")
        if any(not song.resolved_title for song in songs):
            raise ValidationError("Each song requires a title")

        self.require_playlist(db, playlist_id, user_id)

        titles = [song.resolved_title for song in songs]
        try:
            max_position = db.query(func.max(PlaylistSong.position)).filter(
                PlaylistSong.playlist_id == playlist_id
            ).scalar()
            existing_titles = {
                row.song_title for row in db.query(PlaylistSong.song_title).filter(
                    PlaylistSong.playlist_id == playlist_id,
                    PlaylistSong.song_title.in_(titles)
                )
            }
        except SQLAlchemyError as e:
            logger.error(f"Error reading playlist songs: {e}")
            raise UpstreamError("Failed to add songs to playlist") from e

        next_position = (max_position or 0) + 1

        to_add = []
        seen = set(existing_titles)
        for song in songs:
            title = song.resolved_title
            if title in seen:
                continue
            seen.add(title)
            to_add.append(song)

        if not to_add:
            raise ConflictError("All songs are already in the playlist")

        rows = [
            PlaylistSong(
                playlist_id=playlist_id,
                song_title=song.resolved_title,
                song_src=song.resolved_src,
                song_img=song.resolved_img,
                album_id=song.resolved_album_id,
                artist=song.artist,
                position=next_position + index,
            )
            for index, song in enumerate(to_add)
        ]
        try:
            db.add_all(rows)
            db.commit()
            for row in rows:
                db.refresh(row)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error adding songs to playlist: {e}")
            raise UpstreamError("Failed to add songs to playlist") from e

        logger.info(f"Added {len(rows)} song(s) to playlist {playlist_id}, "
                    f"skipped {len(songs) - len(rows)} duplicate(s)")
        return [format_playlist_song(row) for row in rows]

    def remove_song(self, db: Session, playlist_id: str, user_id: str, song_title: Optional[str]) -> int:
        """Remove a song by title; a title that is not there is not an error"""
        if not song_title:
            raise ValidationError("Song title is required")
        self.require_playlist(db, playlist_id, user_id)
        return self._delete_titles(db, playlist_id, [song_title])

    def remove_songs(self, db: Session, playlist_id: str, user_id: str,
                     song_titles: Optional[List[str]]) -> int:
        """Remove every listed title in one statement"""
        if not song_titles:
            raise ValidationError("Song titles array is required")
        self.require_playlist(db, playlist_id, user_id)
        return self._delete_titles(db, playlist_id, song_titles)

    def _delete_titles(self, db: Session, playlist_id: str, song_titles: List[str]) -> int:
        try:
            deleted = db.query(PlaylistSong).filter(
                PlaylistSong.playlist_id == playlist_id,
                PlaylistSong.song_title.in_(song_titles)
            ).delete(synchronize_session=False)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error removing songs from playlist: {e}")
            raise UpstreamError("Failed to remove songs from playlist") from e
        logger.info(f"Removed {deleted} song(s) from playlist {playlist_id}")
        return deleted

    def _ordered_songs(self, db: Session):
        return db.query(PlaylistSong).order_by(
            PlaylistSong.position.asc(),
            PlaylistSong.added_at.desc()
        )

# Create singleton instance
playlist_service = PlaylistService()
