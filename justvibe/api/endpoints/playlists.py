# ============================================================================
# FILE: justvibe/api/endpoints/playlists.py
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from justvibe.db.session import get_db
from justvibe.api.dependencies import get_current_user
from justvibe.schemas.playlist import (
    PlaylistCreate,
    PlaylistUpdate,
    PlaylistSongsAdd,
    PlaylistSongRemove,
    PlaylistSongsRemove
)
from justvibe.schemas.user import CurrentUser
from justvibe.services.playlist_service import playlist_service

# All playlist routes require authentication
router = APIRouter(dependencies=[Depends(get_current_user)])

@router.get("/user")
async def get_my_playlists(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Get all playlists for the current user, with their songs
    """
    return {"playlists": playlist_service.get_user_playlists(db, current_user.id)}

@router.post("/create")
async def create_playlist(
    playlist_data: PlaylistCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Create a new playlist
    """
    playlist = playlist_service.create_playlist(db, current_user.id, playlist_data)
    return {"message": "Playlist created successfully", "playlist": playlist}

@router.put("/{playlist_id}")
async def update_playlist(
    playlist_id: str,
    update_data: PlaylistUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Update playlist details (name, description, cover image)
    Requires ownership
    """
    playlist = playlist_service.update_playlist(db, playlist_id, current_user.id, update_data)
    return {"message": "Playlist updated successfully", "playlist": playlist}

@router.delete("/{playlist_id}")
async def delete_playlist(
    playlist_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Delete a playlist
    Requires ownership
    """
    playlist_service.delete_playlist(db, playlist_id, current_user.id)
    return {"message": "Playlist deleted successfully"}

@router.get("/{playlist_id}/songs")
async def get_playlist_songs(
    playlist_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Get songs in a playlist
    Requires ownership
    """
    return {"songs": playlist_service.get_playlist_songs(db, playlist_id, current_user.id)}

@router.post("/{playlist_id}/songs/add")
async def add_songs_to_playlist(
    playlist_id: str,
    body: PlaylistSongsAdd,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Add song(s) to a playlist, skipping titles already in it
    Requires ownership
    """
    songs = playlist_service.add_songs(db, playlist_id, current_user.id, body.songs)
    return {
        "message": f"Successfully added {len(songs)} song(s) to playlist",
        "songs": songs
    }

@router.delete("/{playlist_id}/songs/remove")
async def remove_song_from_playlist(
    playlist_id: str,
    body: PlaylistSongRemove,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Remove a song from a playlist
    Requires ownership
    """
    playlist_service.remove_song(db, playlist_id, current_user.id, body.songTitle)
    return {"message": "Song removed from playlist successfully"}

@router.delete("/{playlist_id}/songs/remove-multiple")
async def remove_songs_from_playlist(
    playlist_id: str,
    body: PlaylistSongsRemove,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Remove multiple songs from a playlist
    Requires ownership
    """
    playlist_service.remove_songs(db, playlist_id, current_user.id, body.songTitles)
    return {"message": f"Successfully removed {len(body.songTitles)} song(s) from playlist"}
