# ============================================================================
# FILE: justvibe/schemas/playlist.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional, List

class PlaylistCreate(BaseModel):
    """Schema for creating a playlist"""
    name: Optional[str] = None
    description: Optional[str] = None
    coverImage: Optional[str] = None

class PlaylistUpdate(BaseModel):
    """Schema for updating a playlist; only fields present in the body are applied"""
    name: Optional[str] = None
    description: Optional[str] = None
    coverImage: Optional[str] = None

class PlaylistSongAdd(BaseModel):
    """
    A song to add to a playlist
    The frontend sends either the favorites naming (songTitle, songSrc...)
    or the album naming (title, src...), so both are accepted
    """
    songTitle: Optional[str] = None
    title: Optional[str] = None
    songSrc: Optional[str] = None
    src: Optional[str] = None
    songImg: Optional[str] = None
    img: Optional[str] = None
    albumId: Optional[str] = None
    album_id: Optional[str] = None
    artist: Optional[str] = None

    @property
    def resolved_title(self) -> Optional[str]:
        return self.songTitle or self.title

    @property
    def resolved_src(self) -> Optional[str]:
        return self.songSrc or self.src

    @property
    def resolved_img(self) -> Optional[str]:
        return self.songImg or self.img

    @property
    def resolved_album_id(self) -> Optional[str]:
        return self.albumId or self.album_id

class PlaylistSongsAdd(BaseModel):
    songs: Optional[List[PlaylistSongAdd]] = None

class PlaylistSongRemove(BaseModel):
    songTitle: Optional[str] = None

class PlaylistSongsRemove(BaseModel):
    songTitles: Optional[List[str]] = Field(default=None)
