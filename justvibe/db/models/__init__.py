from justvibe.db.models.identity import Identity
from justvibe.db.models.profile import UserProfile, DEFAULT_PREFERENCES
from justvibe.db.models.catalog import Album, Song
from justvibe.db.models.favorite import Favorite
from justvibe.db.models.playlist import Playlist, PlaylistSong
from justvibe.db.models.history import ListeningHistory

__all__ = [
    "Identity",
    "UserProfile",
    "DEFAULT_PREFERENCES",
    "Album",
    "Song",
    "Favorite",
    "Playlist",
    "PlaylistSong",
    "ListeningHistory",
]
