"""Tests for the playlist manager."""

import time

import pytest
from sqlalchemy.exc import IntegrityError

from justvibe.core.errors import ConflictError, NotFoundError, ValidationError
from justvibe.db.models import Playlist, PlaylistSong
from justvibe.schemas.playlist import PlaylistCreate, PlaylistSongAdd, PlaylistUpdate
from justvibe.services.playlist_service import PlaylistService


@pytest.fixture
def service() -> PlaylistService:
    return PlaylistService()


@pytest.fixture
def user(make_user):
    return make_user("alice")


@pytest.fixture
def playlist(service, db, user):
    return service.create_playlist(db, user.id, PlaylistCreate(name="Road Trip"))


def songs(*titles, **fields):
    return [PlaylistSongAdd(title=title, **fields) for title in titles]


def positions(service, db, playlist_id, user_id):
    return {s["title"]: s["position"] for s in service.get_playlist_songs(db, playlist_id, user_id)}


class TestCreatePlaylist:
    def test_create_trims_name_and_starts_empty(self, service, db, user) -> None:
        created = service.create_playlist(
            db, user.id, PlaylistCreate(name="  Chill  ", description="evening", coverImage="c.png")
        )

        assert created["name"] == "Chill"
        assert created["description"] == "evening"
        assert created["coverImage"] == "c.png"
        assert created["songs"] == []
        assert created["id"]

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_blank_name_is_rejected(self, service, db, user, name) -> None:
        with pytest.raises(ValidationError):
            service.create_playlist(db, user.id, PlaylistCreate(name=name))

    def test_name_collision_is_case_insensitive(self, service, db, user, playlist) -> None:
        with pytest.raises(ConflictError) as exc_info:
            service.create_playlist(db, user.id, PlaylistCreate(name="road trip"))

        assert exc_info.value.message == 'A playlist with the name "road trip" already exists'

    def test_other_owner_may_reuse_name(self, service, db, make_user, playlist) -> None:
        bob = make_user("bob")

        created = service.create_playlist(db, bob.id, PlaylistCreate(name="Road Trip"))

        assert created["name"] == "Road Trip"

    def test_store_index_backs_up_the_pre_check(self, service, db, user, playlist, monkeypatch) -> None:
        monkeypatch.setattr(service, "find_by_name", lambda *args: None)

        with pytest.raises(ConflictError):
            service.create_playlist(db, user.id, PlaylistCreate(name="ROAD TRIP"))

    def test_unique_index_exists_in_store(self, db, user, playlist) -> None:
        db.add(Playlist(user_id=user.id, name="rOaD tRiP"))

        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()


class TestListPlaylists:
    def test_newest_first_with_ordered_songs(self, service, db, user) -> None:
        first = service.create_playlist(db, user.id, PlaylistCreate(name="First"))
        second = service.create_playlist(db, user.id, PlaylistCreate(name="Second"))
        service.add_songs(db, first["id"], user.id, songs("B", "A"))

        listed = service.get_user_playlists(db, user.id)

        assert [p["name"] for p in listed] == ["Second", "First"]
        assert listed[0]["songs"] == []
        assert [(s["title"], s["position"]) for s in listed[1]["songs"]] == [("B", 1), ("A", 2)]
        assert listed[0]["id"] == second["id"]

    def test_only_own_playlists(self, service, db, make_user, playlist) -> None:
        bob = make_user("bob")

        assert service.get_user_playlists(db, bob.id) == []


class TestUpdatePlaylist:
    def test_partial_update_keeps_other_fields(self, service, db, user) -> None:
        created = service.create_playlist(
            db, user.id, PlaylistCreate(name="Mix", description="old", coverImage="c.png")
        )
        time.sleep(0.01)

        updated = service.update_playlist(
            db, created["id"], user.id, PlaylistUpdate(description="new")
        )

        assert updated["name"] == "Mix"
        assert updated["description"] == "new"
        assert updated["coverImage"] == "c.png"
        assert updated["updatedAt"] > created["updatedAt"]

    def test_explicit_null_clears_field(self, service, db, user) -> None:
        created = service.create_playlist(db, user.id, PlaylistCreate(name="Mix", description="old"))

        updated = service.update_playlist(
            db, created["id"], user.id, PlaylistUpdate.model_validate({"description": None})
        )

        assert updated["description"] is None

    def test_rename_is_trimmed(self, service, db, user, playlist) -> None:
        updated = service.update_playlist(db, playlist["id"], user.id, PlaylistUpdate(name="  Drive "))

        assert updated["name"] == "Drive"

    def test_rename_to_own_name_in_other_case(self, service, db, user, playlist) -> None:
        updated = service.update_playlist(db, playlist["id"], user.id, PlaylistUpdate(name="ROAD TRIP"))

        assert updated["name"] == "ROAD TRIP"

    def test_rename_onto_existing_name_conflicts(self, service, db, user, playlist) -> None:
        other = service.create_playlist(db, user.id, PlaylistCreate(name="Other"))

        with pytest.raises(ConflictError):
            service.update_playlist(db, other["id"], user.id, PlaylistUpdate(name="road trip"))

    def test_foreign_playlist_is_not_found(self, service, db, make_user, playlist) -> None:
        bob = make_user("bob")

        with pytest.raises(NotFoundError) as exc_info:
            service.update_playlist(db, playlist["id"], bob.id, PlaylistUpdate(name="Mine now"))

        assert exc_info.value.message == "Playlist not found"

    def test_missing_playlist_is_not_found(self, service, db, user) -> None:
        with pytest.raises(NotFoundError):
            service.update_playlist(db, "does-not-exist", user.id, PlaylistUpdate(name="X"))


class TestAddSongs:
    def test_positions_start_at_one(self, service, db, user, playlist) -> None:
        added = service.add_songs(db, playlist["id"], user.id, songs("A", "B", "C"))

        assert [(s["title"], s["position"]) for s in added] == [("A", 1), ("B", 2), ("C", 3)]

    def test_duplicates_are_skipped_without_using_positions(self, service, db, user, playlist) -> None:
        service.add_songs(db, playlist["id"], user.id, songs("A", "B"))

        added = service.add_songs(db, playlist["id"], user.id, songs("C", "A", "D", "B"))

        assert [(s["title"], s["position"]) for s in added] == [("C", 3), ("D", 4)]

    def test_repeats_within_one_batch_are_added_once(self, service, db, user, playlist) -> None:
        added = service.add_songs(db, playlist["id"], user.id, songs("A", "A", "B"))

        assert [(s["title"], s["position"]) for s in added] == [("A", 1), ("B", 2)]

    def test_all_duplicates_conflict(self, service, db, user, playlist) -> None:
        service.add_songs(db, playlist["id"], user.id, songs("A"))

        with pytest.raises(ConflictError) as exc_info:
            service.add_songs(db, playlist["id"], user.id, songs("A"))

        assert exc_info.value.message == "All songs are already in the playlist"

    def test_new_positions_exceed_existing_after_removal(self, service, db, user, playlist) -> None:
        service.add_songs(db, playlist["id"], user.id, songs("A", "B", "C"))
        service.remove_song(db, playlist["id"], user.id, "C")
        service.remove_song(db, playlist["id"], user.id, "A")

        service.add_songs(db, playlist["id"], user.id, songs("D", "E"))

        # Positions are never renumbered; the gap left by A stays
        assert positions(service, db, playlist["id"], user.id) == {"B": 2, "D": 3, "E": 4}

    def test_both_naming_styles_are_accepted(self, service, db, user, playlist) -> None:
        added = service.add_songs(db, playlist["id"], user.id, [
            PlaylistSongAdd(songTitle="Fav", songSrc="f.mp3", songImg="f.png", albumId="al-1", artist="X"),
            PlaylistSongAdd(title="Alb", src="a.mp3", img="a.png", album_id="al-2", artist="Y"),
        ])

        assert added[0]["src"] == "f.mp3"
        assert added[0]["img"] == "f.png"
        assert added[0]["albumCover"] == "f.png"
        assert added[0]["albumId"] == "al-1"
        assert added[1]["src"] == "a.mp3"
        assert added[1]["albumId"] == "al-2"

    @pytest.mark.parametrize("batch", [None, []])
    def test_empty_batch_is_rejected(self, service, db, user, playlist, batch) -> None:
        with pytest.raises(ValidationError):
            service.add_songs(db, playlist["id"], user.id, batch)

    def test_song_without_title_is_rejected(self, service, db, user, playlist) -> None:
        with pytest.raises(ValidationError):
            service.add_songs(db, playlist["id"], user.id, [PlaylistSongAdd(src="x.mp3")])

    def test_foreign_playlist_is_not_found(self, service, db, make_user, playlist) -> None:
        bob = make_user("bob")

        with pytest.raises(NotFoundError):
            service.add_songs(db, playlist["id"], bob.id, songs("A"))


class TestRemoveSongs:
    def test_remove_is_idempotent(self, service, db, user, playlist) -> None:
        service.add_songs(db, playlist["id"], user.id, songs("A"))

        assert service.remove_song(db, playlist["id"], user.id, "A") == 1
        assert service.remove_song(db, playlist["id"], user.id, "A") == 0

    def test_remove_multiple_ignores_absent_titles(self, service, db, user, playlist) -> None:
        service.add_songs(db, playlist["id"], user.id, songs("A", "B", "C"))

        removed = service.remove_songs(db, playlist["id"], user.id, ["A", "C", "Z"])

        assert removed == 2
        assert positions(service, db, playlist["id"], user.id) == {"B": 2}

    def test_remove_requires_titles(self, service, db, user, playlist) -> None:
        with pytest.raises(ValidationError):
            service.remove_song(db, playlist["id"], user.id, "")
        with pytest.raises(ValidationError):
            service.remove_songs(db, playlist["id"], user.id, [])

    def test_remove_from_foreign_playlist_is_not_found(self, service, db, make_user, playlist) -> None:
        bob = make_user("bob")

        with pytest.raises(NotFoundError):
            service.remove_song(db, playlist["id"], bob.id, "A")


class TestDeletePlaylist:
    def test_delete_cascades_to_songs(self, service, db, user, playlist) -> None:
        service.add_songs(db, playlist["id"], user.id, songs("A", "B"))

        service.delete_playlist(db, playlist["id"], user.id)

        assert db.query(PlaylistSong).filter(PlaylistSong.playlist_id == playlist["id"]).count() == 0
        with pytest.raises(NotFoundError):
            service.get_playlist_songs(db, playlist["id"], user.id)

    def test_foreign_playlist_cannot_be_deleted(self, service, db, make_user, user, playlist) -> None:
        bob = make_user("bob")

        with pytest.raises(NotFoundError):
            service.delete_playlist(db, playlist["id"], bob.id)

        assert service.get_playlist(db, playlist["id"], user.id) is not None
