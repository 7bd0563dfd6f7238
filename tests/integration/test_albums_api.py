"""Integration tests for the catalog endpoints."""

from fastapi.testclient import TestClient

from justvibe.db.models import Album, Song


def seed(db) -> None:
    db.add(Album(id="al-1", title="Debut", artist="The Band", img="debut.png",
                 category="album", genre="rock", description="First record"))
    db.add_all([
        Song(album_id="al-1", title="Opener", src="opener.mp3", duration=200),
        Song(album_id="al-1", title="Opener", src="opener.mp3", duration=200),
        Song(album_id="al-1", title="Closer", src="closer.mp3", img="closer.png", duration=300),
    ])
    db.commit()


def test_list_albums_without_auth(client: TestClient, db) -> None:
    seed(db)

    response = client.get("/albums")

    assert response.status_code == 200
    albums = response.json()
    assert len(albums) == 1
    album = albums[0]
    assert album["title"] == "Debut"
    assert album["category"] == "album"
    assert sorted(song["title"] for song in album["songs"]) == ["Closer", "Opener"]


def test_get_album_falls_back_to_album_image(client: TestClient, db) -> None:
    seed(db)

    album = client.get("/albums/al-1").json()

    images = {song["title"]: song["img"] for song in album["songs"]}
    assert images == {"Opener": "debut.png", "Closer": "closer.png"}


def test_get_missing_album(client: TestClient) -> None:
    response = client.get("/albums/nope")

    assert response.status_code == 404
    assert response.json() == {"error": "Album not found"}


def test_empty_catalog(client: TestClient) -> None:
    assert client.get("/albums").json() == []
