"""Integration tests for the listening history endpoints."""

from fastapi.testclient import TestClient


def play(client: TestClient, headers, title, **fields):
    return client.post("/api/history/add", json={"songTitle": title, **fields}, headers=headers)


def test_record_and_list_newest_first(client: TestClient, auth_headers) -> None:
    recorded = play(client, auth_headers, "First", artist="X", duration=120)
    play(client, auth_headers, "Second")

    assert recorded.status_code == 200
    assert recorded.json()["entry"]["songTitle"] == "First"
    history = client.get("/api/history/user", headers=auth_headers).json()["history"]
    assert [entry["songTitle"] for entry in history] == ["Second", "First"]


def test_limit(client: TestClient, auth_headers) -> None:
    for title in ("A", "B", "C"):
        play(client, auth_headers, title)

    history = client.get("/api/history/user?limit=2", headers=auth_headers).json()["history"]

    assert [entry["songTitle"] for entry in history] == ["C", "B"]


def test_invalid_limit(client: TestClient, auth_headers) -> None:
    response = client.get("/api/history/user?limit=0", headers=auth_headers)

    assert response.status_code == 400


def test_record_requires_title(client: TestClient, auth_headers) -> None:
    response = client.post("/api/history/add", json={"artist": "X"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "Song title is required"}


def test_clear_only_touches_own_history(client: TestClient, register) -> None:
    alice = register("alice")
    bob = register("bob")
    play(client, alice, "A")
    play(client, bob, "B")

    response = client.request("DELETE", "/api/history/clear", headers=alice)

    assert response.status_code == 200
    assert client.get("/api/history/user", headers=alice).json() == {"history": []}
    assert len(client.get("/api/history/user", headers=bob).json()["history"]) == 1
