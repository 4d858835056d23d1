from __future__ import annotations


def test_create_session(client) -> None:
    response = client.post("/sessions", json={"videoId": "1"})

    assert response.status_code == 200
    session = response.json()
    assert session["videoId"] == "1"
    assert session["currentPosition"] == 0
    assert session["isPlaying"] is False
    assert session["sessionId"]
    assert session["createdAt"]


def test_create_session_accepts_numeric_video_id(client) -> None:
    response = client.post("/sessions", json={"videoId": 2})

    assert response.status_code == 200
    assert response.json()["videoId"] == "2"


def test_create_session_requires_video_id(client) -> None:
    response = client.post("/sessions", json={})

    assert response.status_code == 400
    assert response.json() == {"error": "invalid_request", "message": "Video ID is required"}

    assert client.post("/sessions").status_code == 400
    assert client.post("/sessions", json={"videoId": ""}).status_code == 400


def test_create_session_for_unknown_video(client) -> None:
    response = client.post("/sessions", json={"videoId": "404"})

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_session_ids_are_unique(client) -> None:
    ids = {client.post("/sessions", json={"videoId": "1"}).json()["sessionId"] for _ in range(20)}
    assert len(ids) == 20


def test_get_and_delete_session(client) -> None:
    session_id = client.post("/sessions", json={"videoId": "1"}).json()["sessionId"]

    fetched = client.get(f"/sessions/{session_id}")
    assert fetched.status_code == 200
    assert fetched.json()["sessionId"] == session_id

    deleted = client.delete(f"/sessions/{session_id}")
    assert deleted.status_code == 200
    assert deleted.json() == {"sessionId": session_id, "deleted": True}

    assert client.get(f"/sessions/{session_id}").status_code == 404
    assert client.delete(f"/sessions/{session_id}").status_code == 404


def test_create_session_with_ill_typed_video_id(client) -> None:
    response = client.post("/sessions", json={"videoId": [1]})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "invalid_request"
    assert body["message"] == "Invalid request body"
    assert body["details"]["errors"]


def test_create_session_with_non_json_body(client) -> None:
    response = client.post("/sessions", content=b"videoId=1", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_request"
