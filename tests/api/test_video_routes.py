from __future__ import annotations

from pathlib import Path


def test_list_videos(client) -> None:
    response = client.get("/videos")

    assert response.status_code == 200
    payload = response.json()
    assert [video["id"] for video in payload] == ["1", "2"]
    assert payload[0] == {
        "id": "1",
        "filename": "a.mp4",
        "title": "a",
        "duration": 120,
        "fileSize": 1000,
        "mimeType": "video/mp4",
    }


def test_get_video_metadata(client) -> None:
    response = client.get("/videos/2")

    assert response.status_code == 200
    assert response.json()["filename"] == "b.webm"


def test_unknown_video_is_404_everywhere(client) -> None:
    assert client.get("/videos/99").status_code == 404
    assert client.get("/videos/99/stream").status_code == 404
    assert "99" not in [video["id"] for video in client.get("/videos").json()]

    body = client.get("/videos/99").json()
    assert body["error"] == "not_found"
    assert body["message"] == "Video 99 not found"


def test_stream_full_file(client, video_bytes: bytes) -> None:
    response = client.get("/videos/1/stream")

    assert response.status_code == 200
    assert response.content == video_bytes
    assert response.headers["Content-Length"] == "1000"
    assert response.headers["Content-Type"] == "video/mp4"
    assert response.headers["Accept-Ranges"] == "bytes"
    assert response.headers["Cache-Control"] == "no-cache, no-store, must-revalidate"
    assert response.headers["Pragma"] == "no-cache"
    assert response.headers["Expires"] == "0"
    assert "Content-Range" not in response.headers


def test_stream_partial_range(client, video_bytes: bytes) -> None:
    response = client.get("/videos/1/stream", headers={"Range": "bytes=500-599"})

    assert response.status_code == 206
    assert response.headers["Content-Length"] == "100"
    assert response.headers["Content-Range"] == "bytes 500-599/1000"
    assert response.headers["Accept-Ranges"] == "bytes"
    assert response.headers["Cache-Control"] == "no-cache, no-store, must-revalidate"
    assert response.content == video_bytes[500:600]


def test_stream_open_ended_range(client, video_bytes: bytes) -> None:
    response = client.get("/videos/1/stream", headers={"Range": "bytes=990-"})

    assert response.status_code == 206
    assert response.headers["Content-Range"] == "bytes 990-999/1000"
    assert response.content == video_bytes[990:]


def test_stream_clamps_end_to_file_size(client, video_bytes: bytes) -> None:
    response = client.get("/videos/1/stream", headers={"Range": "bytes=900-2000"})

    assert response.status_code == 206
    assert response.headers["Content-Range"] == "bytes 900-999/1000"
    assert response.headers["Content-Length"] == "100"
    assert response.content == video_bytes[900:]


def test_unsatisfiable_range_returns_416(client) -> None:
    response = client.get("/videos/1/stream", headers={"Range": "bytes=1000-1100"})

    assert response.status_code == 416
    assert response.headers["Content-Range"] == "bytes */1000"
    assert response.json()["error"] == "range_not_satisfiable"


def test_malformed_range_returns_416(client) -> None:
    for header in ("bytes=x-y", "bytes=20-10", "pages=1-2"):
        response = client.get("/videos/1/stream", headers={"Range": header})
        assert response.status_code == 416, header


def test_multi_range_falls_back_to_full_payload(client, video_bytes: bytes) -> None:
    response = client.get("/videos/1/stream", headers={"Range": "bytes=0-1,4-5"})

    assert response.status_code == 200
    assert response.content == video_bytes


def test_missing_file_on_disk_returns_404(client, videos_dir: Path) -> None:
    (videos_dir / "a.mp4").unlink()

    response = client.get("/videos/1/stream")

    assert response.status_code == 404
    assert response.json()["message"] == "Video file not found: a.mp4"


def test_head_reports_headers_without_body(client) -> None:
    response = client.head("/videos/1/stream", headers={"Range": "bytes=0-9"})

    assert response.status_code == 206
    assert response.headers["Content-Range"] == "bytes 0-9/1000"
    assert response.headers["Content-Length"] == "10"
    assert response.content == b""


def test_options_preflight_does_not_touch_filesystem(client, videos_dir: Path) -> None:
    (videos_dir / "a.mp4").unlink()

    response = client.options("/videos/1/stream")

    assert response.status_code == 204
    assert response.headers["Access-Control-Allow-Headers"] == "Range"
    assert "GET" in response.headers["Allow"]


def test_refresh_catalog(client, videos_dir: Path) -> None:
    (videos_dir / "c.mov").write_bytes(b"mov")

    response = client.post("/videos/refresh")

    assert response.status_code == 200
    assert response.json() == {"count": 3}
    assert client.get("/videos/3").json()["mimeType"] == "video/quicktime"


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_browser_preflight_on_stream_returns_204(client) -> None:
    response = client.options(
        "/videos/1/stream",
        headers={
            "Origin": "http://player.example",
            "Access-Control-Request-Method": "GET",
            "Access-Control-Request-Headers": "range",
        },
    )

    assert response.status_code == 204
    assert response.content == b""
    assert response.headers["Allow"] == "GET, HEAD, OPTIONS"
    assert response.headers["Access-Control-Allow-Methods"] == "GET, HEAD, OPTIONS"
    assert response.headers["Access-Control-Allow-Headers"] == "Range"
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert "Content-Range" in response.headers["Access-Control-Expose-Headers"]


def test_browser_preflight_with_disallowed_method_is_rejected(client) -> None:
    response = client.options(
        "/videos/1/stream",
        headers={"Origin": "http://player.example", "Access-Control-Request-Method": "PUT"},
    )

    assert response.status_code == 400


def test_cross_origin_stream_exposes_range_headers(client) -> None:
    response = client.get("/videos/1/stream", headers={"Origin": "http://player.example", "Range": "bytes=0-9"})

    assert response.status_code == 206
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert "Content-Range" in response.headers["Access-Control-Expose-Headers"]
