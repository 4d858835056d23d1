"""Shared fixtures: a temporary video directory and an app wired to it."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from video_sync_system.api.server import APIServer, create_api_server
from video_sync_system.core.config import Config

VIDEO_BYTES = bytes(i % 251 for i in range(1000))


@pytest.fixture
def videos_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "videos"
    directory.mkdir()
    (directory / "a.mp4").write_bytes(VIDEO_BYTES)
    (directory / "b.webm").write_bytes(b"webm-bytes")
    (directory / "notes.txt").write_text("not a video")
    return directory


@pytest.fixture
def config(tmp_path: Path, videos_dir: Path) -> Config:
    config_file = tmp_path / "config.json"
    config_file.write_text(
        json.dumps(
            {
                "storage": {"videos_dir": str(videos_dir), "default_duration_seconds": 120, "chunk_size_bytes": 64},
                "sessions": {"session_ttl_seconds": 3600, "session_sweep_interval_seconds": 60},
                "system": {"log_level": "DEBUG", "log_file": None, "timezone": "UTC"},
            }
        )
    )
    return Config(str(config_file))


@pytest.fixture
def api_server(config: Config) -> APIServer:
    return create_api_server(config)


@pytest.fixture
def client(api_server: APIServer):
    with TestClient(api_server.app) as test_client:
        yield test_client


@pytest.fixture
def video_bytes() -> bytes:
    return VIDEO_BYTES
