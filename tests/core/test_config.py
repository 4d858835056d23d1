import json
from datetime import datetime
from pathlib import Path

import pytest

from video_sync_system.core.config import Config
from video_sync_system.core.errors import NotFound, RangeNotSatisfiable, VideoSyncError
from video_sync_system.core.timezone_utils import TimezoneManager


def test_defaults_are_saved_when_file_is_missing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    config = Config("config.json")

    assert config.storage.videos_dir == "videos"
    assert config.storage.chunk_size_bytes == 64 * 1024
    assert config.sessions.session_ttl_seconds == 3600
    assert config.system.api_port == 8000
    assert (tmp_path / "videos").is_dir()
    assert json.loads((tmp_path / "config.json").read_text()) == config.to_dict()


def test_defaults_not_saved_when_disabled(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    Config("config.json", save_defaults=False)

    assert not (tmp_path / "config.json").exists()


def test_sections_loaded_from_file(tmp_path: Path) -> None:
    config_file = tmp_path / "config.json"
    videos = tmp_path / "media"
    config_file.write_text(json.dumps({"storage": {"videos_dir": str(videos)}, "system": {"api_port": 9000, "timezone": "Europe/Paris"}}))

    config = Config(str(config_file))

    assert config.videos_path == videos
    assert videos.is_dir()
    assert config.system.api_port == 9000
    assert config.system.timezone == "Europe/Paris"
    assert config.sessions.session_ttl_seconds == 3600


def test_invalid_file_keeps_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    config_file = tmp_path / "config.json"
    config_file.write_text("{not json")

    config = Config(str(config_file))

    assert config.system.api_port == 8000


def test_timezone_manager_falls_back_to_utc() -> None:
    manager = TimezoneManager("Mars/Olympus_Mons")

    assert manager.timezone_name == "UTC"
    assert manager.now().utcoffset().total_seconds() == 0


def test_timezone_manager_localizes_naive_datetimes_as_utc() -> None:
    manager = TimezoneManager("Asia/Tokyo")

    local = manager.to_local(datetime(2024, 1, 1, 0, 0))

    assert local.hour == 9
    assert manager.format_timestamp(datetime(2024, 1, 1)).endswith("+09:00")


def test_error_payloads() -> None:
    assert NotFound("Video 3 not found").to_dict() == {"error": "not_found", "message": "Video 3 not found"}
    assert VideoSyncError("boom").status_code == 500

    error = RangeNotSatisfiable("Requested range not satisfiable", file_size=10)
    assert error.status_code == 416
    assert error.file_size == 10
    assert error.to_dict()["details"] == {"file_size": 10}
