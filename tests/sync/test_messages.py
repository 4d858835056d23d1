import json

import pytest

from video_sync_system.core.errors import ProtocolViolation
from video_sync_system.sync.messages import (
    PauseCommand,
    PlayCommand,
    SeekCommand,
    StatusUpdate,
    StopCommand,
    error_notice,
    parse_command,
)


@pytest.mark.parametrize(
    ("frame", "expected_type"),
    [
        ({"type": "play", "sessionId": "S"}, PlayCommand),
        ({"type": "pause", "sessionId": "S"}, PauseCommand),
        ({"type": "seek", "sessionId": "S", "position": 12.5}, SeekCommand),
        ({"type": "stop", "sessionId": "S"}, StopCommand),
    ],
)
def test_valid_commands(frame, expected_type) -> None:
    command = parse_command(json.dumps(frame))

    assert isinstance(command, expected_type)
    assert command.session_id == "S"


def test_seek_carries_position() -> None:
    command = parse_command('{"type": "seek", "sessionId": "S", "position": 42}')
    assert command.position == 42


def test_extra_fields_are_ignored() -> None:
    command = parse_command('{"type": "play", "sessionId": "S", "position": 3, "client": "tv"}')
    assert isinstance(command, PlayCommand)


@pytest.mark.parametrize(
    "raw",
    [
        '{"type": "status", "sessionId": "S"}',
        '{"type": "rewind", "sessionId": "S"}',
        '{"sessionId": "S"}',
        '{"type": "play"}',
        '{"type": "play", "sessionId": ""}',
        '{"type": "play", "sessionId": 7}',
        '{"type": "seek", "sessionId": "S"}',
        '{"type": "seek", "sessionId": "S", "position": -1}',
        '{"type": "seek", "sessionId": "S", "position": "ten"}',
        '{"type": "seek", "sessionId": "S", "position": NaN}',
        '{"type": "seek", "sessionId": "S", "position": Infinity}',
    ],
)
def test_invalid_commands_are_rejected(raw: str) -> None:
    with pytest.raises(ProtocolViolation) as excinfo:
        parse_command(raw)
    assert excinfo.value.message == "Invalid message format"
    assert excinfo.value.details["errors"]


@pytest.mark.parametrize("raw", ["not json", "", "{\"type\": "])
def test_non_json_is_rejected(raw: str) -> None:
    with pytest.raises(ProtocolViolation):
        parse_command(raw)


@pytest.mark.parametrize("raw", ["[]", "42", '"play"', "null"])
def test_non_object_is_rejected(raw: str) -> None:
    with pytest.raises(ProtocolViolation) as excinfo:
        parse_command(raw)
    assert excinfo.value.details == {"reason": "message must be a JSON object"}


def test_status_update_wire_format() -> None:
    update = StatusUpdate(session_id="S", is_playing=True, current_position=4.5, duration=120)

    assert update.to_wire() == {
        "type": "status",
        "sessionId": "S",
        "isPlaying": True,
        "currentPosition": 4.5,
        "duration": 120,
    }


def test_error_notice() -> None:
    notice = error_notice(ProtocolViolation("Invalid message format", details={"reason": "x"}))
    assert notice == {"type": "error", "error": "Invalid message format", "details": {"reason": "x"}}
