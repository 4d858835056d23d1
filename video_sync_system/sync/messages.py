"""
Control channel messages.

Client commands are a tagged union on ``type``; frames with an unknown type or
with missing or ill-typed fields are rejected rather than dropped.
"""

import json
from typing import Annotated, Any, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, TypeAdapter, ValidationError

from ..core.errors import ProtocolViolation

SessionId = Annotated[StrictStr, Field(min_length=1, alias="sessionId")]


class _Command(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class PlayCommand(_Command):
    type: Literal["play"]
    session_id: SessionId


class PauseCommand(_Command):
    type: Literal["pause"]
    session_id: SessionId


class SeekCommand(_Command):
    type: Literal["seek"]
    session_id: SessionId
    position: float = Field(..., ge=0, allow_inf_nan=False, description="Target position in seconds")


class StopCommand(_Command):
    type: Literal["stop"]
    session_id: SessionId


ControlCommand = Annotated[Union[PlayCommand, PauseCommand, SeekCommand, StopCommand], Field(discriminator="type")]

_command_adapter = TypeAdapter(ControlCommand)


class StatusUpdate(BaseModel):
    """Server-to-client session state broadcast"""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["status"] = "status"
    session_id: str = Field(..., alias="sessionId")
    is_playing: bool = Field(..., alias="isPlaying")
    current_position: float = Field(..., alias="currentPosition")
    duration: float = 0

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


def parse_command(raw: str) -> ControlCommand:
    """
    Decode and validate one client frame.

    Raises:
        ProtocolViolation: the frame is not JSON or not a valid command
    """
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise ProtocolViolation("Invalid message format", details={"reason": f"not valid JSON: {e}"})

    if not isinstance(payload, dict):
        raise ProtocolViolation("Invalid message format", details={"reason": "message must be a JSON object"})

    try:
        return _command_adapter.validate_python(payload)
    except ValidationError as e:
        errors = [{"loc": ".".join(str(part) for part in error["loc"]), "msg": error["msg"]} for error in e.errors()]
        raise ProtocolViolation("Invalid message format", details={"errors": errors})


def error_notice(error: ProtocolViolation) -> Dict[str, Any]:
    notice: Dict[str, Any] = {"type": "error", "error": error.message}
    if error.details:
        notice["details"] = error.details
    return notice
