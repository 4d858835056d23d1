"""
Session API Request/Response Schemas.
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class CreateSessionRequest(BaseModel):
    """Start a playback session for a video"""

    model_config = ConfigDict(populate_by_name=True, json_schema_extra={"example": {"videoId": "1"}})

    video_id: Optional[Union[int, str]] = Field(None, alias="videoId", description="Catalog video identifier")


class SessionResponse(BaseModel):
    """Playback session record"""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "sessionId": "V1StGXR8_Z5jdHi6B-myT",
                "videoId": "1",
                "currentPosition": 0,
                "isPlaying": False,
                "createdAt": "2025-08-04T14:30:22+00:00",
            }
        },
    )

    session_id: str = Field(..., alias="sessionId")
    video_id: str = Field(..., alias="videoId")
    current_position: float = Field(..., alias="currentPosition", description="Playback position in seconds")
    is_playing: bool = Field(..., alias="isPlaying")
    created_at: datetime = Field(..., alias="createdAt")


class SessionDeletedResponse(BaseModel):
    session_id: str = Field(..., alias="sessionId")
    deleted: bool = True

    model_config = ConfigDict(populate_by_name=True)
