"""
Session API Routes.

Create, inspect and end playback sessions over HTTP.
"""

import logging
from typing import Optional

from fastapi import APIRouter

from ..core.errors import InvalidRequest, NotFound
from ..video.application.video_service import VideoService
from .schemas import CreateSessionRequest, SessionDeletedResponse, SessionResponse
from .store import SessionStore, StreamSession

logger = logging.getLogger(__name__)


def to_session_response(session: StreamSession) -> SessionResponse:
    return SessionResponse(
        session_id=session.session_id,
        video_id=session.video_id,
        current_position=session.current_position,
        is_playing=session.is_playing,
        created_at=session.created_at,
    )


def create_session_routes(session_store: SessionStore, video_service: VideoService) -> APIRouter:
    """Create session API routes with dependency injection"""

    router = APIRouter(prefix="/sessions", tags=["sessions"])

    @router.post("", response_model=SessionResponse)
    async def create_session(request: Optional[CreateSessionRequest] = None):
        """
        Start a playback session for a catalog video.

        The session starts paused at position 0.
        """
        video_id = request.video_id if request else None
        if video_id is None or str(video_id).strip() == "":
            raise InvalidRequest("Video ID is required")

        video = await video_service.find_video(str(video_id))
        if not video:
            raise NotFound(f"Video {video_id} not found")

        session = session_store.create(video.video_id)
        return to_session_response(session)

    @router.get("/{session_id}", response_model=SessionResponse)
    async def get_session(session_id: str):
        session = session_store.get(session_id)
        if not session:
            raise NotFound(f"Session {session_id} not found")
        return to_session_response(session)

    @router.delete("/{session_id}", response_model=SessionDeletedResponse)
    async def delete_session(session_id: str):
        """End a session explicitly instead of waiting for idle expiry."""
        if not session_store.delete(session_id):
            raise NotFound(f"Session {session_id} not found")
        return SessionDeletedResponse(session_id=session_id)

    return router
