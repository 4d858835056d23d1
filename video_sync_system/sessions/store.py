"""
Playback session state for the Video Sync Streaming Server.

This module owns every StreamSession record and serializes access to them
in a thread-safe manner.
"""

import logging
import secrets
import threading
import time
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Callable, Dict, List, Optional

from ..core.timezone_utils import TimezoneManager

UPDATABLE_FIELDS = frozenset({"current_position", "is_playing"})


@dataclass
class StreamSession:
    """Playback state of one watch session"""
    session_id: str
    video_id: str
    created_at: datetime
    current_position: float = 0.0
    is_playing: bool = False
    last_activity: float = field(default=0.0, repr=False)  # monotonic seconds


def generate_session_id() -> str:
    """Opaque URL-safe token, 21 characters"""
    return secrets.token_urlsafe(16)[:21]


class SessionStore:
    """
    Thread-safe store of playback sessions.

    Callers always receive copies; the stored records change only through
    ``create``, ``update``, ``delete`` and ``purge_expired``.
    """

    def __init__(self, ttl_seconds: Optional[float] = 3600, timezone_manager: Optional[TimezoneManager] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.logger = logging.getLogger(__name__)
        self._lock = threading.RLock()
        self._sessions: Dict[str, StreamSession] = {}

        self.ttl_seconds = ttl_seconds
        self.timezone_manager = timezone_manager or TimezoneManager()
        self._clock = clock

    def create(self, video_id: str) -> StreamSession:
        """Start a session at position 0, paused"""
        with self._lock:
            session_id = generate_session_id()
            while session_id in self._sessions:
                session_id = generate_session_id()

            session = StreamSession(
                session_id=session_id,
                video_id=str(video_id),
                created_at=self.timezone_manager.now(),
                last_activity=self._clock(),
            )
            self._sessions[session_id] = session
            self.logger.info(f"Session {session_id} created for video {video_id}")
            return replace(session)

    def get(self, session_id: str) -> Optional[StreamSession]:
        with self._lock:
            session = self._sessions.get(session_id)
            return replace(session) if session else None

    def update(self, session_id: str, **fields) -> Optional[StreamSession]:
        """
        Merge the given fields into a session.

        Only ``current_position`` and ``is_playing`` may change; fields not
        passed keep their values. Returns None for an unknown session.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update session fields: {', '.join(sorted(unknown))}")

        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                self.logger.debug(f"Update for unknown session {session_id} ignored")
                return None

            if "current_position" in fields:
                position = float(fields["current_position"])
                if position < 0:
                    raise ValueError("Position cannot be negative")
                session.current_position = position
            if "is_playing" in fields:
                session.is_playing = bool(fields["is_playing"])
            session.last_activity = self._clock()

            self.logger.debug(f"Session {session_id} -> playing={session.is_playing} position={session.current_position}")
            return replace(session)

    def delete(self, session_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(session_id, None)

        if removed:
            self.logger.info(f"Session {session_id} deleted")
        return removed is not None

    def list_sessions(self) -> List[StreamSession]:
        with self._lock:
            return [replace(session) for session in self._sessions.values()]

    def count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def purge_expired(self) -> int:
        """Remove sessions idle for longer than the TTL"""
        if not self.ttl_seconds or self.ttl_seconds <= 0:
            return 0

        cutoff = self._clock() - self.ttl_seconds
        with self._lock:
            expired = [session_id for session_id, session in self._sessions.items() if session.last_activity < cutoff]
            for session_id in expired:
                del self._sessions[session_id]

        if expired:
            self.logger.info(f"Purged {len(expired)} idle sessions")
        return len(expired)
