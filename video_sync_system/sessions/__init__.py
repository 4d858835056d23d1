"""
Playback sessions: the shared mutable state kept in sync across viewers.
"""

from .store import SessionStore, StreamSession
from .routes import create_session_routes

__all__ = ["SessionStore", "StreamSession", "create_session_routes"]
