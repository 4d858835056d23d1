"""
Video Sync Streaming Server

Serves stored videos over HTTP with byte-range support and keeps viewers'
playback state in sync over a WebSocket control channel.
"""

__version__ = "1.0.0"

from .main import VideoSyncSystem

__all__ = ["VideoSyncSystem"]
