"""
Video Sync Streaming Server - Core Module

Configuration, logging, time handling and the error taxonomy shared by the
streaming and synchronization components.
"""

from .config import Config
from .errors import VideoSyncError, NotFound, InvalidRequest, RangeNotSatisfiable, IOFailure, ProtocolViolation

__all__ = ["Config", "VideoSyncError", "NotFound", "InvalidRequest", "RangeNotSatisfiable", "IOFailure", "ProtocolViolation"]
