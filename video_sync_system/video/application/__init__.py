"""
Video Application Layer.

Use cases that coordinate the catalog and file access.
"""

from .video_service import VideoService
from .streaming_service import StreamingService, StreamPlan

__all__ = [
    "VideoService",
    "StreamingService",
    "StreamPlan",
]
