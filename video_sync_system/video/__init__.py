"""
Video Module for the Video Sync Streaming Server.

Catalog lookup and byte-range streaming, layered as domain, application,
infrastructure and presentation.
"""

from .domain.models import Video, StreamRange
from .application.video_service import VideoService
from .application.streaming_service import StreamingService
from .integration import VideoModule, create_video_module

__all__ = ["Video", "StreamRange", "VideoService", "StreamingService", "VideoModule", "create_video_module"]
