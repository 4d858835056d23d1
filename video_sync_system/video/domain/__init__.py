"""
Video Domain Layer.

Pure domain models and the catalog contract.
"""

from .models import Video, VideoFormat, StreamRange
from .interfaces import VideoCatalog

__all__ = [
    "Video",
    "VideoFormat",
    "StreamRange",
    "VideoCatalog",
]
