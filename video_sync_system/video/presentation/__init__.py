"""
Video Presentation Layer.

Contains HTTP controllers, response models, and API route definitions.
"""

from .controllers import VideoController, StreamingController
from .schemas import VideoInfoResponse, CatalogRefreshResponse
from .routes import create_video_routes

__all__ = [
    "VideoController",
    "StreamingController",
    "VideoInfoResponse",
    "CatalogRefreshResponse",
    "create_video_routes",
]
