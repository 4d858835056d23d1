"""
Video Module Integration.

Wires the catalog, application services and controllers of the video module.
"""

import logging
from pathlib import Path
from typing import Optional

from ..core.config import Config

from .domain.interfaces import VideoCatalog
from .infrastructure.catalog import FileSystemVideoCatalog
from .application.video_service import VideoService
from .application.streaming_service import StreamingService
from .presentation.controllers import VideoController, StreamingController
from .presentation.routes import create_video_routes


class VideoModule:
    """
    Composition root for video metadata and streaming.

    A catalog can be injected; otherwise the configured video directory is scanned.
    """

    def __init__(self, config: Config, video_catalog: Optional[VideoCatalog] = None):
        self.config = config
        self.logger = logging.getLogger(__name__)

        # Infrastructure layer
        self.video_catalog = video_catalog or self._create_video_catalog()

        # Application layer
        self.video_service = VideoService(video_catalog=self.video_catalog)
        self.streaming_service = StreamingService(video_catalog=self.video_catalog, chunk_size=self.config.storage.chunk_size_bytes)

        # Presentation layer
        self.video_controller = VideoController(self.video_service)
        self.streaming_controller = StreamingController(self.streaming_service)

        self.logger.info("Video module initialized successfully")

    def _create_video_catalog(self) -> VideoCatalog:
        storage = self.config.storage
        return FileSystemVideoCatalog(
            videos_dir=Path(storage.videos_dir),
            manifest_path=Path(storage.catalog_manifest) if storage.catalog_manifest else None,
            default_duration_seconds=storage.default_duration_seconds,
        )

    def get_api_routes(self):
        """Get FastAPI routes for video functionality"""
        return create_video_routes(
            video_controller=self.video_controller,
            streaming_controller=self.streaming_controller
        )

    def get_module_status(self) -> dict:
        return {
            "video_catalog": type(self.video_catalog).__name__,
            "videos_dir": self.config.storage.videos_dir,
            "chunk_size_bytes": self.streaming_service.chunk_size,
        }


def create_video_module(config: Config, video_catalog: Optional[VideoCatalog] = None) -> VideoModule:
    """Factory function to create a configured video module"""
    return VideoModule(config=config, video_catalog=video_catalog)
