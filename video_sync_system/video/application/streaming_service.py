"""
Video Streaming Application Service.

Resolves stream requests into response framing and opens bounded file reads.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from ...core.errors import IOFailure, NotFound
from ..domain.interfaces import VideoCatalog
from ..domain.models import StreamRange, Video
from ..infrastructure.file_window import FileWindow

# Playback position depends on liveness, so streamed bytes are never cached
NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}

STREAM_METHODS = "GET, HEAD, OPTIONS"
EXPOSED_STREAM_HEADERS = "Accept-Ranges, Content-Length, Content-Range, Content-Type"


@dataclass(frozen=True)
class StreamPlan:
    """Framing for one stream response"""
    video: Video
    file_size: int
    byte_range: Optional[StreamRange]  # None only for an empty file
    partial: bool

    @property
    def status_code(self) -> int:
        return 206 if self.partial else 200

    @property
    def content_length(self) -> int:
        return self.byte_range.size if self.byte_range else 0

    def headers(self) -> Dict[str, str]:
        headers = {
            "Accept-Ranges": "bytes",
            "Content-Length": str(self.content_length),
            "Content-Type": self.video.mime_type,
            **NO_CACHE_HEADERS,
        }
        if self.partial:
            headers["Content-Range"] = self.byte_range.content_range(self.file_size)
        return headers


class StreamingService:
    """Application service for byte-range video streaming"""

    def __init__(self, video_catalog: VideoCatalog, chunk_size: int = 64 * 1024):
        self.video_catalog = video_catalog
        self.chunk_size = chunk_size
        self.logger = logging.getLogger(__name__)

    async def respond(self, video_id: str, range_header: Optional[str] = None) -> StreamPlan:
        """
        Work out status and headers for streaming a video.

        Raises:
            NotFound: unknown video id, or the catalog entry's file is gone
            RangeNotSatisfiable: malformed range or start beyond the file
            IOFailure: the file exists but cannot be inspected
        """
        video = await self.video_catalog.get_by_id(video_id)
        if not video:
            raise NotFound(f"Video {video_id} not found")

        file_size = self._current_file_size(video)

        byte_range = None
        partial = False
        if range_header:
            byte_range = StreamRange.from_header(range_header, file_size)
            partial = byte_range is not None
            if byte_range is None:
                self.logger.debug(f"Ignoring multi-range request {range_header!r} for video {video_id}")

        if byte_range is None:
            byte_range = StreamRange.full(file_size)

        plan = StreamPlan(video=video, file_size=file_size, byte_range=byte_range, partial=partial)
        self.logger.debug(f"Stream plan for video {video_id}: {plan.status_code} {plan.headers().get('Content-Range', 'full')}")
        return plan

    async def open_stream(self, plan: StreamPlan) -> FileWindow:
        """Open a read handle bounded to the plan's byte window"""
        window = FileWindow(plan.video.file_path, plan.byte_range, chunk_size=self.chunk_size, label=f"video {plan.video.video_id}")
        return await window.open()

    @staticmethod
    def preflight_headers() -> Dict[str, str]:
        """Capabilities of the stream endpoint, answered without touching the filesystem"""
        return {
            "Allow": STREAM_METHODS,
            "Access-Control-Allow-Methods": STREAM_METHODS,
            "Access-Control-Allow-Headers": "Range",
            "Access-Control-Expose-Headers": EXPOSED_STREAM_HEADERS,
            "Accept-Ranges": "bytes",
        }

    def _current_file_size(self, video: Video) -> int:
        try:
            return video.file_path.stat().st_size
        except FileNotFoundError:
            self.logger.warning(f"Video {video.video_id} is in the catalog but {video.file_path} is missing")
            raise NotFound(f"Video file not found: {video.filename}")
        except OSError as e:
            self.logger.error(f"Error inspecting {video.file_path}: {e}")
            raise IOFailure(f"Could not read video file: {video.filename}")
