"""
Video HTTP Controllers.

Handle HTTP requests and responses for video operations.
"""

import logging
from typing import List

from fastapi import Request, Response
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from ...core.errors import IOFailure, VideoSyncError
from ..application.video_service import VideoService
from ..application.streaming_service import StreamingService
from ..domain.models import Video
from .schemas import CatalogRefreshResponse, VideoInfoResponse


class VideoController:
    """Controller for video metadata operations"""

    def __init__(self, video_service: VideoService):
        self.video_service = video_service
        self.logger = logging.getLogger(__name__)

    async def list_videos(self) -> List[VideoInfoResponse]:
        try:
            videos = await self.video_service.list_videos()
        except Exception as e:
            self.logger.error(f"Error listing videos: {e}")
            raise VideoSyncError("Failed to fetch videos")

        return [self._convert_to_response(video) for video in videos]

    async def get_video_info(self, video_id: str) -> VideoInfoResponse:
        video = await self.video_service.get_video(video_id)
        return self._convert_to_response(video)

    async def refresh_catalog(self) -> CatalogRefreshResponse:
        try:
            count = await self.video_service.refresh_catalog()
        except Exception as e:
            self.logger.error(f"Error refreshing catalog: {e}")
            raise VideoSyncError("Failed to refresh video catalog")

        return CatalogRefreshResponse(count=count)

    def _convert_to_response(self, video: Video) -> VideoInfoResponse:
        """Convert domain model to response model"""
        return VideoInfoResponse(
            id=video.video_id,
            filename=video.filename,
            title=video.title,
            duration=video.duration_seconds,
            file_size=video.file_size_bytes,
            mime_type=video.mime_type,
        )


class StreamingController:
    """Controller for byte-range streaming"""

    def __init__(self, streaming_service: StreamingService):
        self.streaming_service = streaming_service
        self.logger = logging.getLogger(__name__)

    async def stream_video(self, video_id: str, request: Request) -> Response:
        """Stream video with range request support"""
        try:
            plan = await self.streaming_service.respond(video_id, request.headers.get("range"))
            window = await self.streaming_service.open_stream(plan)
        except VideoSyncError:
            raise
        except Exception as e:
            self.logger.error(f"Error preparing stream for video {video_id}: {e}")
            raise IOFailure(f"Failed to stream video {video_id}")

        # The background close covers responses whose body is never iterated
        return StreamingResponse(window.iter_chunks(), status_code=plan.status_code, headers=plan.headers(), media_type=plan.video.mime_type, background=BackgroundTask(window.close))

    async def head_video(self, video_id: str, request: Request) -> Response:
        """Report stream headers without a body"""
        plan = await self.streaming_service.respond(video_id, request.headers.get("range"))
        return Response(status_code=plan.status_code, headers=plan.headers())

    async def preflight(self) -> Response:
        return Response(status_code=204, headers=self.streaming_service.preflight_headers())
