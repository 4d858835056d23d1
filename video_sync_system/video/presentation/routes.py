"""
Video API Routes.

FastAPI route definitions for video metadata and streaming.
"""

from typing import List

from fastapi import APIRouter, Request

from .controllers import VideoController, StreamingController
from .schemas import CatalogRefreshResponse, VideoInfoResponse


def create_video_routes(
    video_controller: VideoController,
    streaming_controller: StreamingController
) -> APIRouter:
    """Create video API routes with dependency injection"""

    router = APIRouter(prefix="/videos", tags=["videos"])

    @router.get("", response_model=List[VideoInfoResponse])
    async def list_videos():
        """List every video in the catalog."""
        return await video_controller.list_videos()

    @router.post("/refresh", response_model=CatalogRefreshResponse)
    async def refresh_catalog():
        """Rescan the video directory and rebuild the catalog."""
        return await video_controller.refresh_catalog()

    @router.get("/{video_id}", response_model=VideoInfoResponse)
    async def get_video_info(video_id: str):
        """
        Get catalog metadata for a video.

        - **video_id**: Video identifier
        """
        return await video_controller.get_video_info(video_id)

    @router.get("/{video_id}/stream")
    async def stream_video(video_id: str, request: Request):
        """
        Stream video with HTTP range request support.

        - Without a **Range** header the whole file is returned with 200
        - `Range: bytes=<start>-[<end>]` returns 206 with the requested window
        - Unsatisfiable ranges return 416 with `Content-Range: bytes */<size>`

        Usage in HTML5:
        ```html
        <video controls>
            <source src="/videos/{video_id}/stream" type="video/mp4">
        </video>
        ```
        """
        return await streaming_controller.stream_video(video_id, request)

    @router.head("/{video_id}/stream")
    async def head_video_stream(video_id: str, request: Request):
        """Same status and headers as GET, without a body."""
        return await streaming_controller.head_video(video_id, request)

    @router.options("/{video_id}/stream", status_code=204)
    async def stream_preflight(video_id: str):
        """Declare allowed methods and the Range request header."""
        return await streaming_controller.preflight()

    return router
