"""
Video Application Service.

Catalog lookups used by the metadata endpoints and the session layer.
"""

import logging
from typing import List, Optional

from ...core.errors import NotFound
from ..domain.interfaces import VideoCatalog
from ..domain.models import Video


class VideoService:
    """Application service for video metadata"""

    def __init__(self, video_catalog: VideoCatalog):
        self.video_catalog = video_catalog
        self.logger = logging.getLogger(__name__)

    async def list_videos(self) -> List[Video]:
        return await self.video_catalog.get_all()

    async def find_video(self, video_id: str) -> Optional[Video]:
        return await self.video_catalog.get_by_id(str(video_id))

    async def get_video(self, video_id: str) -> Video:
        """Get video by ID, raising NotFound when the catalog has no such entry"""
        video = await self.find_video(video_id)
        if not video:
            raise NotFound(f"Video {video_id} not found")
        return video

    async def refresh_catalog(self) -> int:
        count = await self.video_catalog.refresh()
        self.logger.info(f"Catalog refreshed: {count} videos")
        return count
