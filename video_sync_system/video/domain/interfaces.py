"""
Video Domain Interfaces.

Abstract interfaces that define contracts for video lookup.
The streaming and synchronization layers depend only on these contracts.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Video


class VideoCatalog(ABC):
    """Read-only catalog of stored videos"""

    @abstractmethod
    async def get_by_id(self, video_id: str) -> Optional[Video]:
        """Get video by identifier"""
        pass

    @abstractmethod
    async def get_by_filename(self, filename: str) -> Optional[Video]:
        """Get video by its filename in the video directory"""
        pass

    @abstractmethod
    async def get_all(self) -> List[Video]:
        """List every video in the catalog"""
        pass

    @abstractmethod
    async def refresh(self) -> int:
        """Reload the catalog from its backing store, returning the video count"""
        pass
