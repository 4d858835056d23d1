"""
Video Catalog Implementations.

File system-based implementation of the video catalog interface.
"""

import json
import logging
import threading
from typing import Dict, List, Optional
from pathlib import Path

from ..domain.interfaces import VideoCatalog
from ..domain.models import Video, VideoFormat


class FileSystemVideoCatalog(VideoCatalog):
    """
    Catalog discovered from a directory of video files.

    Videos are numbered "1", "2", ... in filename order at discovery time.
    Titles and durations come from an optional JSON manifest keyed by filename:

        {"intro.mp4": {"title": "Introduction", "duration": 95}}

    Files without a manifest entry use their stem as title and the default duration;
    such durations are reported but flagged as not known.
    """

    def __init__(self, videos_dir: Path, manifest_path: Optional[Path] = None, default_duration_seconds: int = 120):
        self.videos_dir = Path(videos_dir)
        self.manifest_path = Path(manifest_path) if manifest_path else None
        self.default_duration_seconds = default_duration_seconds
        self.logger = logging.getLogger(__name__)

        self._lock = threading.Lock()
        self._videos: Dict[str, Video] = {}
        self._load()

    async def get_by_id(self, video_id: str) -> Optional[Video]:
        with self._lock:
            return self._videos.get(str(video_id))

    async def get_by_filename(self, filename: str) -> Optional[Video]:
        with self._lock:
            for video in self._videos.values():
                if video.filename == filename:
                    return video
        return None

    async def get_all(self) -> List[Video]:
        with self._lock:
            return list(self._videos.values())

    async def refresh(self) -> int:
        return self._load()

    def _load(self) -> int:
        """Scan the video directory and replace the catalog contents"""
        videos = self._discover()
        with self._lock:
            self._videos = {video.video_id: video for video in videos}
        self.logger.info(f"Video catalog loaded {len(videos)} videos from {self.videos_dir}")
        return len(videos)

    def _discover(self) -> List[Video]:
        if not self.videos_dir.is_dir():
            self.logger.warning(f"Video directory {self.videos_dir} does not exist")
            return []

        manifest = self._read_manifest()
        videos: List[Video] = []

        for file_path in sorted(self.videos_dir.iterdir(), key=lambda p: p.name):
            if not file_path.is_file():
                continue

            video_format = VideoFormat.from_filename(file_path.name)
            if video_format is None:
                continue

            entry = manifest.get(file_path.name, {})
            try:
                videos.append(
                    Video(
                        video_id=str(len(videos) + 1),
                        filename=file_path.name,
                        title=str(entry.get("title") or file_path.stem),
                        duration_seconds=int(entry.get("duration", self.default_duration_seconds)),
                        duration_known="duration" in entry,
                        file_size_bytes=file_path.stat().st_size,
                        mime_type=video_format.mime_type,
                        file_path=file_path,
                    )
                )
            except (OSError, ValueError, TypeError) as e:
                self.logger.warning(f"Skipping {file_path.name}: {e}")

        return videos

    def _read_manifest(self) -> Dict[str, dict]:
        if not self.manifest_path:
            return {}

        if not self.manifest_path.exists():
            self.logger.warning(f"Catalog manifest {self.manifest_path} not found")
            return {}

        try:
            with open(self.manifest_path, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.error(f"Error reading catalog manifest {self.manifest_path}: {e}")
            return {}

        if not isinstance(data, dict):
            self.logger.error(f"Catalog manifest {self.manifest_path} must be a JSON object keyed by filename")
            return {}

        return {name: entry for name, entry in data.items() if isinstance(entry, dict)}
