"""
Video Domain Models.

Pure business entities and value objects for video streaming.
These models contain no framework dependencies.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from enum import Enum

from ...core.errors import RangeNotSatisfiable


class VideoFormat(Enum):
    """Video container formats served from the video directory"""
    MP4 = "mp4"
    WEBM = "webm"
    AVI = "avi"
    MOV = "mov"

    @property
    def mime_type(self) -> str:
        return _FORMAT_TO_MIME[self]

    @classmethod
    def from_filename(cls, filename: str) -> Optional['VideoFormat']:
        extension = Path(filename).suffix.lower().lstrip('.')
        try:
            return cls(extension)
        except ValueError:
            return None


_FORMAT_TO_MIME = {
    VideoFormat.MP4: "video/mp4",
    VideoFormat.WEBM: "video/webm",
    VideoFormat.AVI: "video/x-msvideo",
    VideoFormat.MOV: "video/quicktime",
}

# bytes=<start>-<end>, either side may be empty (suffix or open-ended)
_RANGE_SPEC = re.compile(r"^\s*(\d*)\s*-\s*(\d*)\s*$", re.ASCII)


@dataclass(frozen=True)
class Video:
    """Catalog entry for a stored video"""
    video_id: str
    filename: str
    title: str
    duration_seconds: int
    file_size_bytes: int
    mime_type: str
    file_path: Path
    duration_known: bool = True  # False when duration_seconds is only the configured default

    def __post_init__(self):
        if not self.video_id:
            raise ValueError("Video ID cannot be empty")
        if self.duration_seconds < 0:
            raise ValueError("Duration cannot be negative")
        if self.file_size_bytes < 0:
            raise ValueError("File size cannot be negative")


@dataclass(frozen=True)
class StreamRange:
    """Inclusive byte window of a file"""
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0:
            raise ValueError("Start byte cannot be negative")
        if self.end < self.start:
            raise ValueError("End byte cannot be less than start byte")

    @property
    def size(self) -> int:
        """Number of bytes in the window"""
        return self.end - self.start + 1

    def content_range(self, file_size: int) -> str:
        """Content-Range header value for this window"""
        return f"bytes {self.start}-{self.end}/{file_size}"

    @classmethod
    def full(cls, file_size: int) -> Optional['StreamRange']:
        """Window covering a whole file, None for an empty file"""
        if file_size <= 0:
            return None
        return cls(start=0, end=file_size - 1)

    @classmethod
    def from_header(cls, range_header: str, file_size: int) -> Optional['StreamRange']:
        """
        Parse an HTTP Range header against a file of known size.

        The end offset is clamped to the last byte of the file. Returns None for
        multi-range requests, which are served as full content instead.

        Raises:
            RangeNotSatisfiable: malformed header, start > end, or start beyond the file
        """
        header = range_header.strip()
        if not header.lower().startswith('bytes='):
            raise RangeNotSatisfiable(f"Unsupported range unit in {range_header!r}", file_size)

        range_spec = header[6:]  # Remove 'bytes='
        if ',' in range_spec:
            return None

        match = _RANGE_SPEC.match(range_spec)
        if not match:
            raise RangeNotSatisfiable(f"Malformed range {range_header!r}", file_size)

        start_str, end_str = match.groups()

        if not start_str:
            # Suffix range (e.g., "-500" means last 500 bytes)
            if not end_str:
                raise RangeNotSatisfiable(f"Malformed range {range_header!r}", file_size)
            suffix_length = int(end_str)
            if suffix_length == 0 or file_size == 0:
                raise RangeNotSatisfiable(f"Range {range_header!r} selects no bytes", file_size)
            return cls(start=max(0, file_size - suffix_length), end=file_size - 1)

        start = int(start_str)
        if start >= file_size:
            raise RangeNotSatisfiable(f"Range start {start} is beyond end of file ({file_size} bytes)", file_size)

        if end_str:
            end = int(end_str)
            if end < start:
                raise RangeNotSatisfiable(f"Range end {end} is before start {start}", file_size)
            end = min(end, file_size - 1)
        else:
            end = file_size - 1

        return cls(start=start, end=end)
