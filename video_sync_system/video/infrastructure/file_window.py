"""
Bounded async file reads for streaming responses.
"""

import logging
from pathlib import Path
from typing import AsyncIterator, Optional

import aiofiles

from ...core.errors import IOFailure, NotFound
from ..domain.models import StreamRange


class FileWindow:
    """
    Read handle restricted to one byte window of a file.

    The handle is opened eagerly by ``open()`` so that failures surface before a
    response is started. It is released when iteration finishes, when the
    consumer abandons iteration (client disconnect), or on an explicit
    ``close()``; closing twice is a no-op.
    """

    def __init__(self, file_path: Path, byte_range: Optional[StreamRange], chunk_size: int = 64 * 1024, label: str = ""):
        self.file_path = Path(file_path)
        self.byte_range = byte_range
        self.chunk_size = max(1, chunk_size)
        self.label = label or self.file_path.name
        self.logger = logging.getLogger(__name__)

        self._handle = None
        self._closed = False
        self.bytes_sent = 0

    @property
    def length(self) -> int:
        return self.byte_range.size if self.byte_range else 0

    @property
    def is_open(self) -> bool:
        return self._handle is not None and not self._closed

    async def open(self) -> "FileWindow":
        try:
            self._handle = await aiofiles.open(self.file_path, "rb")
            if self.byte_range and self.byte_range.start:
                await self._handle.seek(self.byte_range.start)
        except FileNotFoundError:
            await self.close()
            raise NotFound(f"Video file not found: {self.file_path.name}")
        except OSError as e:
            await self.close()
            self.logger.error(f"Error opening {self.file_path} for {self.label}: {e}")
            raise IOFailure(f"Could not read video file: {self.file_path.name}")
        return self

    async def iter_chunks(self) -> AsyncIterator[bytes]:
        if self._handle is None:
            await self.open()

        remaining = self.length
        try:
            while remaining > 0:
                chunk = await self._handle.read(min(self.chunk_size, remaining))
                if not chunk:
                    # File shrank under us; the client sees a short body
                    self.logger.warning(f"Unexpected end of file while streaming {self.label} ({remaining} bytes missing)")
                    break
                remaining -= len(chunk)
                self.bytes_sent += len(chunk)
                yield chunk
        except OSError as e:
            self.logger.error(f"Error streaming {self.label} after {self.bytes_sent} bytes: {e}")
            raise
        finally:
            await self.close()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._handle is not None:
            try:
                await self._handle.close()
            except OSError as e:
                self.logger.warning(f"Error closing {self.file_path}: {e}")
            if self.bytes_sent < self.length:
                self.logger.debug(f"Stream for {self.label} closed after {self.bytes_sent}/{self.length} bytes")
