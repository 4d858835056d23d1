"""
Video Infrastructure Layer.

File system implementations of the domain contracts.
"""

from .catalog import FileSystemVideoCatalog
from .file_window import FileWindow

__all__ = [
    "FileSystemVideoCatalog",
    "FileWindow",
]
