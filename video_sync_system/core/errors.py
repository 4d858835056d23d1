"""
Error taxonomy for the Video Sync Streaming Server.

HTTP-facing errors carry their status code and a short machine-readable code so
the API server can render them uniformly.
"""

from typing import Any, Dict, Optional


class VideoSyncError(Exception):
    """Base class for all service errors"""

    status_code = 500
    error = "internal_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.error, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class NotFound(VideoSyncError):
    """Unknown video, unknown session, or video file missing on disk"""

    status_code = 404
    error = "not_found"


class InvalidRequest(VideoSyncError):
    """Malformed request or missing required field"""

    status_code = 400
    error = "invalid_request"


class RangeNotSatisfiable(InvalidRequest):
    """Range header that cannot be served against the file"""

    status_code = 416
    error = "range_not_satisfiable"

    def __init__(self, message: str, file_size: int):
        super().__init__(message, details={"file_size": file_size})
        self.file_size = file_size


class IOFailure(VideoSyncError):
    """Filesystem read error while serving a video"""

    status_code = 500
    error = "io_failure"


class ProtocolViolation(VideoSyncError):
    """Malformed message on the control channel"""

    status_code = 400
    error = "protocol_violation"
