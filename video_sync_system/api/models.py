"""
Data models for the Video Sync Streaming Server API.

Video and session schemas live beside their routes; this module holds the
server-level responses.
"""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response model"""

    status: str
    timestamp: str
    sessions: int
    control_connections: int
