"""
Video API Request/Response Schemas.

Pydantic models for API serialization. Field names go over the wire in camelCase.
"""

from pydantic import BaseModel, ConfigDict, Field


class VideoInfoResponse(BaseModel):
    """Video catalog entry"""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "1",
                "filename": "intro.mp4",
                "title": "intro",
                "duration": 120,
                "fileSize": 52428800,
                "mimeType": "video/mp4",
            }
        },
    )

    id: str = Field(..., description="Stable video identifier")
    filename: str = Field(..., description="File name in the video directory")
    title: str = Field(..., description="Display title")
    duration: int = Field(..., ge=0, description="Duration in seconds")
    file_size: int = Field(..., ge=0, alias="fileSize", description="File size in bytes")
    mime_type: str = Field(..., alias="mimeType", description="MIME content type")


class CatalogRefreshResponse(BaseModel):
    """Result of rescanning the video directory"""

    count: int = Field(..., description="Number of videos in the catalog after the rescan")
