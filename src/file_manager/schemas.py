####################################
# --- Request/response schemas --- #
####################################

from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

DataT = TypeVar("DataT")

# S3 rejects keys longer than 1024 bytes of UTF-8
MAX_OBJECT_KEY_BYTES = 1024
DEFAULT_CONTENT_TYPE = "application/octet-stream"


class ObjectSummary(BaseModel):
    """Summary of one stored object, as returned by `GET /api/objects`."""
    key: str = Field(
        description="The key of the object, unique within a listing.",
        json_schema_extra={"example": "report.pdf"},
    )
    last_modified: datetime = Field(
        alias="lastModified",
        description="When the object was last written.",
    )
    size: int = Field(ge=0, description="The size of the object in bytes.")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def is_folder(self, delimiter: str = "/") -> bool:
        """Zero-byte "folder" placeholders end with the delimiter."""
        return self.key.endswith(delimiter)


class ApiResponse(BaseModel, Generic[DataT]):
    """Envelope shared by every API response; `status` mirrors the HTTP status code."""
    status: int = Field(description="Status code of the operation.")
    message: str = Field(description="A message about the operation.")
    data: Optional[DataT] = None

    model_config = ConfigDict(populate_by_name=True)


class ListObjectsResponse(ApiResponse[List[ObjectSummary]]):
    """Response model for `GET /api/objects`."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "status": 200,
                "message": "success",
                "data": [
                    {
                        "key": "report.pdf",
                        "lastModified": "2024-01-01T00:00:00Z",
                        "size": 2048,
                    }
                ],
            }
        },
    )


class UploadUrlResponse(ApiResponse[str]):
    """Response model for `GET /api/upload`; `data` is the presigned PUT URL."""
    expires_in: Optional[int] = Field(
        default=None,
        alias="expiresIn",
        description="Seconds until the URL stops being accepted.",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "status": 200,
                "message": "presigned URL",
                "data": "https://my-bucket.s3.eu-north-1.amazonaws.com/report.pdf?X-Amz-Algorithm=...",
                "expiresIn": 36000,
            }
        },
    )


class UploadAuthorization(BaseModel):
    """A presigned URL that authorizes exactly one PUT of one key."""
    url: str
    expires_in: Optional[int] = None


class UploadAttempt(BaseModel):
    """Client-side record of a finished upload, kept for display only."""
    file_name: str
    file_size: int
    file_type: str
    authorization: Optional[UploadAuthorization] = None
    succeeded: bool
    timestamp: datetime
