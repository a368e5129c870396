from typing import Optional

from fastapi import APIRouter, Depends, Query

from file_manager.config.settings import Settings
from file_manager.dependencies import get_app_settings, get_s3
from file_manager.errors import ObjectKeyValidationError
from file_manager.s3.write_objects import generate_presigned_upload_url
from file_manager.schemas import MAX_OBJECT_KEY_BYTES, UploadUrlResponse

router = APIRouter()


def validate_object_key(key: Optional[str]) -> str:
    """Reject keys S3 would not accept before any store call is made."""
    if not key:
        raise ObjectKeyValidationError("Query parameter 'key' is required")
    if len(key.encode("utf-8")) > MAX_OBJECT_KEY_BYTES:
        raise ObjectKeyValidationError(f"Object key must be at most {MAX_OBJECT_KEY_BYTES} bytes")
    return key


@router.get("/upload", response_model=UploadUrlResponse)
def get_upload_url(
    key: Optional[str] = Query(None, description="Destination object key, used verbatim."),
    content_type: Optional[str] = Query(
        None,
        alias="contentType",
        description="Content-Type the upload will send; when given it is bound into the signature.",
    ),
    settings: Settings = Depends(get_app_settings),
    s3_client=Depends(get_s3),
) -> UploadUrlResponse:
    """
    Hand out a presigned URL that authorizes one PUT of `key`.

    The client uploads the bytes directly to the object store with that URL;
    nothing is written to the bucket by this call.

    Args:
        key: The destination object key
        content_type: Optional Content-Type the PUT must then carry

    Returns:
        UploadUrlResponse: `data` holds the URL, `expiresIn` its lifetime in seconds
    """
    object_key = validate_object_key(key)

    url = generate_presigned_upload_url(
        bucket_name=settings.s3_bucket_name,
        object_key=object_key,
        expires_in=settings.presigned_url_expiry_seconds,
        content_type=content_type,
        s3_client=s3_client,
    )

    return UploadUrlResponse(
        status=200,
        message="presigned URL",
        data=url,
        expires_in=settings.presigned_url_expiry_seconds,
    )
