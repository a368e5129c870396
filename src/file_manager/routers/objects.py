import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from file_manager.config.settings import Settings
from file_manager.dependencies import get_app_settings, get_s3
from file_manager.s3.read_objects import list_s3_objects
from file_manager.schemas import ListObjectsResponse, ObjectSummary

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/objects", response_model=ListObjectsResponse)
def list_objects(
    prefix: Optional[str] = Query(
        None,
        alias="Prefix",
        description="Only list keys under this prefix (ignored unless FORWARD_LIST_PREFIX is enabled).",
    ),
    settings: Settings = Depends(get_app_settings),
    s3_client=Depends(get_s3),
) -> ListObjectsResponse:
    """
    List the objects stored directly in the bucket.

    Keys are grouped by the configured delimiter, so only one level is
    returned. Objects keep the order S3 returns them in.

    Returns:
        ListObjectsResponse: `data` holds one entry per object with key, lastModified and size
    """
    effective_prefix = ""
    if prefix and settings.forward_list_prefix:
        effective_prefix = prefix
    elif prefix:
        logger.debug(f"Ignoring Prefix={prefix!r}; prefix forwarding is disabled")

    objects = list_s3_objects(
        bucket_name=settings.s3_bucket_name,
        prefix=effective_prefix,
        delimiter=settings.list_delimiter,
        s3_client=s3_client,
    )

    return ListObjectsResponse(
        status=200,
        message="success",
        data=[ObjectSummary(**entry) for entry in objects],
    )
