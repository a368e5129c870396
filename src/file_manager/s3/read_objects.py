"""Functions for reading objects from an S3 bucket--the "R" in CRUD."""

import logging
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional, TypedDict

from botocore.exceptions import BotoCoreError, ClientError

from file_manager.errors import UpstreamStorageError
from file_manager.s3.client import get_s3_client
from file_manager.utils.decorators import log_execution_time

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)


class S3ObjectEntry(TypedDict):
    key: str
    last_modified: datetime
    size: int


@log_execution_time
def list_s3_objects(
    bucket_name: Optional[str],
    prefix: str = "",
    delimiter: str = "/",
    s3_client: Optional["S3Client"] = None,
) -> List[S3ObjectEntry]:
    """
    List the objects directly under ``prefix``.

    Keys are grouped by ``delimiter`` so nested "folders" are not descended
    into; their common prefixes are not part of the result. Objects come back
    in the order S3 returns them (lexicographic by key), across all pages.

    :param bucket_name: The name of the S3 bucket.
    :param prefix: Only list keys starting with this prefix.
    :param delimiter: Separator used to group keys into one level.
    :param s3_client: An optional boto3 S3 client. If not provided, the shared one is used.
    :raises UpstreamStorageError: If the bucket is not configured or S3 rejects the call.
    """
    if not bucket_name:
        raise UpstreamStorageError("S3 bucket name is not set")

    s3_client = s3_client or get_s3_client()
    objects: List[S3ObjectEntry] = []
    try:
        paginator = s3_client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket_name, Prefix=prefix, Delimiter=delimiter):
            for item in page.get("Contents", []):
                objects.append(
                    {
                        "key": item["Key"],
                        "last_modified": item["LastModified"],
                        "size": item["Size"],
                    }
                )
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Error listing objects in bucket '{bucket_name}': {str(e)}")
        raise UpstreamStorageError(str(e)) from e

    logger.info(f"Listed {len(objects)} object(s) in bucket '{bucket_name}' with prefix '{prefix}'")
    return objects
