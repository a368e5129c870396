"""Functions for authorizing writes to an S3 bucket--the "C" and "U" in CRUD."""

import logging
from typing import TYPE_CHECKING, Optional

from botocore.exceptions import BotoCoreError, ClientError

from file_manager.errors import UpstreamStorageError
from file_manager.s3.client import get_s3_client
from file_manager.utils.decorators import log_execution_time

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)


@log_execution_time
def generate_presigned_upload_url(
    bucket_name: Optional[str],
    object_key: str,
    expires_in: int,
    content_type: Optional[str] = None,
    s3_client: Optional["S3Client"] = None,
) -> str:
    """
    Presign a single PUT of ``object_key`` into ``bucket_name``.

    The signature covers the bucket and the key, so the URL cannot be used to
    write any other object. With ``content_type`` the Content-Type header is
    signed too, and the PUT must send exactly that value.
    Nothing is created in the bucket until the URL is used.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: path to the object in the S3 bucket.
    :param expires_in: Lifetime of the URL in seconds.
    :param content_type: Optional Content-Type to bind into the signature.
    :param s3_client: An optional boto3 S3 client. If not provided, the shared one is used.
    :raises UpstreamStorageError: If the bucket is not configured or signing fails.
    """
    if not bucket_name:
        raise UpstreamStorageError("S3 bucket name is not set")

    params = {"Bucket": bucket_name, "Key": object_key}
    if content_type:
        params["ContentType"] = content_type

    s3_client = s3_client or get_s3_client()
    try:
        url = s3_client.generate_presigned_url(
            ClientMethod="put_object",
            Params=params,
            ExpiresIn=expires_in,
            HttpMethod="PUT",
        )
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Error presigning upload of '{object_key}': {str(e)}")
        raise UpstreamStorageError(str(e)) from e

    logger.info(f"Presigned upload URL for s3://{bucket_name}/{object_key} (expires in {expires_in}s)")
    return url
