"""Shared boto3 S3 client, built lazily once per connection configuration."""

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Optional

import boto3
from botocore.config import Config

from file_manager.config.settings import Settings, get_settings

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _build_s3_client(
    region_name: str,
    endpoint_url: Optional[str],
    aws_access_key_id: Optional[str],
    aws_secret_access_key: Optional[str],
) -> "S3Client":
    logger.info(f"Creating S3 client for region {region_name} (endpoint: {endpoint_url or 'default'})")
    return boto3.client(
        "s3",
        region_name=region_name,
        endpoint_url=endpoint_url,
        aws_access_key_id=aws_access_key_id,
        aws_secret_access_key=aws_secret_access_key,
        config=Config(signature_version="s3v4"),
    )


def get_s3_client(settings: Optional[Settings] = None) -> "S3Client":
    """
    Return the S3 client for the given settings.

    Clients are thread-safe and are only read after creation, so one instance
    is shared by every request that uses the same connection configuration.
    Credentials left unset fall back to the default boto3 credential chain.
    """
    settings = settings or get_settings()
    return _build_s3_client(
        settings.aws_region,
        settings.aws_endpoint_url,
        settings.aws_access_key_id,
        settings.aws_secret_access_key,
    )


def clear_s3_clients() -> None:
    """Drop every cached client (tests, credential rotation)."""
    _build_s3_client.cache_clear()
