"""FastAPI dependencies shared by the routers."""
from typing import TYPE_CHECKING

from fastapi import Depends, Request

from file_manager.config.settings import Settings
from file_manager.s3.client import get_s3_client

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_s3(settings: Settings = Depends(get_app_settings)) -> "S3Client":
    """Shared S3 client for the application's connection settings."""
    return get_s3_client(settings)
