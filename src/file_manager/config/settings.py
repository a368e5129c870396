# src/file_manager/config/settings.py
import logging
from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# SigV4 presigned URLs cannot outlive one week
MAX_PRESIGNED_URL_EXPIRY_SECONDS = 7 * 24 * 60 * 60

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from file_manager.config.settings import get_settings
        settings = get_settings()
        bucket_name = settings.s3_bucket_name
    """

    app_name: str = Field(
        default="file-manager",
        description="Application name"
    )

    # AWS Core Settings
    aws_region: str = Field(
        default="eu-north-1",
        validation_alias=AliasChoices("AWS_DEFAULT_REGION", "AWS_REGION", "aws_region"),
    )

    aws_access_key_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AWS_ACCESS_KEY_ID", "AWS_ACCESS_KEY", "aws_access_key_id"),
    )

    aws_secret_access_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AWS_SECRET_ACCESS_KEY", "AWS_SECRET_KEY", "aws_secret_access_key"),
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AWS_ENDPOINT_URL", "aws_endpoint_url"),
        description="Endpoint of an S3-compatible store (MinIO, R2, moto server)"
    )

    # S3 Configuration
    s3_bucket_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("S3_BUCKET_NAME", "BUCKET_NAME", "s3_bucket_name"),
        description="Bucket that receives uploads and is listed"
    )

    presigned_url_expiry_seconds: int = Field(
        default=36000,
        gt=0,
        le=MAX_PRESIGNED_URL_EXPIRY_SECONDS,
        description="Lifetime of upload URLs handed out by GET /api/upload"
    )

    list_delimiter: str = Field(
        default="/",
        min_length=1,
        description="Delimiter used to group keys when listing"
    )

    forward_list_prefix: bool = Field(
        default=False,
        description="Pass the Prefix query parameter of GET /api/objects on to S3"
    )

    # HTTP Configuration
    cors_allow_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Browser origins allowed to call the API"
    )

    # Client Configuration
    api_base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL the upload client and CLI talk to"
    )

    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for client-side HTTP calls"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v):
        """Accept any case but store the canonical level name."""
        level = str(v).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {list(LOG_LEVELS)}")
        return level

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def public_dict(self) -> dict:
        """Settings as a dictionary with secrets masked, for display."""
        values = self.model_dump()
        for secret in ("aws_access_key_id", "aws_secret_access_key"):
            if values.get(secret):
                values[secret] = "****"
        return values

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()


def configure_logging(log_level: str) -> None:
    """Configure root logging for the API and the CLI."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
