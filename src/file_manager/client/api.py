"""
HTTP client for the File Manager API and for direct transfers to the object store.
"""

import logging
from typing import Any, Dict, List, Optional, Type

import requests
from pydantic import ValidationError

from file_manager.config.settings import Settings
from file_manager.errors import (
    AuthorizationRequestError,
    FileManagerError,
    ListingRequestError,
    TransferError,
)
from file_manager.schemas import ObjectSummary, UploadAuthorization

logger = logging.getLogger(__name__)

UPLOAD_URL_ERROR_PREFIX = "Error getting presigned URL: "
LISTING_ERROR_PREFIX = "Error fetching stored objects: "
TRANSFER_ERROR_PREFIX = "Error uploading file: "


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


class FileManagerClient:
    """
    Talks to the two backend routes and performs the direct upload.

    `session` is used for the backend and `transfer_session` for the object
    store, so presigned PUTs never carry headers meant for the backend.
    Anything with a requests-style `get`/`put` interface works as a session.
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[Any] = None,
        transfer_session: Optional[Any] = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.transfer_session = transfer_session or requests.Session()
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "FileManagerClient":
        return cls(settings.api_base_url, timeout=settings.request_timeout_seconds)

    def close(self) -> None:
        for session in (self.session, self.transfer_session):
            if isinstance(session, requests.Session):
                session.close()

    def __enter__(self) -> "FileManagerClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _get_envelope(
        self,
        path: str,
        params: Optional[Dict[str, str]],
        error_cls: Type[FileManagerError],
        error_prefix: str,
        default_message: str,
    ) -> Dict[str, Any]:
        """GET a backend route and return its envelope, checking both status codes."""
        url = f"{self.base_url}{path}"
        logger.debug(f"GET {url} params={params}")
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise error_cls(f"{error_prefix}{str(e)}") from e

        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            body = {}

        message = body.get("message")
        if not _is_success(response.status_code):
            raise error_cls(f"{error_prefix}HTTP {response.status_code}: {message or default_message}")
        if body.get("status") != 200:
            raise error_cls(f"{error_prefix}{message or default_message}")
        return body

    def get_upload_url(self, key: str, content_type: Optional[str] = None) -> UploadAuthorization:
        """
        Ask the backend for a presigned PUT URL for `key`.

        When `content_type` is given the URL is only valid for a PUT that
        sends that exact Content-Type.

        :raises AuthorizationRequestError: on transport failure, a non-2xx
            response, an envelope whose status is not 200, or a malformed body.
        """
        params = {"key": key}
        if content_type:
            params["contentType"] = content_type
        body = self._get_envelope(
            "/api/upload",
            params,
            AuthorizationRequestError,
            UPLOAD_URL_ERROR_PREFIX,
            "Failed to get presigned URL",
        )
        url = body.get("data")
        if not isinstance(url, str) or not url:
            raise AuthorizationRequestError(f"{UPLOAD_URL_ERROR_PREFIX}response did not include a URL")
        try:
            return UploadAuthorization(url=url, expires_in=body.get("expiresIn"))
        except ValidationError as e:
            raise AuthorizationRequestError(f"{UPLOAD_URL_ERROR_PREFIX}invalid response: {str(e)}") from e

    def list_objects(self, prefix: Optional[str] = None) -> List[ObjectSummary]:
        """
        Fetch the stored objects from the backend.

        :raises ListingRequestError: when the listing could not be fetched or parsed.
        """
        body = self._get_envelope(
            "/api/objects",
            {"Prefix": prefix} if prefix else None,
            ListingRequestError,
            LISTING_ERROR_PREFIX,
            "Failed to list objects",
        )
        try:
            return [ObjectSummary.model_validate(item) for item in body.get("data") or []]
        except ValidationError as e:
            raise ListingRequestError(f"{LISTING_ERROR_PREFIX}invalid response: {str(e)}") from e

    def upload_to_url(self, url: str, content: bytes, content_type: str) -> bool:
        """
        PUT `content` to a presigned URL.

        Success is judged by the status code alone; the body is not read.

        :raises TransferError: if the request fails at the transport level.
        """
        try:
            response = self.transfer_session.put(
                url,
                data=content,
                headers={"Content-Type": content_type},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransferError(f"{TRANSFER_ERROR_PREFIX}{str(e)}") from e

        if not _is_success(response.status_code):
            logger.warning(f"Direct upload rejected with HTTP {response.status_code}")
            return False
        return True
