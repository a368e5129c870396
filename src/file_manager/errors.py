"""Error taxonomy and the FastAPI handlers that turn it into response envelopes."""

import logging

import pydantic
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class FileManagerError(Exception):
    """Base class for every error raised by the file manager."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ObjectKeyValidationError(FileManagerError):
    """The requested object key is missing, empty or not a valid S3 key."""

    status_code = status.HTTP_400_BAD_REQUEST


class UpstreamStorageError(FileManagerError):
    """A call to the object store failed (credentials, network, permissions)."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


# Client-side errors


class AuthorizationRequestError(FileManagerError):
    """The backend did not hand out an upload URL."""


class ListingRequestError(FileManagerError):
    """The backend did not return an object listing."""


class TransferError(FileManagerError):
    """The direct transfer to the object store failed at the transport level."""


class UploadInProgressError(FileManagerError):
    """An upload was started while another one is still in flight."""


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": status_code, "message": message, "data": None},
    )


async def handle_file_manager_errors(request: Request, exc: FileManagerError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message)


async def handle_pydantic_validation_errors(
    request: Request, exc: pydantic.ValidationError | RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    missing_fields = [
        ".".join(str(item) for item in error["loc"] if item not in ("query", "body"))
        for error in errors
        if error.get("type") == "missing"
    ]
    if missing_fields:
        message = f"missing parameters: {', '.join(missing_fields)}"
    else:
        message = "; ".join(str(error.get("msg")) for error in errors) or "invalid request parameters"
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that propagates out of the route handlers."""
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error while serving %s %s", request.method, request.url.path)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
