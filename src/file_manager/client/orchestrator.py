"""
Two-phase upload protocol driven from the client side.

An upload first asks the backend for a presigned URL for the selected file's
name, then PUTs the file's bytes straight to the object store with it. A
successful upload refreshes the listing of stored objects.
"""

import logging
import mimetypes
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Union

from file_manager.client.api import FileManagerClient
from file_manager.errors import (
    AuthorizationRequestError,
    ListingRequestError,
    TransferError,
    UploadInProgressError,
)
from file_manager.schemas import (
    DEFAULT_CONTENT_TYPE,
    ObjectSummary,
    UploadAttempt,
    UploadAuthorization,
)

logger = logging.getLogger(__name__)

NO_FILE_SELECTED_MESSAGE = "Please select a file first"
UPLOAD_REJECTED_MESSAGE = "Upload failed - received non-success response"
AWAITING_AUTHORIZATION_STATUS = "Getting presigned URL..."
UPLOADING_STATUS = "Uploading file..."
COMPLETED_STATUS = "Upload completed successfully!"


class UploadState(str, Enum):
    """States of a single upload attempt."""
    IDLE = "idle"
    AWAITING_AUTHORIZATION = "awaiting_authorization"
    UPLOADING = "uploading"
    COMPLETED = "completed"
    FAILED = "failed"


IN_FLIGHT_STATES = (UploadState.AWAITING_AUTHORIZATION, UploadState.UPLOADING)


@dataclass(frozen=True)
class SelectedFile:
    name: str
    content: bytes
    content_type: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.content)


class UploadOrchestrator:
    """
    Tracks one upload attempt at a time plus the last fetched listing.

    `on_status` is called with every status message (an empty string when the
    status is cleared), which is how a UI shows progress.
    """

    def __init__(
        self,
        client: FileManagerClient,
        on_status: Optional[Callable[[str], None]] = None,
    ):
        self.client = client
        self.on_status = on_status
        self.state = UploadState.IDLE
        self.selected: Optional[SelectedFile] = None
        self.status_message = ""
        self.error = ""
        self.result: Optional[UploadAttempt] = None
        self.objects: List[ObjectSummary] = []
        self.loading = False

    @property
    def busy(self) -> bool:
        return self.state in IN_FLIGHT_STATES

    def select_file(self, path: Union[str, Path]) -> SelectedFile:
        """Select a local file; its type is guessed from the extension."""
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return self.select_content(path.name, path.read_bytes(), content_type)

    def select_content(self, name: str, content: bytes, content_type: Optional[str] = None) -> SelectedFile:
        self._ensure_not_busy()
        self.selected = SelectedFile(name=name, content=content, content_type=content_type)
        self._set_status("")
        self.result = None
        self.error = ""
        return self.selected

    def reset(self) -> None:
        """Go back to idle, clearing the selection and every outcome field."""
        self._ensure_not_busy()
        self.selected = None
        self.state = UploadState.IDLE
        self._set_status("")
        self.result = None
        self.error = ""

    def upload(self) -> UploadState:
        """
        Run one upload attempt for the selected file.

        Failures are terminal for the attempt and are reported through
        `state` and `error`; nothing is retried. Any other exception also
        ends the attempt in `FAILED` before it propagates.
        """
        self._ensure_not_busy()
        if self.selected is None:
            self.error = NO_FILE_SELECTED_MESSAGE
            return self.state

        selected = self.selected
        content_type = selected.content_type or DEFAULT_CONTENT_TYPE
        authorization: Optional[UploadAuthorization] = None
        self.error = ""
        self.result = None

        try:
            self._transition(UploadState.AWAITING_AUTHORIZATION, AWAITING_AUTHORIZATION_STATUS)
            authorization = self.client.get_upload_url(selected.name, content_type=content_type)

            self._transition(UploadState.UPLOADING, UPLOADING_STATUS)
            if not self.client.upload_to_url(authorization.url, selected.content, content_type):
                raise TransferError(UPLOAD_REJECTED_MESSAGE)
        except (AuthorizationRequestError, TransferError) as e:
            logger.warning(f"Upload of '{selected.name}' failed: {e.message}")
            self.error = e.message
            self.result = self._attempt(selected, content_type, authorization, succeeded=False)
            self._transition(UploadState.FAILED, "")
            return self.state
        except Exception as e:
            # Never left in flight, or reset() and upload() would refuse forever
            logger.exception(f"Unexpected error while uploading '{selected.name}'")
            self.error = str(e) or type(e).__name__
            self.result = self._attempt(selected, content_type, authorization, succeeded=False)
            self.state = UploadState.FAILED
            self.status_message = ""
            raise

        self.result = self._attempt(selected, content_type, authorization, succeeded=True)
        self._transition(UploadState.COMPLETED, COMPLETED_STATUS)
        logger.info(f"Uploaded '{selected.name}' ({selected.size} bytes)")

        # The store may not list the new object yet; a later refresh will
        self.refresh_objects()
        return self.state

    def refresh_objects(self) -> List[ObjectSummary]:
        """Re-fetch the listing; on failure the previous listing is kept."""
        self.loading = True
        try:
            self.objects = self.client.list_objects()
        except ListingRequestError as e:
            logger.error(f"Error fetching stored objects: {e.message}")
        finally:
            self.loading = False
        return self.objects

    def _attempt(
        self,
        selected: SelectedFile,
        content_type: str,
        authorization: Optional[UploadAuthorization],
        succeeded: bool,
    ) -> UploadAttempt:
        return UploadAttempt(
            file_name=selected.name,
            file_size=selected.size,
            file_type=content_type,
            authorization=authorization,
            succeeded=succeeded,
            timestamp=datetime.now(timezone.utc),
        )

    def _transition(self, state: UploadState, status_message: str) -> None:
        logger.debug(f"Upload state {self.state.value} -> {state.value}")
        self.state = state
        self._set_status(status_message)

    def _set_status(self, message: str) -> None:
        self.status_message = message
        if self.on_status is not None:
            self.on_status(message)

    def _ensure_not_busy(self) -> None:
        if self.busy:
            raise UploadInProgressError("An upload is already in progress")
