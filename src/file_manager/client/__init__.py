"""Client side of the upload protocol."""
from file_manager.client.api import FileManagerClient
from file_manager.client.formatting import format_file_size
from file_manager.client.orchestrator import UploadOrchestrator, UploadState

__all__ = ["FileManagerClient", "UploadOrchestrator", "UploadState", "format_file_size"]
