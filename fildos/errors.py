"""FilDOS error types.

Every error carries a stable ``code`` that the tool dispatcher puts into the
failure envelope, so callers can branch on it without parsing messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import UploadedInfo


class FilDOSError(Exception):
    """Base class for FilDOS errors."""

    code = "FILDOS_ERROR"


class ToolArgumentsError(FilDOSError):
    """Tool arguments failed schema validation."""

    code = "VALIDATION_ERROR"


class UnknownToolError(FilDOSError):
    """No tool registered under the requested name."""

    code = "UNKNOWN_TOOL"

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class NotOwnerError(FilDOSError):
    """Caller does not control the folder."""

    code = "NOT_OWNER"

    def __init__(self, folder_id: int | str):
        super().__init__("You don't own this folder or folder doesn't exist")
        self.folder_id = str(folder_id)


class LedgerError(FilDOSError):
    """Ledger read or write failed."""

    code = "LEDGER_ERROR"


class FolderNotFoundError(LedgerError):
    """Folder handle is not registered."""

    code = "FOLDER_NOT_FOUND"

    def __init__(self, folder_id: int | str):
        super().__init__(f"Folder not found: {folder_id}")
        self.folder_id = str(folder_id)


class SearchUnavailableError(FilDOSError):
    """Semantic search backend could not be reached."""

    code = "SEARCH_UNAVAILABLE"


class UploadError(FilDOSError):
    """Base class for upload orchestration failures."""

    code = "UPLOAD_ERROR"


class NotInitializedError(UploadError):
    """No storage backend is bound."""

    code = "NOT_INITIALIZED"


class MissingAddressError(UploadError):
    """Upload requested without an owner address."""

    code = "MISSING_ADDRESS"

    def __init__(self) -> None:
        super().__init__("Address is required for file upload")


class BackendUnavailableError(UploadError):
    """Storage backend query or session setup failed. Nothing was sent."""

    code = "BACKEND_UNAVAILABLE"


class TransferFailedError(UploadError):
    """Byte transfer to the storage provider was rejected."""

    code = "TRANSFER_FAILED"

    def __init__(self, message: str):
        super().__init__(f"Upload failed: {message}")


class PartialSuccessError(FilDOSError):
    """Bytes are stored and addressable, but a later step did not finish.

    Callers should retry only the step named by ``retry``; uploading the
    same bytes again is never required.
    """

    code = "PARTIAL_SUCCESS"
    retry = "registration"

    def __init__(
        self,
        message: str,
        content_id: str,
        uploaded_info: UploadedInfo | None = None,
    ):
        super().__init__(message)
        self.content_id = content_id
        self.uploaded_info = uploaded_info

    def details(self) -> dict[str, Any]:
        """Fields added to the failure envelope."""
        return {"contentId": self.content_id, "retry": self.retry}


class RegistrationFailedError(PartialSuccessError, UploadError):
    """On-chain piece registration failed after a successful transfer."""

    code = "PARTIAL_SUCCESS"
    retry = "registration"


class FolderLinkError(PartialSuccessError):
    """Upload finished but linking the content into a folder failed."""

    code = "PARTIAL_SUCCESS"
    retry = "add_file_to_folder"

    def __init__(
        self,
        message: str,
        content_id: str,
        folder_id: str,
        uploaded_info: UploadedInfo | None = None,
    ):
        super().__init__(message, content_id, uploaded_info)
        self.folder_id = folder_id

    def details(self) -> dict[str, Any]:
        details = super().details()
        details["folderId"] = self.folder_id
        return details
