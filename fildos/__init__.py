"""FilDOS: agent-facing file management on content-addressed storage.

Files are uploaded to a storage network through a staged orchestrator and
linked into owner-scoped folders kept in a ledger registry. Everything is
reachable through named tools.

Example:
    from fildos import FilDOSConfig, ToolDispatcher, create_context

    ctx = create_context(FilDOSConfig(address="0x" + "ab" * 20))
    dispatcher = ToolDispatcher(ctx)

    created = await dispatcher.dispatch("create_folder", {"name": "Receipts"})
    folder_id = created.payload["tokenId"]

    uploaded = await dispatcher.dispatch(
        "upload_file",
        {"fileContent": "aGVsbG8=", "fileName": "hello.txt", "folderId": folder_id},
    )
    print(uploaded.to_text())
"""

from importlib.metadata import PackageNotFoundError, version

from .config import FilDOSConfig
from .context import FilDOSContext, create_context
from .errors import (
    BackendUnavailableError,
    FilDOSError,
    FolderLinkError,
    FolderNotFoundError,
    LedgerError,
    MissingAddressError,
    NotInitializedError,
    NotOwnerError,
    PartialSuccessError,
    RegistrationFailedError,
    SearchUnavailableError,
    ToolArgumentsError,
    TransferFailedError,
    UnknownToolError,
    UploadError,
)
from .folders import FolderRegistry, derive_tags
from .ledger import InMemoryLedger, LedgerClient
from .models import (
    FileRecord,
    Folder,
    FolderType,
    StorageSession,
    TransactionReceipt,
    UploadedInfo,
    UploadProgress,
    UploadRecord,
)
from .ownership import OwnershipGate
from .search import SearchClient
from .storage import (
    InMemoryStorageBackend,
    StorageBackend,
    StorageSessionManager,
    UploadOrchestrator,
)
from .tools import ToolDispatcher, ToolResult

try:
    __version__ = version("fildos")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "BackendUnavailableError",
    "FileRecord",
    "FilDOSConfig",
    "FilDOSContext",
    "FilDOSError",
    "Folder",
    "FolderLinkError",
    "FolderNotFoundError",
    "FolderRegistry",
    "FolderType",
    "InMemoryLedger",
    "InMemoryStorageBackend",
    "LedgerClient",
    "LedgerError",
    "MissingAddressError",
    "NotInitializedError",
    "NotOwnerError",
    "OwnershipGate",
    "PartialSuccessError",
    "RegistrationFailedError",
    "SearchClient",
    "SearchUnavailableError",
    "StorageBackend",
    "StorageSession",
    "StorageSessionManager",
    "ToolArgumentsError",
    "ToolDispatcher",
    "ToolResult",
    "TransactionReceipt",
    "TransferFailedError",
    "UnknownToolError",
    "UploadError",
    "UploadOrchestrator",
    "UploadProgress",
    "UploadRecord",
    "UploadedInfo",
    "__version__",
    "create_context",
    "derive_tags",
]
