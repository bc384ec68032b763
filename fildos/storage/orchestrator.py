"""Staged upload orchestrator.

Drives one byte blob through dataset negotiation, transfer and on-chain piece
registration, reporting progress to a caller-supplied sink:

     0  Init
     5  Allowance check (dataset lookup, decides the creation fee)
    25  Session setup
    30    existing dataset resolved
    35    dataset creation started
    45    dataset creation transaction mined
    50    dataset confirmed by the storage backend
    ..    provider selected (label only)
    55  Byte transfer
    80  Upload complete, content identifier known
    ..    piece registration submitted (label only, tx hash)
    90  Pieces confirmed
   100  Done

Progress never goes backwards on the success path. A failure produces exactly
one ``(0, "failed: <reason>")`` event and the error is re-raised. Nothing is
retried and already-transferred bytes are left where they are.
"""

from __future__ import annotations

import logging

from ..errors import (
    BackendUnavailableError,
    FilDOSError,
    MissingAddressError,
    NotInitializedError,
    RegistrationFailedError,
    TransferFailedError,
)
from ..models import ProgressSink, UploadedInfo, UploadProgress, UploadRecord
from .base import StorageBackend, StoredPiece
from .events import (
    PieceAdded,
    PieceConfirmed,
    ProviderSelected,
    SessionCreationProgress,
    SessionCreationStarted,
    SessionResolved,
    StorageEvent,
    UploadComplete,
)
from .session import StorageSessionManager

logger = logging.getLogger(__name__)


class _UploadRun:
    """State of a single upload call. Discarded when the call returns."""

    def __init__(self, file_name: str, file_size: int, sink: ProgressSink | None):
        self.file_name = file_name
        self.file_size = file_size
        self.progress = 0
        self.status = ""
        self.info: UploadedInfo | None = None
        self.transferred = False
        self.confirmed = False
        self._sink = sink

    def emit(self, progress: int, status: str) -> None:
        self.progress = max(progress, self.progress)
        self.status = status
        self._notify()

    def _notify(self) -> None:
        if self._sink is None:
            return
        snapshot = self.info.model_copy() if self.info else None
        self._sink(
            UploadProgress(
                progress=self.progress,
                status=self.status,
                uploaded_info=snapshot,
            )
        )

    def handle(self, event: StorageEvent) -> None:
        """Translate a backend event into a progress update."""
        if isinstance(event, SessionResolved):
            logger.debug(f"Dataset resolved: {event.session_id}")
            self.emit(30, "Existing dataset found and resolved")

        elif isinstance(event, SessionCreationStarted):
            logger.info(
                "Dataset creation started",
                extra={"tx_hash": event.tx_hash, "status_url": event.status_url},
            )
            self.emit(35, "Creating new dataset on blockchain...")

        elif isinstance(event, SessionCreationProgress):
            if event.transaction_success:
                self.emit(45, "Dataset transaction confirmed on chain")
            if event.server_confirmed:
                seconds = round(event.elapsed_ms / 1000)
                self.emit(50, f"Dataset ready! ({seconds}s)")

        elif isinstance(event, ProviderSelected):
            logger.debug(
                "Storage provider selected",
                extra={"provider_id": event.provider_id, "provider_name": event.provider_name},
            )
            self.emit(self.progress, "Storage provider selected")

        elif isinstance(event, UploadComplete):
            transferred = UploadedInfo(
                file_name=self.file_name,
                file_size=self.file_size,
                content_id=event.content_id,
            )
            # The first content identifier reported stays authoritative
            self.info = transferred.merge(self.info) if self.info else transferred
            self.transferred = True
            self.emit(80, "File uploaded! Adding pieces to the dataset")

        elif isinstance(event, PieceAdded):
            if event.tx_hash:
                added = UploadedInfo(tx_hash=event.tx_hash)
                self.info = self.info.merge(added) if self.info else added
                suffix = f" (txHash: {event.tx_hash})"
            else:
                suffix = ""
            self.emit(self.progress, f"Waiting for transaction to be confirmed on chain{suffix}")

        elif isinstance(event, PieceConfirmed):
            self.confirmed = True
            self.emit(90, "Data pieces added to dataset successfully")

    def finish(self, piece: StoredPiece) -> UploadRecord:
        known = self.info.content_id if self.info else None
        content_id = known or piece.content_id
        if not content_id:
            raise TransferFailedError("storage backend returned no content identifier")

        # Backends may return without reporting every phase; fill the gaps
        if not self.transferred:
            self.handle(UploadComplete(content_id=content_id))
        if not self.confirmed:
            self.handle(PieceConfirmed())

        final = UploadedInfo(
            file_name=self.file_name,
            file_size=self.file_size,
            content_id=content_id,
        )
        self.info = final.merge(self.info) if self.info else final
        record = UploadRecord(
            file_name=self.file_name,
            file_size=self.file_size,
            content_id=self.info.content_id,
            tx_hash=self.info.tx_hash,
        )
        self.emit(100, "File successfully stored!")
        return record

    def fail(self, error: Exception) -> None:
        self.progress = 0
        self.status = f"failed: {error}"
        # Sink errors never replace the upload error
        try:
            self._notify()
        except Exception as e:
            logger.warning(f"Progress sink raised on failure event: {e}")


class UploadOrchestrator:
    """Uploads byte blobs through a storage backend.

    Example:
        orchestrator = UploadOrchestrator(backend, StorageSessionManager(backend))
        record = await orchestrator.upload(
            data, "a.txt", address, on_progress=lambda p: print(p.progress)
        )
    """

    def __init__(
        self,
        backend: StorageBackend | None,
        sessions: StorageSessionManager,
    ):
        self._backend = backend
        self._sessions = sessions

    async def upload(
        self,
        data: bytes,
        file_name: str,
        address: str,
        on_progress: ProgressSink | None = None,
        fee_override: bool | None = None,
    ) -> UploadRecord:
        """
        Upload ``data`` and register it in ``address``'s dataset.

        Args:
            data: Bytes to store
            file_name: Display name recorded in the upload record
            address: Owner address of the dataset
            on_progress: Called synchronously for every progress event
            fee_override: Force (True) or suppress (False) the dataset
                creation fee instead of deriving it from the dataset lookup

        Returns:
            UploadRecord with the content identifier of the stored bytes

        Raises:
            NotInitializedError: No storage backend bound
            MissingAddressError: ``address`` is empty
            BackendUnavailableError: Dataset lookup or session setup failed
            TransferFailedError: Provider rejected the bytes
            RegistrationFailedError: Bytes stored but piece registration failed
        """
        if self._backend is None:
            raise NotInitializedError("Storage backend not initialized")
        if not address:
            raise MissingAddressError()

        run = _UploadRun(file_name, len(data), on_progress)
        try:
            run.emit(0, "Initializing file upload...")

            run.emit(5, "Checking balance and storage allowances...")
            session = await self._sessions.ensure_session(address)
            with_fee = session.fee_required if fee_override is None else fee_override

            run.emit(25, "Setting up storage service and dataset...")
            try:
                handle = await self._backend.create_session(
                    address,
                    with_creation_fee=with_fee,
                    on_event=run.handle,
                )
            except FilDOSError:
                raise
            except Exception as e:
                raise BackendUnavailableError(f"Storage session setup failed: {e}") from e
            self._sessions.mark_ready(address)

            run.emit(55, "Uploading file to storage provider...")
            try:
                piece = await handle.upload(data, on_event=run.handle)
            except FilDOSError:
                raise
            except Exception as e:
                if run.info is not None and run.info.content_id:
                    raise RegistrationFailedError(
                        f"Piece registration failed: {e}. "
                        f"Content {run.info.content_id} is stored; "
                        "retry registration only, do not re-upload",
                        content_id=run.info.content_id,
                        uploaded_info=run.info,
                    ) from e
                raise TransferFailedError(str(e)) from e

            return run.finish(piece)

        except Exception as e:
            logger.error(
                f"Upload of {file_name} failed: {e}",
                extra={"progress": run.progress, "uploaded_info": run.info},
            )
            run.fail(e)
            raise
