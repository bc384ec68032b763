"""Storage backend events.

A storage backend reports session negotiation and upload progress as a single
stream of tagged events. Each event is a pydantic model whose ``kind`` field
is the discriminator, so a consumer handles the whole stream in one place.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from ..types import ContentId


class SessionResolved(BaseModel):
    """An existing dataset was found and will be reused."""

    kind: Literal["session_resolved"] = "session_resolved"
    session_id: str


class SessionCreationStarted(BaseModel):
    """A dataset creation transaction was submitted."""

    kind: Literal["session_creation_started"] = "session_creation_started"
    tx_hash: str
    status_url: str | None = None


class SessionCreationProgress(BaseModel):
    """Dataset creation status poll result. May fire repeatedly."""

    kind: Literal["session_creation_progress"] = "session_creation_progress"
    transaction_success: bool = False
    server_confirmed: bool = False
    elapsed_ms: int = Field(default=0, ge=0)


class ProviderSelected(BaseModel):
    """A storage provider was bound to the session."""

    kind: Literal["provider_selected"] = "provider_selected"
    provider_id: str
    provider_name: str | None = None


class UploadComplete(BaseModel):
    """Bytes reached the provider; the content identifier is known."""

    kind: Literal["upload_complete"] = "upload_complete"
    content_id: ContentId


class PieceAdded(BaseModel):
    """Piece registration transaction submitted."""

    kind: Literal["piece_added"] = "piece_added"
    tx_hash: str | None = None


class PieceConfirmed(BaseModel):
    """Piece registration confirmed on chain."""

    kind: Literal["piece_confirmed"] = "piece_confirmed"


StorageEvent = Annotated[
    Union[
        SessionResolved,
        SessionCreationStarted,
        SessionCreationProgress,
        ProviderSelected,
        UploadComplete,
        PieceAdded,
        PieceConfirmed,
    ],
    Field(discriminator="kind"),
]
