"""Tool argument schemas."""

import base64
import binascii

from pydantic import Field, model_validator
from typing_extensions import Self

from ..models import FolderType
from ..types import Address, ContentId, Filename, FolderId, Tag
from .base import ToolArgs


class CreateFolderArgs(ToolArgs):
    name: str = Field(min_length=1, description="Name of the folder")
    folder_type: FolderType = Field(
        default=FolderType.PERSONAL,
        alias="folderType",
        description="Type of folder to create",
    )


class UploadFileArgs(ToolArgs):
    """Upload from a server-side path or from base64 content sent by the client."""

    file_path: str | None = Field(
        default=None,
        alias="filePath",
        description="Path to the local file to upload (server-side files only)",
    )
    file_content: str | None = Field(
        default=None,
        alias="fileContent",
        description="Base64-encoded file content (for uploading files from the client)",
    )
    file_name: Filename | None = Field(
        default=None,
        alias="fileName",
        description="Name of the file (required when using fileContent)",
    )
    folder_id: FolderId | None = Field(
        default=None,
        alias="folderId",
        description="ID of the folder to add the file to (optional)",
    )

    @model_validator(mode="after")
    def _check_source(self) -> Self:
        if not self.file_path and not self.file_content:
            raise ValueError("Either filePath or fileContent must be provided")
        if self.file_content:
            if not self.file_name:
                raise ValueError("fileName is required when using fileContent")
            self.decoded_content()
        return self

    def decoded_content(self) -> bytes:
        """Raw bytes of ``fileContent``. Whitespace and missing padding are tolerated."""
        text = "".join((self.file_content or "").split())
        text += "=" * (-len(text) % 4)
        try:
            return base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"fileContent is not valid base64: {e}") from e


class AddFileToFolderArgs(ToolArgs):
    folder_id: FolderId = Field(alias="folderId", description="ID of the folder")
    content_id: ContentId = Field(
        alias="contentId", description="Content identifier of already stored bytes"
    )
    file_name: Filename = Field(alias="fileName", description="Name to record for the file")
    tags: list[Tag] = Field(default_factory=list, description="Extra tags (optional)")


class ListFoldersArgs(ToolArgs):
    user_address: Address | None = Field(
        default=None,
        alias="userAddress",
        description="Address to get folders for (defaults to current wallet)",
    )


class GetFolderInfoArgs(ToolArgs):
    folder_id: FolderId = Field(
        alias="folderId", description="ID of the folder to get information for"
    )


class ListFilesArgs(ToolArgs):
    folder_id: FolderId = Field(
        alias="folderId", description="ID of the folder to list files from"
    )


class SearchFilesByPromptArgs(ToolArgs):
    prompt: str = Field(min_length=1, description="Search query in natural language")
    folder_id: FolderId | None = Field(
        default=None,
        alias="folderId",
        description="Limit search to specific folder (optional)",
    )


class SearchFilesByTagArgs(ToolArgs):
    tag: Tag = Field(description="Tag to search for")


class GetStorageBalanceArgs(ToolArgs):
    user_address: Address | None = Field(
        default=None,
        alias="userAddress",
        description="Address to check balance for (defaults to current wallet)",
    )
