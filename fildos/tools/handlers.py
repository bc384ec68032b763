"""Tool implementations.

Tools receive arguments already validated by the dispatcher and return a
JSON-compatible payload. Errors propagate to the dispatcher.
"""

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..errors import FolderLinkError, NotOwnerError, SearchUnavailableError, ToolArgumentsError
from ..models import FileRecord, Folder, UploadProgress
from .base import Tool, tool
from .schemas import (
    AddFileToFolderArgs,
    CreateFolderArgs,
    GetFolderInfoArgs,
    GetStorageBalanceArgs,
    ListFilesArgs,
    ListFoldersArgs,
    SearchFilesByPromptArgs,
    SearchFilesByTagArgs,
    UploadFileArgs,
)

if TYPE_CHECKING:
    from ..context import FilDOSContext

logger = logging.getLogger(__name__)

WEI_PER_FIL = 10**18


def _folder_dict(folder: Folder) -> dict[str, Any]:
    return {
        "tokenId": str(folder.id),
        "name": folder.name,
        "folderType": folder.folder_type.value,
        "isPublic": folder.is_public,
        "owner": folder.owner,
        "createdAt": folder.created_at_iso,
    }


def _file_dict(record: FileRecord, with_owner: bool = False) -> dict[str, Any]:
    data: dict[str, Any] = {
        "cid": record.content_id,
        "filename": record.filename,
        "tags": list(record.tags),
        "timestamp": record.timestamp_iso,
    }
    if with_owner:
        data["owner"] = record.owner
    return data


def format_fil(wei: int) -> str:
    """Render wei as a FIL amount without trailing zeros ("1.5", "0.0")."""
    whole, frac = divmod(wei, WEI_PER_FIL)
    frac_digits = f"{frac:018d}".rstrip("0") or "0"
    return f"{whole}.{frac_digits}"


def _log_progress(event: UploadProgress) -> None:
    logger.info(f"{event.progress}% - {event.status}")


def _read_source(args: UploadFileArgs) -> tuple[bytes, str]:
    """Bytes and display name for an upload request. Client content wins over a path."""
    if args.file_content:
        data = args.decoded_content()
        logger.info(f"Uploading file from client: {args.file_name} ({len(data)} bytes)")
        return data, args.file_name or ""

    path = Path(args.file_path or "")
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ToolArgumentsError(f"Cannot read file {path}: {e}") from e
    logger.info(f"Uploading file from path: {path}")
    return data, args.file_name or path.name


@tool(args=CreateFolderArgs, description="Create a new folder NFT for organizing files")
async def create_folder(args: CreateFolderArgs, ctx: FilDOSContext) -> dict[str, Any]:
    receipt = await ctx.folders.create_folder(args.name, args.folder_type)
    token_id = str(receipt.folder_id) if receipt.folder_id is not None else None
    return {
        "success": True,
        "tokenId": token_id,
        "transactionHash": receipt.tx_hash,
        "folderName": args.name,
        "folderType": args.folder_type.value,
        "message": f"Folder '{args.name}' created successfully with ID: {token_id}",
    }


@tool(
    args=UploadFileArgs,
    description=(
        "Upload a file to Filecoin storage and optionally add to a folder. "
        "Supports both local file paths (server-side) and base64-encoded file "
        "content (from the client)."
    ),
)
async def upload_file(args: UploadFileArgs, ctx: FilDOSContext) -> dict[str, Any]:
    data, file_name = _read_source(args)
    folder_id = int(args.folder_id) if args.folder_id else None

    # Refuse before paying for storage that could never be linked
    if folder_id is not None and not await ctx.gate.is_owner(folder_id):
        raise NotOwnerError(folder_id)

    orchestrator = await ctx.orchestrator()
    record = await orchestrator.upload(
        data,
        file_name,
        ctx.address,
        on_progress=_log_progress,
    )

    if folder_id is not None:
        try:
            await ctx.folders.attach_file(folder_id, record.content_id, file_name)
        except Exception as e:
            raise FolderLinkError(
                f"File stored with CID {record.content_id} but adding it to folder "
                f"{folder_id} failed: {e}. Retry with add_file_to_folder; "
                "do not upload again",
                content_id=record.content_id,
                folder_id=str(folder_id),
            ) from e

    message = f"File '{file_name}' uploaded successfully to Filecoin!\nCID: {record.content_id}"
    if folder_id is not None:
        message += f"\nAdded to folder: {folder_id}"

    return {
        "success": True,
        "fileName": file_name,
        "fileSize": record.file_size,
        "pieceCid": record.content_id,
        "txHash": record.tx_hash,
        "addedToFolder": folder_id is not None,
        "folderId": args.folder_id,
        "message": message,
    }


@tool(
    args=AddFileToFolderArgs,
    description="Add an already stored file (by content identifier) to a folder you own",
)
async def add_file_to_folder(args: AddFileToFolderArgs, ctx: FilDOSContext) -> dict[str, Any]:
    receipt = await ctx.folders.attach_file(
        int(args.folder_id),
        args.content_id,
        args.file_name,
        extra_tags=args.tags,
    )
    return {
        "success": True,
        "folderId": args.folder_id,
        "contentId": args.content_id,
        "fileName": args.file_name,
        "tags": ctx.folders.tags_for(args.file_name, args.tags),
        "transactionHash": receipt.tx_hash,
        "message": f"File '{args.file_name}' added to folder {args.folder_id}",
    }


@tool(args=ListFoldersArgs, description="Get all folders owned by an address")
async def list_folders(args: ListFoldersArgs, ctx: FilDOSContext) -> dict[str, Any]:
    address = args.user_address or ctx.address
    folder_ids = await ctx.ledger.get_folders_owned_by(address)
    folders = await asyncio.gather(*(ctx.ledger.get_folder_data(i) for i in folder_ids))
    return {
        "success": True,
        "folders": [_folder_dict(f) for f in folders],
        "count": len(folders),
        "message": f"Found {len(folders)} folders for address {address}",
    }


@tool(args=GetFolderInfoArgs, description="Get detailed information about a specific folder")
async def get_folder_info(args: GetFolderInfoArgs, ctx: FilDOSContext) -> dict[str, Any]:
    folder_id = int(args.folder_id)
    folder = await ctx.ledger.get_folder_data(folder_id)
    files = await ctx.ledger.get_files(folder_id)

    info = _folder_dict(folder)
    info["tokenId"] = args.folder_id
    info["fileCount"] = len(files)
    info["files"] = [_file_dict(f) for f in files]
    return {
        "success": True,
        "folderInfo": info,
        "message": f"Folder '{folder.name}' contains {len(files)} files",
    }


@tool(args=ListFilesArgs, description="List all files in a specific folder")
async def list_files(args: ListFilesArgs, ctx: FilDOSContext) -> dict[str, Any]:
    files = [_file_dict(f) for f in await ctx.ledger.get_files(int(args.folder_id))]
    return {
        "success": True,
        "files": files,
        "count": len(files),
        "message": f"Found {len(files)} files in folder {args.folder_id}",
    }


@tool(args=SearchFilesByPromptArgs, description="Search for files using AI-powered semantic search")
async def search_files_by_prompt(
    args: SearchFilesByPromptArgs, ctx: FilDOSContext
) -> dict[str, Any]:
    try:
        results = await ctx.search.search(args.prompt, args.folder_id)
    except SearchUnavailableError as e:
        logger.warning(f"Semantic search unavailable: {e}")
        return {
            "success": False,
            "error": "AI service unavailable",
            "message": "Semantic search is currently unavailable. Please try again later.",
        }

    return {
        "success": True,
        "results": results,
        "query": args.prompt,
        "message": f'Found {len(results)} files matching "{args.prompt}"',
    }


@tool(args=SearchFilesByTagArgs, description="Search for files using a specific tag")
async def search_files_by_tag(args: SearchFilesByTagArgs, ctx: FilDOSContext) -> dict[str, Any]:
    files = [_file_dict(f, with_owner=True) for f in await ctx.ledger.search_by_tag(args.tag)]
    plural = "" if len(files) == 1 else "s"
    return {
        "success": True,
        "files": files,
        "count": len(files),
        "tag": args.tag,
        "message": f'Found {len(files)} file{plural} with tag "{args.tag}"',
    }


@tool(args=GetStorageBalanceArgs, description="Check FIL balance and storage allowances")
async def get_storage_balance(args: GetStorageBalanceArgs, ctx: FilDOSContext) -> dict[str, Any]:
    address = args.user_address or ctx.address
    wei = await ctx.ledger.balance_of(address)
    fil = format_fil(wei)
    formatted = f"{Decimal(fil):.4f} FIL"
    return {
        "success": True,
        "address": address,
        "balance": {
            "wei": str(wei),
            "fil": fil,
            "formatted": formatted,
        },
        "message": f"Balance: {formatted}",
    }


DEFAULT_TOOLS: list[Tool] = [
    create_folder,
    upload_file,
    add_file_to_folder,
    list_folders,
    get_folder_info,
    list_files,
    search_files_by_prompt,
    search_files_by_tag,
    get_storage_balance,
]
