"""MCP server adapter.

Exposes the dispatcher's tools over the Model Context Protocol. Every tool
body forwards to ``ToolDispatcher.dispatch`` and returns its JSON text, so
argument validation and error handling stay in one place.

Adapter parameters are untyped (``Any``, default ``None``) so FastMCP passes
every call through; the dispatcher validates and answers bad arguments with
the failure envelope.
"""

from typing import Any

from fastmcp import FastMCP

from .tools import ToolDispatcher

SERVER_NAME = "FilDOS MCP"


def build_server(dispatcher: ToolDispatcher) -> FastMCP:
    """Create a FastMCP server bound to ``dispatcher``."""
    mcp = FastMCP(SERVER_NAME)

    def describe(name: str) -> str:
        tool = dispatcher.get(name)
        return tool.description if tool else name

    async def call(name: str, args: dict[str, Any]) -> str:
        present = {k: v for k, v in args.items() if v is not None}
        result = await dispatcher.dispatch(name, present)
        return result.to_text()

    # Parameter names are the camelCase wire names of the tool schemas
    @mcp.tool(name="create_folder", description=describe("create_folder"))
    async def create_folder(
        name: Any = None,
        folderType: Any = None,  # noqa: N803
    ) -> str:
        return await call("create_folder", {"name": name, "folderType": folderType})

    @mcp.tool(name="upload_file", description=describe("upload_file"))
    async def upload_file(
        filePath: Any = None,  # noqa: N803
        fileContent: Any = None,  # noqa: N803
        fileName: Any = None,  # noqa: N803
        folderId: Any = None,  # noqa: N803
    ) -> str:
        return await call(
            "upload_file",
            {
                "filePath": filePath,
                "fileContent": fileContent,
                "fileName": fileName,
                "folderId": folderId,
            },
        )

    @mcp.tool(name="add_file_to_folder", description=describe("add_file_to_folder"))
    async def add_file_to_folder(
        folderId: Any = None,  # noqa: N803
        contentId: Any = None,  # noqa: N803
        fileName: Any = None,  # noqa: N803
        tags: Any = None,
    ) -> str:
        return await call(
            "add_file_to_folder",
            {"folderId": folderId, "contentId": contentId, "fileName": fileName, "tags": tags},
        )

    @mcp.tool(name="list_folders", description=describe("list_folders"))
    async def list_folders(userAddress: Any = None) -> str:  # noqa: N803
        return await call("list_folders", {"userAddress": userAddress})

    @mcp.tool(name="get_folder_info", description=describe("get_folder_info"))
    async def get_folder_info(folderId: Any = None) -> str:  # noqa: N803
        return await call("get_folder_info", {"folderId": folderId})

    @mcp.tool(name="list_files", description=describe("list_files"))
    async def list_files(folderId: Any = None) -> str:  # noqa: N803
        return await call("list_files", {"folderId": folderId})

    @mcp.tool(name="search_files_by_prompt", description=describe("search_files_by_prompt"))
    async def search_files_by_prompt(
        prompt: Any = None,
        folderId: Any = None,  # noqa: N803
    ) -> str:
        return await call("search_files_by_prompt", {"prompt": prompt, "folderId": folderId})

    @mcp.tool(name="search_files_by_tag", description=describe("search_files_by_tag"))
    async def search_files_by_tag(tag: Any = None) -> str:
        return await call("search_files_by_tag", {"tag": tag})

    @mcp.tool(name="get_storage_balance", description=describe("get_storage_balance"))
    async def get_storage_balance(userAddress: Any = None) -> str:  # noqa: N803
        return await call("get_storage_balance", {"userAddress": userAddress})

    return mcp
