"""Tests for the tool dispatcher."""

import json
from unittest import mock

import pytest

from fildos import FilDOSConfig, create_context
from fildos.errors import (
    LedgerError,
    RegistrationFailedError,
    ToolArgumentsError,
    UnknownToolError,
)
from fildos.tools import DEFAULT_TOOLS, ToolArgs, ToolDispatcher, ToolResult, tool

ADDRESS = "0x" + "ab" * 20


class EchoArgs(ToolArgs):
    value: str


@pytest.fixture
def dispatcher():
    ctx = create_context(FilDOSConfig(_env_file=None, address=ADDRESS))
    return ToolDispatcher(ctx)


def make_dispatcher(handler):
    ctx = create_context(FilDOSConfig(_env_file=None, address=ADDRESS))
    return ToolDispatcher(ctx, tools=[tool(args=EchoArgs, description="Echo", name="echo")(handler)])


class TestRegistry:
    """Test tool registration and catalog."""

    def test_default_tools_registered(self, dispatcher):
        assert dispatcher.tool_names() == [
            "create_folder",
            "upload_file",
            "add_file_to_folder",
            "list_folders",
            "get_folder_info",
            "list_files",
            "search_files_by_prompt",
            "search_files_by_tag",
            "get_storage_balance",
        ]
        assert len(DEFAULT_TOOLS) == 9

    def test_definitions_carry_schemas(self, dispatcher):
        definitions = {d.name: d for d in dispatcher.definitions()}

        upload = definitions["upload_file"].model_dump(by_alias=True)
        assert "inputSchema" in upload
        assert "fileContent" in upload["inputSchema"]["properties"]
        assert definitions["list_files"].input_schema["required"] == ["folderId"]

    def test_register_replaces_by_name(self):
        async def first(args, ctx):
            return {"success": True, "which": 1}

        async def second(args, ctx):
            return {"success": True, "which": 2}

        d = make_dispatcher(first)
        d.register(tool(args=EchoArgs, description="Echo", name="echo")(second))

        assert d.tool_names() == ["echo"]

    def test_get_unknown_returns_none(self, dispatcher):
        assert dispatcher.get("rm_rf") is None


class TestExecute:
    """Test ToolDispatcher.execute error propagation."""

    @pytest.mark.asyncio
    async def test_unknown_tool_raises(self, dispatcher):
        with pytest.raises(UnknownToolError, match="Unknown tool: nope"):
            await dispatcher.execute("nope", {})

    @pytest.mark.asyncio
    async def test_invalid_arguments_raise(self, dispatcher):
        with pytest.raises(ToolArgumentsError, match="folderId"):
            await dispatcher.execute("list_files", {})


class TestDispatch:
    """Test ToolDispatcher.dispatch envelopes."""

    @pytest.mark.asyncio
    async def test_success_payload(self):
        async def echo(args, ctx):
            return {"success": True, "value": args.value}

        result = await make_dispatcher(echo).dispatch("echo", {"value": "hi"})

        assert result.success is True
        assert result.payload == {"success": True, "value": "hi"}

    @pytest.mark.asyncio
    async def test_unknown_tool_envelope(self, dispatcher):
        result = await dispatcher.dispatch("nope", {"a": 1})

        assert result.success is False
        assert result.payload == {
            "success": False,
            "error": "Unknown tool: nope",
            "code": "UNKNOWN_TOOL",
            "tool": "nope",
            "arguments": {"a": 1},
        }

    @pytest.mark.asyncio
    async def test_validation_envelope(self, dispatcher):
        result = await dispatcher.dispatch("upload_file", {"fileContent": "aGVsbG8="})

        assert result.payload["code"] == "VALIDATION_ERROR"
        assert "fileName is required" in result.payload["error"]

    @pytest.mark.asyncio
    async def test_domain_error_envelope(self):
        async def failing(args, ctx):
            raise LedgerError("Transaction reverted")

        result = await make_dispatcher(failing).dispatch("echo", {"value": "x"})

        assert result.payload["code"] == "LEDGER_ERROR"
        assert result.payload["error"] == "Transaction reverted"
        assert result.payload["tool"] == "echo"

    @pytest.mark.asyncio
    async def test_partial_success_details(self):
        async def failing(args, ctx):
            raise RegistrationFailedError("piece add failed", content_id="bafy-1")

        result = await make_dispatcher(failing).dispatch("echo", {"value": "x"})

        assert result.payload["code"] == "PARTIAL_SUCCESS"
        assert result.payload["contentId"] == "bafy-1"
        assert result.payload["retry"] == "registration"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_contained(self):
        async def failing(args, ctx):
            raise KeyError("boom")

        with mock.patch("fildos.tools.dispatcher.logger") as logger:
            result = await make_dispatcher(failing).dispatch("echo", {"value": "x"})

        assert result.success is False
        assert result.payload["code"] == "INTERNAL_ERROR"
        logger.exception.assert_called_once()

    @pytest.mark.asyncio
    async def test_long_arguments_are_elided(self, dispatcher):
        content = "A" * 1000

        result = await dispatcher.dispatch("upload_file", {"fileContent": content})

        assert result.payload["arguments"] == {"fileContent": "<1000 characters>"}

    @pytest.mark.asyncio
    async def test_soft_failure_payload(self):
        async def soft(args, ctx):
            return {"success": False, "error": "AI service unavailable"}

        result = await make_dispatcher(soft).dispatch("echo", {"value": "x"})

        assert result.success is False


class TestToolResult:
    """Test ToolResult rendering."""

    def test_to_text_is_indented_json(self):
        result = ToolResult.ok({"success": True, "count": 2})

        text = result.to_text()

        assert json.loads(text) == {"success": True, "count": 2}
        assert text.startswith("{\n  ")

    def test_failure_without_details(self):
        result = ToolResult.failure("t", "bad", "CODE", {})

        assert set(result.payload) == {"success", "error", "code", "tool", "arguments"}
