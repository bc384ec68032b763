"""Tool interface and result types."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Callable, Coroutine
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Self

if TYPE_CHECKING:
    from ..context import FilDOSContext


class ToolArgs(BaseModel):
    """Base class for tool argument models.

    Fields use snake_case in Python and camelCase aliases on the wire.
    Unknown keys are ignored. Numeric ids are accepted and kept as strings.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )


class ToolDefinition(BaseModel):
    """Tool catalog entry advertised to callers."""

    name: str
    description: str
    input_schema: dict[str, Any] = Field(alias="inputSchema")

    model_config = ConfigDict(populate_by_name=True)


class ToolResult(BaseModel):
    """
    Outcome of a tool call.

    ``payload`` is the JSON object returned to the caller; ``success``
    mirrors its ``success`` key.
    """

    success: bool
    payload: dict[str, Any]

    @classmethod
    def ok(cls, payload: dict[str, Any]) -> Self:
        """Wrap a handler payload. Handlers may report soft failures themselves."""
        return cls(success=bool(payload.get("success", True)), payload=payload)

    @classmethod
    def failure(
        cls,
        tool: str,
        error: str,
        code: str,
        arguments: Any,
        details: dict[str, Any] | None = None,
    ) -> Self:
        """Create the uniform failure envelope."""
        payload: dict[str, Any] = {
            "success": False,
            "error": error,
            "code": code,
            "tool": tool,
            "arguments": arguments,
        }
        if details:
            payload.update(details)
        return cls(success=False, payload=payload)

    def to_text(self) -> str:
        """Serialize the payload as indented JSON text."""
        return json.dumps(self.payload, indent=2, default=str)


class Tool(ABC):
    """
    Tool implementation interface.

    Subclass this or use the @tool decorator.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool name (e.g., 'upload_file')."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description shown to the caller."""

    @property
    @abstractmethod
    def args_model(self) -> type[ToolArgs]:
        """Pydantic model that validates the raw arguments."""

    @abstractmethod
    async def execute(self, args: Any, ctx: FilDOSContext) -> dict[str, Any]:
        """
        Run the tool.

        Args:
            args: Validated instance of ``args_model``
            ctx: Service context

        Returns:
            JSON-compatible payload including a ``success`` key

        Raises:
            FilDOSError: Converted to a failure envelope by the dispatcher
        """

    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            input_schema=self.args_model.model_json_schema(by_alias=True),
        )


ToolHandler = Callable[[Any, "FilDOSContext"], Coroutine[Any, Any, dict[str, Any]]]


def tool(
    args: type[ToolArgs],
    description: str,
    name: str | None = None,
) -> Callable[[ToolHandler], Tool]:
    """
    Decorator to create a Tool from an async function.

    The tool name defaults to the function name.

    Usage:
        @tool(args=ListFilesArgs, description="List all files in a folder")
        async def list_files(args: ListFilesArgs, ctx: FilDOSContext) -> dict:
            ...
    """

    def decorator(func: ToolHandler) -> Tool:
        tool_name = name or getattr(func, "__name__", None)
        if not tool_name:
            raise ValueError(
                "Tool name could not be determined. "
                "Provide an explicit name: @tool(name='my_tool', ...)"
            )

        class DecoratedTool(Tool):
            @property
            def name(self) -> str:
                return tool_name

            @property
            def description(self) -> str:
                return description

            @property
            def args_model(self) -> type[ToolArgs]:
                return args

            async def execute(self, tool_args: Any, ctx: FilDOSContext) -> dict[str, Any]:
                return await func(tool_args, ctx)

        return DecoratedTool()

    return decorator
