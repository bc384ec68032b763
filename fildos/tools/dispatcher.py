"""Tool registry and dispatcher.

The dispatcher is the outermost error boundary: whatever a tool raises comes
back as a ``{success: false, error, code, tool, arguments}`` envelope.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from ..errors import FilDOSError, PartialSuccessError, ToolArgumentsError, UnknownToolError
from .base import Tool, ToolDefinition, ToolResult
from .handlers import DEFAULT_TOOLS

if TYPE_CHECKING:
    from ..context import FilDOSContext

logger = logging.getLogger(__name__)

# Arguments longer than this are elided when echoed back in an error envelope
MAX_ECHOED_ARGUMENT_LENGTH = 256


def _echo_arguments(raw_args: Any) -> Any:
    if not isinstance(raw_args, dict):
        return raw_args
    echoed: dict[str, Any] = {}
    for key, value in raw_args.items():
        if isinstance(value, str) and len(value) > MAX_ECHOED_ARGUMENT_LENGTH:
            echoed[key] = f"<{len(value)} characters>"
        else:
            echoed[key] = value
    return echoed


def _validation_message(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        message = item["msg"].removeprefix("Value error, ")
        location = ".".join(str(p) for p in item["loc"])
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


class ToolDispatcher:
    """
    Routes named tool calls to their implementations.

    Example:
        ctx = create_context(FilDOSConfig())
        dispatcher = ToolDispatcher(ctx)
        result = await dispatcher.dispatch("list_files", {"folderId": "42"})
        print(result.to_text())
    """

    def __init__(self, ctx: FilDOSContext, tools: Iterable[Tool] | None = None):
        self._ctx = ctx
        self._tools: dict[str, Tool] = {}
        for t in DEFAULT_TOOLS if tools is None else tools:
            self.register(t)

    @property
    def context(self) -> FilDOSContext:
        return self._ctx

    def register(self, tool: Tool) -> None:
        """Register a tool under its name, replacing any previous one."""
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool | None:
        """Get tool by name."""
        return self._tools.get(name)

    def tool_names(self) -> list[str]:
        """Get all registered tool names."""
        return list(self._tools.keys())

    def definitions(self) -> list[ToolDefinition]:
        """Catalog of registered tools with their argument schemas."""
        return [t.definition() for t in self._tools.values()]

    async def execute(self, name: str, raw_args: Any) -> dict[str, Any]:
        """
        Validate arguments and run a tool, letting errors propagate.

        Raises:
            UnknownToolError: No tool registered under ``name``
            ToolArgumentsError: Arguments failed validation
            FilDOSError: Raised by the tool
        """
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name)

        try:
            args = tool.args_model.model_validate(raw_args or {})
        except ValidationError as e:
            raise ToolArgumentsError(_validation_message(e)) from e

        return await tool.execute(args, self._ctx)

    async def dispatch(self, name: str, raw_args: Any) -> ToolResult:
        """
        Run a tool and normalize the outcome.

        Never raises for tool, validation or backend errors.
        """
        try:
            payload = await self.execute(name, raw_args)
        except FilDOSError as e:
            logger.error(
                f"Tool {name} failed: {e}",
                extra={"tool": name, "code": e.code},
            )
            details = e.details() if isinstance(e, PartialSuccessError) else None
            return ToolResult.failure(
                tool=name,
                error=str(e),
                code=e.code,
                arguments=_echo_arguments(raw_args),
                details=details,
            )
        except Exception as e:
            logger.exception(f"Tool {name} raised an unexpected error")
            return ToolResult.failure(
                tool=name,
                error=str(e) or type(e).__name__,
                code="INTERNAL_ERROR",
                arguments=_echo_arguments(raw_args),
            )

        return ToolResult.ok(payload)
