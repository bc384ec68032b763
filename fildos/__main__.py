"""FilDOS MCP server entry point.

Usage:
    python -m fildos

    Or via the console script:
    fildos-mcp

Environment variables:
    FILDOS_ADDRESS: Operating address (required)
    FILDOS_AI_SERVICE_URL: Semantic search service (default: http://localhost:5000)
    FILDOS_LOG_LEVEL: Logging level (default: INFO)

The server speaks MCP over stdio, so all logging goes to stderr.
"""

import logging
import sys

from pydantic import ValidationError

from .config import FilDOSConfig
from .context import create_context
from .server import build_server
from .tools import ToolDispatcher

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the FilDOS MCP server on stdio."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # Suppress httpx request logging
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    try:
        config = FilDOSConfig()  # type: ignore[call-arg]  # pydantic-settings loads from env
    except ValidationError as e:
        logger.error(f"Failed to load config: {e}")
        logger.error("Required environment variables: FILDOS_ADDRESS")
        sys.exit(1)

    logging.getLogger().setLevel(config.log_level.upper())
    logger.info(f"Operating address: {config.address}")
    logger.info(f"AI service URL: {config.ai_service_url}")

    ctx = create_context(config)
    dispatcher = ToolDispatcher(ctx)
    server = build_server(dispatcher)

    logger.info(f"FilDOS MCP server running on stdio with {len(dispatcher.tool_names())} tools")
    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Server interrupted")
    except Exception as e:
        logger.error(f"Server failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
