# -*- coding: utf-8 -*-
"""
Single-tool MCP bridge server. Runs in two modes:
  1) MCP over stdio  →  `mcp-http-bridge --tool ntfy`
  2) HTTP (FastAPI)  →  `mcp-http-bridge --tool table --mode http --port 8000`

The tool is chosen at startup (--tool or BRIDGE_TOOL) and is the only one the
server advertises. See mcp_http_bridge.config for the environment variables.

Requires:
  fastmcp
  pydantic>=2
  httpx
  python-dotenv
  # only for --mode http:
  fastapi
  uvicorn[standard]
"""

import argparse
import logging
import signal
import sys
import traceback
from typing import Any, Dict, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult as MCPToolResult
from mcp.types import TextContent
from pydantic import Field

from .config import BridgeConfig, load_config
from .dispatcher import ClientFactory, Dispatcher
from .errors import BridgeError, ConfigurationError
from .models import ToolInvocationRequest

logger = logging.getLogger("mcp_http_bridge")

SERVER_NAMES = {
    "ntfy": "ntfy-server",
    "table": "table-server",
}


# -----------------------------
# Logging
# -----------------------------
def configure_logging(level: str = "INFO") -> None:
    # stdout carries MCP frames in stdio mode, so logs go to stderr
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stderr,
    )
    if level.upper() != "DEBUG":
        logging.getLogger("httpx").setLevel(logging.WARNING)


# -----------------------------
# MCP server (stdio)
# -----------------------------
class BridgeTool(Tool):
    """FastMCP tool whose schema comes from a ToolDescriptor and whose calls go
    through the Dispatcher."""

    dispatcher: Any = Field(exclude=True)

    async def run(self, arguments: Dict[str, Any]) -> MCPToolResult:
        request = ToolInvocationRequest(tool_name=self.name, arguments=arguments)
        try:
            result = await self.dispatcher.invoke(request)
        except BridgeError as e:
            raise ToolError(str(e)) from e

        if result.is_error:
            raise ToolError("\n".join(block.text for block in result.content))
        return MCPToolResult(
            content=[TextContent(type="text", text=block.text) for block in result.content]
        )


def build_server(config: BridgeConfig, client_factory: Optional[ClientFactory] = None) -> FastMCP:
    dispatcher = Dispatcher(config, client_factory=client_factory)
    descriptor = dispatcher.descriptor

    mcp = FastMCP(name=SERVER_NAMES[config.tool])
    mcp.add_tool(
        BridgeTool(
            name=descriptor.name,
            description=descriptor.description,
            parameters=descriptor.input_schema,
            dispatcher=dispatcher,
        )
    )
    logger.debug(f"Registered tool '{descriptor.name}' on {SERVER_NAMES[config.tool]}")
    return mcp


def _install_signal_handlers(server_name: str):
    def _handler(signum, _frame):
        name = signal.Signals(signum).name
        logger.info(f"Received {name}. Shutting down {server_name} gracefully…")
        for h in logging.getLogger().handlers:
            h.flush()
        sys.exit(0)

    try:
        signal.signal(signal.SIGINT, _handler)
        signal.signal(signal.SIGTERM, _handler)
    except (ValueError, OSError) as e:
        # Not all environments allow installing signal handlers (e.g. non-main thread).
        logger.debug(f"Signal handlers not installed: {e}")


# -----------------------------
# Entrypoint
# -----------------------------
def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Single-tool MCP bridge to an HTTP API (stdio or HTTP).")
    p.add_argument("--tool", choices=["ntfy", "table"], default=None,
                   help="Which tool to expose (default: BRIDGE_TOOL or ntfy).")
    p.add_argument("--mode", choices=["stdio", "http"], default="stdio",
                   help="Run as MCP over stdio (default) or expose as an HTTP server.")
    p.add_argument("--host", default="127.0.0.1", help="HTTP host (when --mode http).")
    p.add_argument("--port", type=int, default=8000, help="HTTP port (when --mode http).")
    return p.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)

    try:
        config = load_config(tool=args.tool)
    except ConfigurationError as e:
        configure_logging()
        logger.critical(f"Invalid configuration: {e}")
        sys.exit(2)

    configure_logging(config.log_level)
    server_name = SERVER_NAMES[config.tool]
    logger.info(f"Starting {server_name} in mode={args.mode}")
    logger.debug(f"Effective LOG_LEVEL={config.log_level}")
    _install_signal_handlers(server_name)

    if args.mode == "stdio":
        try:
            build_server(config).run(transport="stdio")
        except Exception as e:
            tb = "".join(traceback.format_exception(type(e), e, e.__traceback__))
            logger.critical(f"Fatal MCP stdio error:\n{tb}")
            sys.exit(1)

    elif args.mode == "http":
        try:
            from .http_app import build_http_app
            import uvicorn

            app = build_http_app(Dispatcher(config))
            uvicorn.run(app, host=args.host, port=args.port, log_level=config.log_level.lower())
        except Exception as e:
            tb = "".join(traceback.format_exception(type(e), e, e.__traceback__))
            logger.critical(f"Fatal HTTP error:\n{tb}")
            sys.exit(1)


if __name__ == "__main__":
    main()
