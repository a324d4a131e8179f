# -*- coding: utf-8 -*-
"""
Error taxonomy for the bridge.

- UnknownToolError / InvalidArgumentsError are raised before any network call
  and surface to the MCP client as tool-call errors.
- Remote failures are NOT exceptions: they come back from the HTTP boundary as
  an HttpFailure value and are rendered into a ToolResult with is_error=True.
- Anything else is unexpected and propagates to the framework.
"""

from typing import Any, Dict, Optional


class BridgeError(Exception):
    """Base class for errors raised by the bridge itself."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message} (caused by: {self.cause})"
        return self.message


class UnknownToolError(BridgeError):
    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}", details={"tool_name": tool_name})


class InvalidArgumentsError(BridgeError):
    def __init__(self, tool_name: str, reason: str):
        super().__init__(
            f"Invalid arguments for {tool_name}: {reason}",
            details={"tool_name": tool_name, "reason": reason},
        )
        self.reason = reason


class ConfigurationError(BridgeError):
    """Raised at startup when the environment cannot be turned into a config."""
