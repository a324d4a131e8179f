"""Single-tool MCP bridges for HTTP APIs (ntfy notifications, tabular records)."""

from .catalog import list_tools, tool_descriptor
from .config import BridgeConfig, load_config
from .dispatcher import Dispatcher
from .errors import BridgeError, ConfigurationError, InvalidArgumentsError, UnknownToolError
from .models import ToolDescriptor, ToolInvocationRequest, ToolResult

__version__ = "1.0.0"

__all__ = [
    "BridgeConfig",
    "BridgeError",
    "ConfigurationError",
    "Dispatcher",
    "InvalidArgumentsError",
    "ToolDescriptor",
    "ToolInvocationRequest",
    "ToolResult",
    "UnknownToolError",
    "list_tools",
    "load_config",
    "tool_descriptor",
]
