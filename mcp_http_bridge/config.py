# -*- coding: utf-8 -*-
"""
Startup configuration.

Read once from the process environment (a local .env is honoured through
python-dotenv) and passed explicitly to the dispatcher and server.

Env:
  BRIDGE_TOOL          = ntfy | table (default ntfy)
  NTFY_BASE_URL        = ntfy endpoint (default https://ntfy.sh)
  TABLE_API_BASE_URL   = table service API root (default https://app.teable.io/api)
  TABLE_API_TOKEN      = bearer token for the table service
  TABLE_DEFAULT_ID     = table used when the caller does not pass tableId
  TABLE_ALLOWED_IDS    = optional comma-separated allow-list of table ids
  BRIDGE_HTTP_TIMEOUT  = HTTP client timeout in seconds (default 30)
  MCP_LOG_LEVEL        = DEBUG|INFO|WARNING|ERROR (default INFO)
"""

import logging
import os
from typing import FrozenSet, Literal, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigurationError

logger = logging.getLogger("mcp_http_bridge.config")

TOOL_KINDS = ("ntfy", "table")

DEFAULT_NTFY_BASE_URL = "https://ntfy.sh"
DEFAULT_TABLE_BASE_URL = "https://app.teable.io/api"
DEFAULT_HTTP_TIMEOUT = 30.0


class NtfyConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_NTFY_BASE_URL


class TableConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_TABLE_BASE_URL
    token: str = ""
    default_table_id: Optional[str] = None
    allowed_table_ids: FrozenSet[str] = Field(default_factory=frozenset)


class BridgeConfig(BaseModel):
    """Everything a server instance needs; built once, never mutated."""

    model_config = ConfigDict(frozen=True)

    tool: Literal["ntfy", "table"] = "ntfy"
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    log_level: str = "INFO"
    ntfy: NtfyConfig = Field(default_factory=NtfyConfig)
    table: TableConfig = Field(default_factory=TableConfig)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def load_config(
    env: Optional[Mapping[str, str]] = None,
    tool: Optional[str] = None,
    use_dotenv: bool = True,
) -> BridgeConfig:
    """
    Build a BridgeConfig from `env` (defaults to os.environ).

    `tool` overrides BRIDGE_TOOL (the CLI passes --tool through here).
    A missing table token is only a warning; the remote service will reject
    the call and that failure is reported as a normal tool result.
    """
    if env is None:
        if use_dotenv:
            load_dotenv()
        env = os.environ

    kind = (tool or env.get("BRIDGE_TOOL") or "ntfy").strip().lower()
    if kind not in TOOL_KINDS:
        raise ConfigurationError(
            f"Unsupported BRIDGE_TOOL '{kind}'. Expected one of: {', '.join(TOOL_KINDS)}",
            details={"tool": kind},
        )

    raw_timeout = _clean(env.get("BRIDGE_HTTP_TIMEOUT"))
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_HTTP_TIMEOUT
    except ValueError as e:
        raise ConfigurationError(
            f"BRIDGE_HTTP_TIMEOUT must be a number of seconds, got '{raw_timeout}'",
            cause=e,
        ) from e

    allowed = _clean(env.get("TABLE_ALLOWED_IDS")) or ""
    table = TableConfig(
        base_url=(_clean(env.get("TABLE_API_BASE_URL")) or DEFAULT_TABLE_BASE_URL).rstrip("/"),
        token=_clean(env.get("TABLE_API_TOKEN")) or "",
        default_table_id=_clean(env.get("TABLE_DEFAULT_ID")),
        allowed_table_ids=frozenset(t.strip() for t in allowed.split(",") if t.strip()),
    )
    ntfy = NtfyConfig(
        base_url=(_clean(env.get("NTFY_BASE_URL")) or DEFAULT_NTFY_BASE_URL).rstrip("/"),
    )

    config = BridgeConfig(
        tool=kind,
        http_timeout=timeout,
        log_level=(_clean(env.get("MCP_LOG_LEVEL")) or "INFO").upper(),
        ntfy=ntfy,
        table=table,
    )

    if config.tool == "table" and not config.table.token:
        logger.warning("TABLE_API_TOKEN is not set; requests to the table service will be unauthenticated.")

    return config
