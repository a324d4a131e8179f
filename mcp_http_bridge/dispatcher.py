# -*- coding: utf-8 -*-
"""
Dispatcher: request -> validate -> build call -> HTTP -> ToolResult.

- Unknown tool names and schema violations raise before any network effect.
- Remote failures (non-2xx or transport errors) come back as a ToolResult with
  is_error=True; the caller always gets a tool result for a valid call.
- Anything else is logged with a correlation ID and re-raised untouched.
"""

import json
import logging
import time
import uuid
from typing import Any, Callable, Optional, Tuple

import httpx

from .catalog import tool_descriptor
from .config import BridgeConfig
from .errors import InvalidArgumentsError, UnknownToolError
from .models import QueryTableArgs, SendMessageArgs, ToolInvocationRequest, ToolResult
from .remote import HttpFailure, build_call, perform
from .validation import Invalid, validate

logger = logging.getLogger("mcp_http_bridge.dispatcher")

ClientFactory = Callable[[], httpx.AsyncClient]


def _time_call() -> Tuple[float, Callable[[], float]]:
    start = time.perf_counter()

    def done() -> float:
        return time.perf_counter() - start

    return start, done


def _pretty(body: Any) -> str:
    if isinstance(body, str):
        return body
    return json.dumps(body, indent=2, ensure_ascii=False)


def _failure_detail(failure: HttpFailure) -> str:
    """Prefer the remote service's own error body over our transport message."""
    if failure.body not in (None, "", {}, []):
        if isinstance(failure.body, str):
            return failure.body
        return json.dumps(failure.body, ensure_ascii=False)
    return failure.message


class Dispatcher:
    """Invokes the single tool described by `config`."""

    def __init__(self, config: BridgeConfig, client_factory: Optional[ClientFactory] = None):
        self.config = config
        self.descriptor = tool_descriptor(config)
        self._client_factory = client_factory or (
            lambda: httpx.AsyncClient(timeout=config.http_timeout)
        )

    def validated_args(self, request: ToolInvocationRequest):
        if request.tool_name != self.descriptor.name:
            raise UnknownToolError(request.tool_name)

        result = validate(self.descriptor, request.arguments)
        if isinstance(result, Invalid):
            raise InvalidArgumentsError(request.tool_name, result.reason)

        args = result.args
        allowed = self.config.table.allowed_table_ids
        if isinstance(args, QueryTableArgs) and allowed and args.table_id not in allowed:
            raise InvalidArgumentsError(request.tool_name, f"table '{args.table_id}' is not allowed")
        return args

    async def invoke(self, request: ToolInvocationRequest) -> ToolResult:
        call_id = str(uuid.uuid4())
        logger.debug(f"[{call_id}] {request.tool_name}() invoked")
        _, done = _time_call()

        try:
            args = self.validated_args(request)
        except (UnknownToolError, InvalidArgumentsError) as e:
            logger.warning(f"[{call_id}] rejected after {done():.6f}s: {e}")
            raise

        spec = build_call(self.config, args)
        try:
            async with self._client_factory() as client:
                outcome = await perform(client, spec)
        except Exception:
            logger.exception(f"[{call_id}] {request.tool_name}() unexpected error after {done():.6f}s")
            raise

        if isinstance(outcome, HttpFailure):
            logger.warning(
                f"[{call_id}] {request.tool_name}() remote failure ({outcome.kind}) after {done():.6f}s"
            )
            return ToolResult.text(self._error_text(args, outcome), is_error=True)

        logger.info(
            f"[{call_id}] {request.tool_name}() success status={outcome.status_code} in {done():.6f}s"
        )
        return ToolResult.text(self._success_text(args, outcome.body))

    # -------------------------------------------------------------------------
    # Message formatting
    # -------------------------------------------------------------------------
    def _success_text(self, args, body: Any) -> str:
        if isinstance(args, SendMessageArgs):
            return f"Message successfully sent to {self.config.ntfy.base_url}/{args.channel}:\n{_pretty(body)}"
        return f"Records retrieved from table {args.table_id}:\n{_pretty(body)}"

    def _error_text(self, args, failure: HttpFailure) -> str:
        if isinstance(args, SendMessageArgs):
            return f"Error sending message: {_failure_detail(failure)}"
        return f"Error querying table {args.table_id}: {_failure_detail(failure)}"
