# -*- coding: utf-8 -*-
"""
Outbound side of the bridge.

build_call() turns validated arguments into a RemoteCallSpec; perform() runs it
with httpx and reports the outcome as HttpSuccess or HttpFailure instead of
raising, so callers never have to guess whether an exception came from HTTP.
One call per invocation, no retries.
"""

import logging
from email.header import Header
from typing import Any, Literal, Optional, Union
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict

from .config import BridgeConfig
from .models import QueryTableArgs, RemoteCallSpec, SendMessageArgs

logger = logging.getLogger("mcp_http_bridge.remote")


# -----------------------------------------------------------------------------
# Outcome types
# -----------------------------------------------------------------------------
class HttpSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    status_code: int
    body: Any = None


class HttpFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["status", "transport"]
    message: str
    status_code: Optional[int] = None
    body: Any = None


HttpOutcome = Union[HttpSuccess, HttpFailure]


# -----------------------------------------------------------------------------
# Call building
# -----------------------------------------------------------------------------
def _format_number(value: Union[int, float]) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _header_value(value: str) -> str:
    # httpx sends header values as ASCII; ntfy decodes RFC 2047 encoded-words
    if value.isascii():
        return value
    return Header(value, "utf-8", maxlinelen=0).encode()


def build_send_message(base_url: str, args: SendMessageArgs) -> RemoteCallSpec:
    headers = {}
    if args.title:
        headers["Title"] = _header_value(args.title)
    if args.priority is not None:
        headers["Priority"] = _format_number(args.priority)
    if args.tags:
        headers["Tags"] = _header_value(",".join(args.tags))

    return RemoteCallSpec(
        method="POST",
        url=f"{base_url}/{quote(args.channel, safe='')}",
        headers=headers,
        body=args.message,
    )


def build_query_table(base_url: str, token: str, args: QueryTableArgs) -> RemoteCallSpec:
    params = {}
    if args.filter is not None:
        params["filter"] = args.filter
    if args.sort is not None:
        params["sort"] = args.sort
    if args.limit is not None:
        params["limit"] = _format_number(args.limit)

    return RemoteCallSpec(
        method="GET",
        url=f"{base_url}/table/{quote(args.table_id, safe='')}/record",
        params=params,
        headers={
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        },
    )


def build_call(config: BridgeConfig, args: Union[SendMessageArgs, QueryTableArgs]) -> RemoteCallSpec:
    if isinstance(args, SendMessageArgs):
        return build_send_message(config.ntfy.base_url, args)
    return build_query_table(config.table.base_url, config.table.token, args)


# -----------------------------------------------------------------------------
# HTTP boundary
# -----------------------------------------------------------------------------
def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


async def perform(client: httpx.AsyncClient, spec: RemoteCallSpec) -> HttpOutcome:
    logger.debug(f"{spec.method} {spec.url} params={spec.params} headers={sorted(spec.headers)}")
    try:
        response = await client.request(
            spec.method,
            spec.url,
            params=spec.params or None,
            headers=spec.headers,
            content=spec.body,
        )
    except httpx.RequestError as e:
        logger.warning(f"{spec.method} {spec.url} transport error: {e!r}")
        return HttpFailure(kind="transport", message=str(e) or type(e).__name__)

    body = _decode_body(response)
    if response.is_success:
        return HttpSuccess(status_code=response.status_code, body=body)

    logger.warning(f"{spec.method} {spec.url} returned HTTP {response.status_code}")
    return HttpFailure(
        kind="status",
        status_code=response.status_code,
        message=f"Request failed with status code {response.status_code}",
        body=body,
    )
