"""Shared fixtures: configs for both tools and a recording mock HTTP transport."""

from typing import Callable, List

import httpx
import pytest

from mcp_http_bridge.config import load_config


class Recorder:
    """Collects every request the mock transport sees and replies via `reply`."""

    def __init__(self, reply: Callable[[httpx.Request], httpx.Response]):
        self.reply = reply
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.reply(request)

    def client_factory(self):
        transport = httpx.MockTransport(self.handler)
        return lambda: httpx.AsyncClient(transport=transport)


@pytest.fixture
def recorder_for():
    def make(status_code=200, json=None, text=None, exc=None) -> Recorder:
        def reply(request):
            if exc is not None:
                raise exc
            if json is not None:
                return httpx.Response(status_code, json=json)
            return httpx.Response(status_code, text=text or "")

        return Recorder(reply)

    return make


@pytest.fixture
def ntfy_config():
    return load_config(env={"BRIDGE_TOOL": "ntfy"})


@pytest.fixture
def table_config():
    return load_config(
        env={
            "BRIDGE_TOOL": "table",
            "TABLE_API_BASE_URL": "https://tables.example.com/api",
            "TABLE_API_TOKEN": "secret-token",
        }
    )


@pytest.fixture
def table_config_with_default():
    return load_config(
        env={
            "BRIDGE_TOOL": "table",
            "TABLE_API_BASE_URL": "https://tables.example.com/api",
            "TABLE_API_TOKEN": "secret-token",
            "TABLE_DEFAULT_ID": "tblDefault",
        }
    )
