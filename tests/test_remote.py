"""Tests for call building and the HTTP outcome boundary."""

from email.header import decode_header, make_header

import httpx
import pytest

from mcp_http_bridge.models import QueryTableArgs, RemoteCallSpec, SendMessageArgs
from mcp_http_bridge.remote import HttpFailure, HttpSuccess, build_call, perform


class TestBuildSendMessage:
    def test_minimal(self, ntfy_config):
        spec = build_call(ntfy_config, SendMessageArgs(channel="alerts", message="disk full"))

        assert spec.method == "POST"
        assert spec.url == "https://ntfy.sh/alerts"
        assert spec.body == "disk full"
        assert spec.headers == {}

    def test_optional_headers(self, ntfy_config):
        args = SendMessageArgs(channel="c", message="m", title="Backup", priority=3, tags=["a", "b"])
        spec = build_call(ntfy_config, args)

        assert spec.headers == {"Title": "Backup", "Priority": "3", "Tags": "a,b"}

    def test_empty_tags_and_title_omitted(self, ntfy_config):
        spec = build_call(ntfy_config, SendMessageArgs(channel="c", message="m", title="", tags=[]))
        assert "Tags" not in spec.headers
        assert "Title" not in spec.headers

    def test_float_priority_rendered_as_integer(self, ntfy_config):
        spec = build_call(ntfy_config, SendMessageArgs(channel="c", message="m", priority=4.0))
        assert spec.headers["Priority"] == "4"

    def test_non_ascii_title_and_tags_encoded(self, ntfy_config):
        args = SendMessageArgs(channel="c", message="m", title="Grüße", tags=["warning", "🚨"])
        spec = build_call(ntfy_config, args)

        assert spec.headers["Title"].isascii()
        assert spec.headers["Tags"].isascii()
        assert str(make_header(decode_header(spec.headers["Title"]))) == "Grüße"
        assert str(make_header(decode_header(spec.headers["Tags"]))) == "warning,🚨"

    def test_ascii_headers_left_as_is(self, ntfy_config):
        spec = build_call(ntfy_config, SendMessageArgs(channel="c", message="m", title="Backup done"))
        assert spec.headers["Title"] == "Backup done"

    def test_channel_is_path_encoded(self, ntfy_config):
        spec = build_call(ntfy_config, SendMessageArgs(channel="a/b c", message="m"))
        assert spec.url == "https://ntfy.sh/a%2Fb%20c"


class TestBuildQueryTable:
    def test_minimal(self, table_config):
        spec = build_call(table_config, QueryTableArgs(table_id="tbl1"))

        assert spec.method == "GET"
        assert spec.url == "https://tables.example.com/api/table/tbl1/record"
        assert spec.params == {}
        assert spec.headers == {
            "Authorization": "Bearer secret-token",
            "Accept": "application/json",
        }
        assert spec.body is None

    def test_query_parameters(self, table_config):
        args = QueryTableArgs(table_id="tbl1", filter='{"status":"open"}', sort="-created", limit=5)
        spec = build_call(table_config, args)

        assert spec.params == {"filter": '{"status":"open"}', "sort": "-created", "limit": "5"}


class TestPerform:
    @pytest.mark.asyncio
    async def test_success_decodes_json(self, recorder_for):
        recorder = recorder_for(200, json={"records": []})
        spec = RemoteCallSpec(method="GET", url="https://x.test/table/t/record", params={"limit": "2"})

        async with recorder.client_factory()() as client:
            outcome = await perform(client, spec)

        assert outcome == HttpSuccess(status_code=200, body={"records": []})
        assert recorder.requests[0].url.params["limit"] == "2"

    @pytest.mark.asyncio
    async def test_non_json_body_kept_as_text(self, recorder_for):
        recorder = recorder_for(200, text="ok")
        async with recorder.client_factory()() as client:
            outcome = await perform(client, RemoteCallSpec(method="POST", url="https://x.test/c", body="m"))

        assert isinstance(outcome, HttpSuccess)
        assert outcome.body == "ok"
        assert recorder.requests[0].content == b"m"

    @pytest.mark.asyncio
    async def test_status_failure(self, recorder_for):
        recorder = recorder_for(404, json={"error": "not found"})
        async with recorder.client_factory()() as client:
            outcome = await perform(client, RemoteCallSpec(method="GET", url="https://x.test/a"))

        assert isinstance(outcome, HttpFailure)
        assert outcome.kind == "status"
        assert outcome.status_code == 404
        assert outcome.body == {"error": "not found"}

    @pytest.mark.asyncio
    async def test_transport_failure(self, recorder_for):
        recorder = recorder_for(exc=httpx.ConnectError("connection refused"))
        async with recorder.client_factory()() as client:
            outcome = await perform(client, RemoteCallSpec(method="GET", url="https://x.test/a"))

        assert isinstance(outcome, HttpFailure)
        assert outcome.kind == "transport"
        assert outcome.status_code is None
        assert "connection refused" in outcome.message
