"""Unit tests for HttpBackendClient using httpx.MockTransport."""

from __future__ import annotations

import json
from typing import List

import httpx
import pytest

from querydesk.pipeline.backend import HttpBackendClient
from querydesk.services import ConfigStore, QueryOrchestrator
from querydesk.core.errors import BackendInvocationError


def _recording_transport(seen: List[httpx.Request], status: int = 200, body: str = "{}") -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status, text=body)

    return httpx.MockTransport(handler)


class TestHttpBackendClient:
    @pytest.mark.asyncio
    async def test_posts_arguments_to_command_path(self) -> None:
        seen: List[httpx.Request] = []
        client = HttpBackendClient("http://backend:4310/", transport=_recording_transport(seen, body="ok"))

        text = await client.invoke("ask", data="{}", question="how many?")

        assert text == "ok"
        assert seen[0].method == "POST"
        assert str(seen[0].url) == "http://backend:4310/ask"
        assert json.loads(seen[0].content) == {"data": "{}", "question": "how many?"}

    @pytest.mark.asyncio
    async def test_error_status_raises(self) -> None:
        client = HttpBackendClient(
            "http://backend:4310",
            transport=_recording_transport([], status=500, body='{"QueryError": "boom"}'),
        )

        with pytest.raises(httpx.HTTPStatusError):
            await client.invoke("query", data="{}", sql="select 1")

    @pytest.mark.asyncio
    async def test_unknown_command_is_rejected(self) -> None:
        seen: List[httpx.Request] = []
        client = HttpBackendClient("http://backend:4310", transport=_recording_transport(seen))

        with pytest.raises(ValueError):
            await client.invoke("drop_everything")

        assert seen == []


class TestOrchestratorOverHttp:
    @pytest.mark.asyncio
    async def test_backend_error_body_becomes_diagnostics(self, store: ConfigStore, make_profile) -> None:
        store.set_active(store.upsert(make_profile()))
        transport = _recording_transport([], status=500, body='{"SqlReadError": "relation \\"nope\\" does not exist"}')
        orchestrator = QueryOrchestrator(store, HttpBackendClient("http://backend:4310", transport=transport))

        with pytest.raises(BackendInvocationError) as exc_info:
            await orchestrator.query("select * from nope")

        assert exc_info.value.diagnostics() == ['SqlReadError: relation "nope" does not exist']
        assert len(orchestrator.history) == 0

    @pytest.mark.asyncio
    async def test_successful_round_trip(self, store: ConfigStore, make_profile) -> None:
        store.set_active(store.upsert(make_profile()))
        body = json.dumps({"question": "", "sql": "select 1", "data": [{"?column?": 1}]})
        orchestrator = QueryOrchestrator(
            store, HttpBackendClient("http://backend:4310", transport=_recording_transport([], body=body))
        )

        entry = await orchestrator.query("select 1")

        assert entry.data == [{"?column?": 1}]
        assert orchestrator.history.entries == (entry,)
