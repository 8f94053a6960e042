"""Shared test fixtures and hypothesis strategies for the client test suite."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime, timezone

import httpx
import pytest
from hypothesis import strategies as st

from allsrv_client.client import AllsrvClient
from allsrv_client.config.settings import ClientSettings


# ---------------------------------------------------------------------------
# Ensure required env vars are set for ClientSettings in tests
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _set_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set minimal env vars so ClientSettings can be instantiated in tests."""
    monkeypatch.setenv("ALLSRV_ADDR", "http://allsrv.test")
    monkeypatch.setenv("ALLSRV_ORIGIN", "http://tests.local")


# ---------------------------------------------------------------------------
# Settings fixture
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> ClientSettings:
    """Test settings with a pinned SDK version."""
    return ClientSettings(
        addr="http://allsrv.test",
        origin="http://tests.local",
        sdk_version="1.2.3",
    )


# ---------------------------------------------------------------------------
# Stub server
# ---------------------------------------------------------------------------

FOO_RESPONSE = {
    "meta": {"took_ms": 1, "trace_id": "t1"},
    "data": {
        "type": "foo",
        "id": "42",
        "attributes": {
            "name": "a",
            "note": "b",
            "created_at": "2024-01-01T00:00:00Z",
            "updated_at": "2024-01-01T00:00:00Z",
        },
    },
}


def json_response(
    body: object,
    status_code: int = 200,
    content_type: str = "application/json",
) -> httpx.Response:
    return httpx.Response(
        status_code,
        headers={"Content-Type": content_type},
        content=json.dumps(body).encode("utf-8"),
    )


class StubServer:
    """Records every request and answers with a configurable responder."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = (
            lambda request: json_response(FOO_RESPONSE)
        )

    def reply(self, body: object, status_code: int = 200, content_type: str = "application/json") -> None:
        self.responder = lambda request: json_response(body, status_code, content_type)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def stub() -> StubServer:
    return StubServer()


@pytest.fixture
def http(stub: StubServer) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(stub.handler))


@pytest.fixture
def client(settings: ClientSettings, http: httpx.AsyncClient) -> AllsrvClient:
    return AllsrvClient(settings, http=http)


# ---------------------------------------------------------------------------
# Hypothesis strategies (reusable across property tests)
# ---------------------------------------------------------------------------

resource_types = st.from_regex(r"[a-z][a-z_]{0,15}", fullmatch=True)
resource_ids = st.text(min_size=1, max_size=36, alphabet="abcdefghijklmnopqrstuvwxyz0123456789-")
short_text = st.text(max_size=50)

utc_datetimes = st.datetimes(
    min_value=datetime(1970, 1, 1),
    max_value=datetime(2100, 1, 1),
    timezones=st.just(timezone.utc),
)

http_statuses = st.integers(min_value=100, max_value=599)
