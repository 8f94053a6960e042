"""Async client for the allsrv ``foo`` resource API.

Exposes one coroutine per CRUD verb. Each call validates its inputs, builds
a JSON:API request, performs exactly one HTTP exchange and returns the
decoded envelope. Server-reported failures come back in ``Envelope.errors``;
only client-side failures are raised (see ``allsrv_client.errors``).
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx

from allsrv_client.config.settings import ClientSettings
from allsrv_client.errors import IDRequiredError
from allsrv_client.models.envelope import Envelope, RequestEnvelope, request_for
from allsrv_client.models.foo import (
    RESOURCE_TYPE_FOO,
    FooAttrs,
    FooCreateAttrs,
    FooUpdateAttrs,
)
from allsrv_client.transport.codec import Transport

logger = logging.getLogger(__name__)

A = TypeVar("A")

FOOS_COLLECTION = "/v1/foos"


def resource_path(addr: str, collection: str, resource_id: str = "") -> str:
    """Join base address, collection segment and optional id."""
    url = addr.rstrip("/") + collection
    if not resource_id:
        return url
    return f"{url}/{resource_id}"


class AllsrvClient:
    """HTTP client for the allsrv JSON:API service.

    Parameters
    ----------
    settings:
        Immutable client configuration (address, origin, SDK version...).
    http:
        Optional httpx client to send requests with. When omitted, the client
        creates one and closes it on ``aclose()``; a caller-provided client is
        left open.

    Example:
        >>> async with AllsrvClient(ClientSettings(addr="http://localhost:8091", origin="me")) as c:
        ...     resp = await c.create_foo(FooCreateAttrs(name="a", note="b"))
        ...     resp.data.id
    """

    def __init__(
        self,
        settings: ClientSettings,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=settings.timeout_seconds)
        self._transport = Transport(
            self._http,
            origin=settings.origin,
            user_agent=settings.user_agent,
            max_body_bytes=settings.max_response_bytes,
        )

    # ------------------------------------------------------------------
    # foo operations
    # ------------------------------------------------------------------

    async def create_foo(
        self, attrs: FooCreateAttrs, *, timeout: float | None = None
    ) -> Envelope[FooAttrs]:
        """Create a foo. The server assigns the id."""
        body = request_for(RESOURCE_TYPE_FOO, "", attrs)
        return await self._do(
            "create foo", "POST", self._foo_path(), FooAttrs, body=body, timeout=timeout
        )

    async def read_foo(self, id: str, *, timeout: float | None = None) -> Envelope[FooAttrs]:
        """Fetch a foo by id.

        Raises
        ------
        IDRequiredError
            If ``id`` is empty. No request is sent.
        """
        _require_id(id, "read foo")
        return await self._do("read foo", "GET", self._foo_path(id), FooAttrs, timeout=timeout)

    async def update_foo(
        self, id: str, attrs: FooUpdateAttrs, *, timeout: float | None = None
    ) -> Envelope[FooAttrs]:
        """Partially update a foo. Only fields set on ``attrs`` are sent.

        Raises
        ------
        IDRequiredError
            If ``id`` is empty. No request is sent.
        """
        _require_id(id, "update foo")
        body = request_for(RESOURCE_TYPE_FOO, id, attrs)
        return await self._do(
            "update foo", "PATCH", self._foo_path(id), FooAttrs, body=body, timeout=timeout
        )

    async def delete_foo(self, id: str, *, timeout: float | None = None) -> Envelope[Any]:
        """Delete a foo. The response carries no ``data``.

        Raises
        ------
        IDRequiredError
            If ``id`` is empty. No request is sent.
        """
        _require_id(id, "delete foo")
        return await self._do("delete foo", "DELETE", self._foo_path(id), Any, timeout=timeout)

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _foo_path(self, id: str = "") -> str:
        return resource_path(self._settings.addr, FOOS_COLLECTION, id)

    async def _do(
        self,
        op: str,
        method: str,
        url: str,
        attrs_type: type[A] | Any,
        body: RequestEnvelope[Any] | None = None,
        timeout: float | None = None,
    ) -> Envelope[A]:
        request = self._transport.build_request(method, url, body=body, timeout=timeout)
        return await self._transport.send(request, attrs_type, op=op, timeout=timeout)

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> AllsrvClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _require_id(id: str, op: str) -> None:
    if not id:
        logger.debug("%s rejected: empty id", op)
        raise IDRequiredError(op=op)
