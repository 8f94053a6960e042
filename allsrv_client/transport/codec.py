"""JSON:API request/response codec over httpx.

Builds outgoing requests (method, URL, headers, encoded body) and decodes
responses into typed envelopes. A single attempt is made per call: there is
no retry and no interpretation of HTTP status codes. Callers inspect the
decoded envelope's ``errors`` list for server-reported failures.

Response handling:
    1. execute the request within the per-call deadline (failures -> TransportError)
    2. read at most ``max_body_bytes`` of the body
    3. drain and close the response on every exit path
    4. require ``Content-Type: application/json`` exactly (-> ContentTypeError)
    5. parse the bounded buffer into Envelope[A] (-> DecodeError)
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError

from allsrv_client.config.settings import DEFAULT_MAX_RESPONSE_BYTES
from allsrv_client.errors import (
    ContentTypeError,
    DecodeError,
    RequestTimeoutError,
    TransportError,
)
from allsrv_client.models.envelope import Envelope, RequestEnvelope

logger = logging.getLogger(__name__)

A = TypeVar("A")

JSON_CONTENT_TYPE = "application/json"


async def read_limited(chunks: AsyncIterator[bytes], limit: int) -> bytes:
    """Collect bytes from ``chunks`` until ``limit`` bytes have been read.

    The iterator is left suspended (not exhausted) when the limit is hit so
    the caller can drain the remainder.
    """
    buf = bytearray()
    async for chunk in chunks:
        buf += chunk[: limit - len(buf)]
        if len(buf) >= limit:
            break
    return bytes(buf)


async def _drain(chunks: AsyncIterator[bytes]) -> None:
    async for _ in chunks:
        pass


def decode_envelope(raw: bytes, attrs_type: type[A] | Any) -> Envelope[A]:
    """Parse a JSON document into ``Envelope[attrs_type]``.

    Raises
    ------
    pydantic.ValidationError
        On malformed JSON or a shape mismatch against the envelope.
    """
    return Envelope[attrs_type].model_validate_json(raw)  # type: ignore[valid-type]


class Transport:
    """Sends JSON:API requests and decodes their responses.

    Parameters
    ----------
    http:
        The httpx client used to execute requests. Connection pooling and
        default timeouts are its concern.
    origin:
        Value of the ``Origin`` header sent on every request.
    user_agent:
        Value of the ``User-Agent`` header sent on every request.
    max_body_bytes:
        Upper bound on how much of a response body is read (default 1 MiB).
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        origin: str,
        user_agent: str,
        max_body_bytes: int = DEFAULT_MAX_RESPONSE_BYTES,
    ) -> None:
        self._http = http
        self._origin = origin
        self._user_agent = user_agent
        self._max_body_bytes = max_body_bytes

    def build_request(
        self,
        method: str,
        url: str,
        body: RequestEnvelope[Any] | None = None,
        timeout: float | None = None,
    ) -> httpx.Request:
        """Build a request, JSON-encoding ``body`` when one is given.

        ``timeout`` (seconds) becomes the request's httpx per-phase timeout;
        pass the same value to :meth:`send` to bound the whole exchange.
        When omitted the httpx client's default applies.
        """
        headers = {
            "Origin": self._origin,
            "User-Agent": self._user_agent,
        }
        kwargs: dict[str, Any] = {}
        if body is not None:
            headers["Content-Type"] = JSON_CONTENT_TYPE
            kwargs["content"] = body.model_dump_json().encode("utf-8")
        if timeout is not None:
            kwargs["timeout"] = timeout

        return self._http.build_request(method, url, headers=headers, **kwargs)

    async def send(
        self,
        request: httpx.Request,
        attrs_type: type[A] | Any,
        op: str = "request",
        timeout: float | None = None,
    ) -> Envelope[A]:
        """Execute ``request`` once and decode the response envelope.

        ``timeout`` bounds the whole exchange: connecting, reading the
        bounded body and draining the remainder. ``None`` leaves only the
        httpx client's per-phase timeouts in effect.

        Raises
        ------
        RequestTimeoutError
            If the per-call deadline or a client timeout expired.
        TransportError
            On any other failure to complete the HTTP exchange.
        ContentTypeError
            If the response is not ``application/json``.
        DecodeError
            If the body is not a valid envelope.
        """
        started = time.monotonic()
        try:
            async with asyncio.timeout(timeout):
                response = await self._open(request, op)
                raw = await self._read_body(response, request, op)
        except TimeoutError as exc:
            logger.warning("%s %s %s exceeded %ss deadline", op, request.method, request.url, timeout)
            raise RequestTimeoutError(op=op, url=str(request.url), timeout=timeout) from exc

        duration_ms = round((time.monotonic() - started) * 1000, 2)
        content_type = response.headers.get("Content-Type", "")
        body_text = raw.decode("utf-8", errors="replace")

        if content_type != JSON_CONTENT_TYPE:
            logger.warning(
                "%s received content type %r (status %d)",
                op,
                content_type,
                response.status_code,
            )
            raise ContentTypeError(
                op=op,
                content_type=content_type,
                status_code=response.status_code,
                body=body_text,
            )

        try:
            envelope = decode_envelope(raw, attrs_type)
        except ValidationError as exc:
            logger.warning(
                "%s failed to decode response (status %d): %d error(s)",
                op,
                response.status_code,
                exc.error_count(),
            )
            raise DecodeError(
                op=op,
                status_code=response.status_code,
                body=body_text,
            ) from exc

        logger.debug(
            "%s %s %s -> %d",
            op,
            request.method,
            request.url.path,
            response.status_code,
            extra={
                "op": op,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
                "trace_id": envelope.meta.trace_id,
            },
        )
        return envelope

    async def _open(self, request: httpx.Request, op: str) -> httpx.Response:
        try:
            return await self._http.send(request, stream=True)
        except httpx.TimeoutException as exc:
            logger.warning("%s %s %s timed out: %s", op, request.method, request.url, exc)
            raise RequestTimeoutError(op=op, url=str(request.url)) from exc
        except httpx.HTTPError as exc:
            logger.warning("%s %s %s failed: %s", op, request.method, request.url, exc)
            raise TransportError(str(exc) or None, op=op, url=str(request.url)) from exc

    async def _read_body(self, response: httpx.Response, request: httpx.Request, op: str) -> bytes:
        """Read the bounded body, then drain and close the response."""
        chunks = response.aiter_bytes()
        try:
            raw = await read_limited(chunks, self._max_body_bytes)
            await _drain(chunks)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(
                "Timed out reading response body", op=op, url=str(request.url)
            ) from exc
        except httpx.HTTPError as exc:
            # includes content-encoding failures (httpx.DecodingError)
            logger.warning("%s failed reading response body: %s", op, exc)
            raise TransportError(
                "Failed to read response body", op=op, url=str(request.url)
            ) from exc
        finally:
            await response.aclose()
        return raw
