"""Client-side error hierarchy.

All errors raised by the SDK extend AllsrvError. Each carries the name of the
operation that failed (``op``) plus any diagnostic details passed as keyword
arguments. Server-reported failures are NOT raised: they arrive inside the
decoded envelope's ``errors`` list and the caller inspects them.
"""

from __future__ import annotations


class AllsrvError(Exception):
    """Base error for all client SDK errors."""

    message: str = "Client error"

    def __init__(
        self, message: str | None = None, *, op: str | None = None, **kwargs: object
    ) -> None:
        self.message = message or self.__class__.message
        self.op = op
        self.details = kwargs
        super().__init__(f"{op}: {self.message}" if op else self.message)


class IDRequiredError(AllsrvError):
    """A resource id was required but empty. Raised before any network I/O."""

    message = "id is required"


class TransportError(AllsrvError):
    """The request never produced a response (connection, DNS, protocol...)."""

    message = "Transport failure"


class RequestTimeoutError(TransportError):
    """The per-call deadline expired before the exchange completed."""

    message = "Request timed out"


class ContentTypeError(AllsrvError):
    """The response did not declare ``Content-Type: application/json``."""

    message = "Invalid content type received"

    @property
    def body(self) -> str:
        return str(self.details.get("body", ""))


class DecodeError(AllsrvError):
    """The response body could not be decoded into an envelope."""

    message = "Failed to decode response body"

    @property
    def body(self) -> str:
        return str(self.details.get("body", ""))
