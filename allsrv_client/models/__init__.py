"""Public models for the allsrv client."""

from allsrv_client.models.envelope import (
    Envelope,
    ErrorObject,
    ErrorSource,
    Meta,
    RequestEnvelope,
    Resource,
    WireModel,
    request_for,
)
from allsrv_client.models.foo import (
    RESOURCE_TYPE_FOO,
    FooAttrs,
    FooCreateAttrs,
    FooUpdateAttrs,
)

__all__ = [
    "Envelope",
    "ErrorObject",
    "ErrorSource",
    "FooAttrs",
    "FooCreateAttrs",
    "FooUpdateAttrs",
    "Meta",
    "RESOURCE_TYPE_FOO",
    "RequestEnvelope",
    "Resource",
    "WireModel",
    "request_for",
]
