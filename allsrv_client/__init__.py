"""allsrv client - typed async SDK for the allsrv JSON:API service.

Package Structure:
    - models/: JSON:API envelope models and foo attribute shapes
    - transport/: request construction and response decoding over httpx
    - config/: client settings and SDK version resolution
    - client.py: the CRUD client for the foo resource
    - errors.py: client-side error hierarchy
"""

from allsrv_client.client import AllsrvClient
from allsrv_client.config.settings import ClientSettings
from allsrv_client.errors import (
    AllsrvError,
    ContentTypeError,
    DecodeError,
    IDRequiredError,
    RequestTimeoutError,
    TransportError,
)
from allsrv_client.models import (
    Envelope,
    ErrorObject,
    ErrorSource,
    FooAttrs,
    FooCreateAttrs,
    FooUpdateAttrs,
    Meta,
    RequestEnvelope,
    Resource,
)

__all__ = [
    "AllsrvClient",
    "AllsrvError",
    "ClientSettings",
    "ContentTypeError",
    "DecodeError",
    "Envelope",
    "ErrorObject",
    "ErrorSource",
    "FooAttrs",
    "FooCreateAttrs",
    "FooUpdateAttrs",
    "IDRequiredError",
    "Meta",
    "RequestEnvelope",
    "RequestTimeoutError",
    "Resource",
    "TransportError",
]
