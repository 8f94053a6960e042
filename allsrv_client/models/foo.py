"""Attribute models for the ``foo`` resource kind."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import Field

from allsrv_client.models.envelope import WireModel

RESOURCE_TYPE_FOO = "foo"

# Parsed as a datetime when possible, otherwise kept as the server's string
Timestamp = Annotated[datetime | str, Field(union_mode="left_to_right")]


class FooCreateAttrs(WireModel):
    """Attributes sent when creating a foo."""

    name: str
    note: str


class FooUpdateAttrs(WireModel):
    """Partial update of a foo. All fields optional.

    Fields left as None are omitted from the wire payload entirely, so the
    server can tell "not provided" apart from "provided as empty".
    """

    name: str | None = None
    note: str | None = None


class FooAttrs(WireModel):
    """Attributes returned for a stored foo."""

    name: str
    note: str
    created_at: Timestamp
    updated_at: Timestamp
