"""JSON:API envelope models using Pydantic v2.

Models the top-level document, resource object, meta block and error object
of a JSON:API exchange. Every model is generic over the attribute payload,
which may be a single attribute model or a list of them:

    Envelope[FooAttrs]        -> {"meta": ..., "data": {"type", "id", "attributes": {...}}}
    Envelope[list[FooAttrs]]  -> {"meta": ..., "data": {"type", "id", "attributes": [...]}}

Both shapes go through the same class and the same decode path.

Serialization omits absent values: ``data`` when None, ``errors`` when empty,
and individual ``source`` fields when not applicable.

Relationships and links are intentionally not modeled.

Reference: https://jsonapi.org/format/
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, Generic, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    PlainSerializer,
    SerializerFunctionWrapHandler,
    ValidationInfo,
    model_serializer,
    model_validator,
)

A = TypeVar("A")

# Integer carried on the wire as a numeric string, e.g. "status": "404"
QuotedInt = Annotated[int, PlainSerializer(str, return_type=str, when_used="json")]


class WireModel(BaseModel):
    """Immutable base model that drops absent values when serialized.

    ``None`` values are always omitted. Fields listed in ``omit_when_empty``
    are also omitted when they hold an empty sequence.
    """

    model_config = ConfigDict(frozen=True)

    omit_when_empty: ClassVar[frozenset[str]] = frozenset()

    @model_serializer(mode="wrap")
    def serialize_wire(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {
            key: value
            for key, value in data.items()
            if value is not None and not (key in self.omit_when_empty and not value)
        }


# ---------------------------------------------------------------------------
# Meta & errors
# ---------------------------------------------------------------------------


class Meta(WireModel):
    """Non-standard response context: server timing and correlation id."""

    took_ms: int = 0
    trace_id: str = ""


class ErrorSource(WireModel):
    """Points at the part of the request that caused an error.

    Sources built in Python may populate at most one of ``pointer``,
    ``parameter`` or ``header``. Sources decoded from JSON are accepted as
    the server sent them.
    """

    pointer: str | None = None  # JSON pointer into the request body
    parameter: str | None = None  # query parameter name
    header: str | None = None  # header name

    @model_validator(mode="after")
    def _at_most_one(self, info: ValidationInfo) -> ErrorSource:
        if info.mode == "json":
            return self
        populated = [v for v in (self.pointer, self.parameter, self.header) if v is not None]
        if len(populated) > 1:
            raise ValueError("error source may reference only one of pointer, parameter or header")
        return self


class ErrorObject(WireModel):
    """A single server-reported error."""

    status: QuotedInt
    code: int = 0
    message: str = ""
    source: ErrorSource | None = None


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


class Resource(WireModel, Generic[A]):
    """A JSON:API resource object. ``id`` is empty only on create."""

    type: str
    id: str = ""
    attributes: A


class Envelope(WireModel, Generic[A]):
    """Top-level JSON:API response document."""

    omit_when_empty: ClassVar[frozenset[str]] = frozenset({"errors"})

    meta: Meta = Meta()
    errors: tuple[ErrorObject, ...] = ()
    data: Resource[A] | None = None

    @property
    def ok(self) -> bool:
        """True when the server reported no errors."""
        return not self.errors


class RequestEnvelope(WireModel, Generic[A]):
    """JSON:API request document wrapping ``{ data: { type, id, attributes } }``."""

    data: Resource[A]


def request_for(resource_type: str, id: str, attributes: A) -> RequestEnvelope[A]:
    """Wrap ``attributes`` in a request document, parametrized by their type."""
    attrs_type = type(attributes)
    return RequestEnvelope[attrs_type](  # type: ignore[valid-type]
        data=Resource[attrs_type](type=resource_type, id=id, attributes=attributes)  # type: ignore[valid-type]
    )
