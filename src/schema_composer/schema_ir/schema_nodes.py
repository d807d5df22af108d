"""Schema IR entities produced by composition."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

COMPONENTS_SCHEMA_PREFIX = "#/components/schemas/"


class SchemaType(str, Enum):
    """Schema ``type`` keyword values."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"


class SchemaFormat(str, Enum):
    """Schema ``format`` keyword values."""

    PATH = "path"
    EMAIL = "email"
    URI = "uri"
    URL = "url"
    DATE = "date"
    DATE_TIME = "date-time"
    TIME = "time"
    UUID = "uuid"
    IPV4 = "ipv4"
    IPV6 = "ipv6"
    HOSTNAME = "hostname"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT = "float"
    DOUBLE = "double"


@dataclass(frozen=True)
class Reference:
    """Pointer into the shared component registry."""

    path: str

    @classmethod
    def to_component(cls, name: str) -> Reference:
        """Build a reference to the named component schema."""
        return cls(path=f"{COMPONENTS_SCHEMA_PREFIX}{name}")


@dataclass(frozen=True, kw_only=True)
class _Modifiers:  # pylint: disable=too-many-instance-attributes
    """Keywords shared by leaf and object schemas."""

    enum_values: tuple[Any, ...] | None = None
    default: Any = None
    example: Any = None
    title: str | None = None
    description: str | None = None
    deprecated: bool | None = None
    read_only: bool | None = None
    write_only: bool | None = None
    nullable: bool | None = None
    minimum: float | None = None
    maximum: float | None = None
    exclusive_minimum: bool | None = None
    exclusive_maximum: bool | None = None
    multiple_of: float | None = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    min_properties: int | None = None
    max_properties: int | None = None


@dataclass(frozen=True, kw_only=True)
class LeafNode(_Modifiers):
    """Scalar schema."""

    schema_type: SchemaType = SchemaType.STRING
    format: SchemaFormat | str | None = None


@dataclass(frozen=True, kw_only=True)
class ObjectNode(_Modifiers):
    """Object schema with ordered properties."""

    schema_type: SchemaType = SchemaType.OBJECT
    properties: Mapping[str, SchemaRef] = field(default_factory=dict)
    required: tuple[str, ...] = ()
    additional_properties: bool | None = None


@dataclass(frozen=True, kw_only=True)
class ArrayNode:
    """Array schema; ``items`` is None when positions are untyped."""

    items: SchemaRef | None = None
    description: str | None = None


SchemaNode = Union[ObjectNode, ArrayNode, LeafNode]
SchemaRef = Union[ObjectNode, ArrayNode, LeafNode, Reference]

PATCHABLE_NODES = (LeafNode, ObjectNode)
