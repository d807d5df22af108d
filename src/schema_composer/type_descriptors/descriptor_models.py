"""Type descriptor entities consumed by the schema composition engine."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from schema_composer.naming.rename_rules import RenameRule


class PrimitiveKind(str, Enum):
    """Primitive leaf kinds a reflected type can bottom out at."""

    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    INT128 = "int128"
    ISIZE = "isize"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    UINT128 = "uint128"
    USIZE = "usize"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOLEAN = "boolean"
    STRING = "string"
    CHAR = "char"
    DATE = "date"
    DATE_TIME = "date_time"
    TIME = "time"
    UUID = "uuid"
    PATH = "path"
    EMAIL = "email"
    URI = "uri"
    URL = "url"
    IPV4 = "ipv4"
    IPV6 = "ipv6"
    HOSTNAME = "hostname"


class RecordStyle(str, Enum):
    """How the fields of a record are declared."""

    NAMED = "named"
    UNNAMED = "unnamed"
    UNIT = "unit"


class DefaultKind(str, Enum):
    """Source of a field default."""

    EXPLICIT = "explicit"
    FUNCTION = "function"
    TRAIT = "trait"


@dataclass(frozen=True)
class Leaf:
    """Primitive leaf type."""

    kind: PrimitiveKind


@dataclass(frozen=True)
class Optional:
    """Optional wrapper; transparent at schema level."""

    inner: TypeDescriptor


@dataclass(frozen=True)
class Sequence:
    """Homogeneous sequence wrapper."""

    inner: TypeDescriptor


@dataclass(frozen=True)
class Map:
    """Key/value map wrapper."""

    key: TypeDescriptor
    value: TypeDescriptor


@dataclass(frozen=True)
class Indirection:
    """Pointer-like wrapper; transparent at schema level."""

    inner: TypeDescriptor


@dataclass(frozen=True)
class GenericPlaceholder:
    """Generic type parameter, resolved through bindings."""

    index: int
    identifier: str = "T"
    default: TypeDescriptor = field(default_factory=lambda: Leaf(PrimitiveKind.STRING))


@dataclass(frozen=True)
class OpaqueRef:
    """Reference to a named composite type, optionally instantiated with arguments."""

    name: str
    arguments: tuple[TypeDescriptor, ...] = ()


@dataclass(frozen=True)
class ValidationConstraints:  # pylint: disable=too-many-instance-attributes
    """Validation constraints attached to a field."""

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
    min_items: int | None = None
    max_items: int | None = None


@dataclass(frozen=True)
class DefaultSignal:
    """Field default; every kind removes the field from the required list."""

    kind: DefaultKind
    value: Any = None


@dataclass(frozen=True)
class FieldAnnotations:  # pylint: disable=too-many-instance-attributes
    """Field or variant level annotations."""

    skip: bool = False
    rename: str | None = None
    rename_all: RenameRule | None = None
    inline: bool = False
    no_recursion: bool = False
    default: DefaultSignal | None = None
    skip_serializing_if: bool = False
    double_option: bool = False
    format: str | None = None
    description: str | None = None
    title: str | None = None
    example: Any = None
    deprecated: bool = False
    read_only: bool = False
    write_only: bool = False
    nullable: bool | None = None
    constraints: ValidationConstraints = field(default_factory=ValidationConstraints)


@dataclass(frozen=True)
class FieldDescriptor:
    """Named (or positional) field of a record or variant."""

    name: str
    value_type: TypeDescriptor
    annotations: FieldAnnotations = field(default_factory=FieldAnnotations)


@dataclass(frozen=True)
class Record:
    """Record type with named, positional or no fields."""

    fields: tuple[FieldDescriptor, ...] = ()
    style: RecordStyle = RecordStyle.NAMED


@dataclass(frozen=True)
class VariantDescriptor:
    """One variant of a sum type.

    ``payload`` is a tuple of named fields, a single unnamed type, or
    ``None`` for a unit variant.
    """

    name: str
    payload: tuple[FieldDescriptor, ...] | TypeDescriptor | None = None
    annotations: FieldAnnotations = field(default_factory=FieldAnnotations)

    @property
    def is_unit(self) -> bool:
        """Return True when the variant carries no payload."""
        return self.payload is None


@dataclass(frozen=True)
class Sum:
    """Sum type made of variants."""

    variants: tuple[VariantDescriptor, ...]


TypeDescriptor = Union[
    Leaf,
    Record,
    Sum,
    Optional,
    Sequence,
    Map,
    Indirection,
    GenericPlaceholder,
    OpaqueRef,
]


@dataclass(frozen=True)
class ExternallyTagged:
    """Variant name is the single key wrapping the payload."""


@dataclass(frozen=True)
class InternallyTagged:
    """Tag property merged into the variant's own object."""

    tag: str


@dataclass(frozen=True)
class AdjacentlyTagged:
    """Tag and content held side by side."""

    tag: str
    content: str


@dataclass(frozen=True)
class Untagged:
    """No discriminator at all."""


EnumRepresentation = Union[ExternallyTagged, InternallyTagged, AdjacentlyTagged, Untagged]


@dataclass(frozen=True)
class ContainerAnnotations:  # pylint: disable=too-many-instance-attributes
    """Type-level annotations."""

    rename_all: RenameRule | None = None
    enum_representation: EnumRepresentation = field(default_factory=ExternallyTagged)
    description: str | None = None
    title: str | None = None
    example: Any = None
    deprecated: bool = False
    additional_properties: bool | None = None
    no_recursion: bool = False
    default: bool = False
    deny_unknown_fields: bool = False


@dataclass(frozen=True)
class GenericParam:
    """Declared generic parameter with its unbound default."""

    identifier: str
    default: TypeDescriptor = field(default_factory=lambda: Leaf(PrimitiveKind.STRING))


@dataclass(frozen=True)
class TypeDefinition:
    """Named composite type as registered by the front-end."""

    name: str
    shape: Record | Sum
    container: ContainerAnnotations = field(default_factory=ContainerAnnotations)
    generic_params: tuple[GenericParam, ...] = ()
    schema_name_override: str | None = None

    @property
    def is_generic(self) -> bool:
        """Return True when the definition declares generic parameters."""
        return bool(self.generic_params)

    def schema_name(self) -> str:
        """Return the component name used for references and registration."""
        if self.schema_name_override:
            return self.schema_name_override
        if not self.generic_params:
            return self.name
        identifiers = ", ".join(param.identifier for param in self.generic_params)
        return f"{self.name}<{identifiers}>"


class TypeCatalog(Mapping[str, TypeDefinition]):
    """Read-only lookup of type definitions by declared name."""

    def __init__(self, definitions: tuple[TypeDefinition, ...] | list[TypeDefinition] = ()):
        self._definitions: dict[str, TypeDefinition] = {}
        for definition in definitions:
            self._definitions[definition.name] = definition

    def __getitem__(self, name: str) -> TypeDefinition:
        return self._definitions[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def reference_name(self, name: str) -> str:
        """Return the component name a reference to ``name`` should point at."""
        definition = self._definitions.get(name)
        return definition.schema_name() if definition else name
