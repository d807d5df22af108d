"""Classification of type descriptors into wrapper chains and core types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from schema_composer.schema_ir.schema_nodes import LeafNode, SchemaFormat, SchemaType
from schema_composer.type_descriptors.annotation_rules import UnsupportedTypeShape
from schema_composer.type_descriptors.descriptor_models import (
    GenericPlaceholder,
    Indirection,
    Leaf,
    Map,
    OpaqueRef,
    Optional,
    PrimitiveKind,
    Record,
    Sequence,
    Sum,
    TypeDescriptor,
)


class WrapperKind(str, Enum):
    """Container wrappers peeled off a descriptor."""

    OPTIONAL = "optional"
    SEQUENCE = "sequence"
    MAP = "map"
    INDIRECTION = "indirection"


class CoreKind(str, Enum):
    """Kinds of fully unwrapped core types."""

    PRIMITIVE = "primitive"
    RECORD = "record"
    SUM = "sum"
    GENERIC = "generic"
    OPAQUE = "opaque"


@dataclass(frozen=True)
class ClassifiedType:
    """Wrapper chain (outermost first) and the core type beneath it."""

    wrappers: tuple[WrapperKind, ...]
    core: TypeDescriptor

    @property
    def has_map(self) -> bool:
        """Return True when a map wrapper occurs anywhere in the chain."""
        return WrapperKind.MAP in self.wrappers


_PRIMITIVE_SCHEMAS: dict[PrimitiveKind, tuple[SchemaType, SchemaFormat | None]] = {
    PrimitiveKind.INT8: (SchemaType.INTEGER, SchemaFormat.INT32),
    PrimitiveKind.INT16: (SchemaType.INTEGER, SchemaFormat.INT32),
    PrimitiveKind.INT32: (SchemaType.INTEGER, SchemaFormat.INT32),
    PrimitiveKind.ISIZE: (SchemaType.INTEGER, SchemaFormat.INT32),
    PrimitiveKind.UINT8: (SchemaType.INTEGER, SchemaFormat.INT32),
    PrimitiveKind.UINT16: (SchemaType.INTEGER, SchemaFormat.INT32),
    PrimitiveKind.UINT32: (SchemaType.INTEGER, SchemaFormat.INT32),
    PrimitiveKind.USIZE: (SchemaType.INTEGER, SchemaFormat.INT32),
    PrimitiveKind.INT64: (SchemaType.INTEGER, SchemaFormat.INT64),
    PrimitiveKind.UINT64: (SchemaType.INTEGER, SchemaFormat.INT64),
    PrimitiveKind.INT128: (SchemaType.INTEGER, None),
    PrimitiveKind.UINT128: (SchemaType.INTEGER, None),
    PrimitiveKind.FLOAT32: (SchemaType.NUMBER, SchemaFormat.FLOAT),
    PrimitiveKind.FLOAT64: (SchemaType.NUMBER, SchemaFormat.DOUBLE),
    PrimitiveKind.BOOLEAN: (SchemaType.BOOLEAN, None),
    PrimitiveKind.STRING: (SchemaType.STRING, None),
    PrimitiveKind.CHAR: (SchemaType.STRING, None),
    PrimitiveKind.DATE: (SchemaType.STRING, SchemaFormat.DATE),
    PrimitiveKind.DATE_TIME: (SchemaType.STRING, SchemaFormat.DATE_TIME),
    PrimitiveKind.TIME: (SchemaType.STRING, SchemaFormat.TIME),
    PrimitiveKind.UUID: (SchemaType.STRING, SchemaFormat.UUID),
    PrimitiveKind.PATH: (SchemaType.STRING, SchemaFormat.PATH),
    PrimitiveKind.EMAIL: (SchemaType.STRING, SchemaFormat.EMAIL),
    PrimitiveKind.URI: (SchemaType.STRING, SchemaFormat.URI),
    PrimitiveKind.URL: (SchemaType.STRING, SchemaFormat.URL),
    PrimitiveKind.IPV4: (SchemaType.STRING, SchemaFormat.IPV4),
    PrimitiveKind.IPV6: (SchemaType.STRING, SchemaFormat.IPV6),
    PrimitiveKind.HOSTNAME: (SchemaType.STRING, SchemaFormat.HOSTNAME),
}


def classify(descriptor: TypeDescriptor) -> ClassifiedType:
    """Peel container wrappers off ``descriptor``.

    Map wrappers end the chain: their key and value types are never encoded,
    so the value type is kept as the core only for inspection.
    """
    wrappers: list[WrapperKind] = []
    current = descriptor
    while True:
        if isinstance(current, Optional):
            wrappers.append(WrapperKind.OPTIONAL)
            current = current.inner
        elif isinstance(current, Indirection):
            wrappers.append(WrapperKind.INDIRECTION)
            current = current.inner
        elif isinstance(current, Sequence):
            wrappers.append(WrapperKind.SEQUENCE)
            current = current.inner
        elif isinstance(current, Map):
            wrappers.append(WrapperKind.MAP)
            current = current.value
            break
        else:
            break
    return ClassifiedType(wrappers=tuple(wrappers), core=current)


def core_kind(core: TypeDescriptor) -> CoreKind:
    """Return the kind of an unwrapped core type."""
    if isinstance(core, Leaf):
        return CoreKind.PRIMITIVE
    if isinstance(core, Record):
        return CoreKind.RECORD
    if isinstance(core, Sum):
        return CoreKind.SUM
    if isinstance(core, GenericPlaceholder):
        return CoreKind.GENERIC
    if isinstance(core, OpaqueRef):
        return CoreKind.OPAQUE
    raise UnsupportedTypeShape(f"Unsupported type shape: {core!r}")


def is_optional_field_type(descriptor: TypeDescriptor) -> bool:
    """Return True when the outermost non-indirection wrapper is optional."""
    for wrapper in classify(descriptor).wrappers:
        if wrapper is WrapperKind.INDIRECTION:
            continue
        return wrapper is WrapperKind.OPTIONAL
    return False


def primitive_schema(kind: PrimitiveKind) -> LeafNode:
    """Return the leaf schema for a primitive kind."""
    schema_type, schema_format = _PRIMITIVE_SCHEMAS.get(kind, (SchemaType.STRING, None))
    return LeafNode(schema_type=schema_type, format=schema_format)
