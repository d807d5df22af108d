"""Type normalization exports."""

from .type_normalizer import (
    ClassifiedType,
    CoreKind,
    WrapperKind,
    classify,
    core_kind,
    is_optional_field_type,
    primitive_schema,
)

__all__ = [
    "ClassifiedType",
    "CoreKind",
    "WrapperKind",
    "classify",
    "core_kind",
    "is_optional_field_type",
    "primitive_schema",
]
