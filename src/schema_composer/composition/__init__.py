"""Composition exports."""

from .component_registry import UnknownTypeError, build_components
from .enum_composer import compose_enum, variant_output_name
from .generic_binder import bind_placeholder, compose_instance, instantiation_name
from .record_composer import (
    compose_field,
    compose_named_fields,
    compose_positional_fields,
    compose_record,
)
from .schema_composer import SchemaComposer

__all__ = [
    "SchemaComposer",
    "UnknownTypeError",
    "bind_placeholder",
    "build_components",
    "compose_enum",
    "compose_field",
    "compose_instance",
    "compose_named_fields",
    "compose_positional_fields",
    "compose_record",
    "instantiation_name",
    "variant_output_name",
]
