"""Required-list membership rules for record fields."""

from __future__ import annotations

from schema_composer.type_descriptors.descriptor_models import (
    ContainerAnnotations,
    FieldDescriptor,
)
from schema_composer.type_normalization.type_normalizer import is_optional_field_type


def is_skipped(field: FieldDescriptor) -> bool:
    """Return True when the field is left out of the schema entirely."""
    return field.annotations.skip


def is_required(field: FieldDescriptor, container: ContainerAnnotations) -> bool:
    """Return True when the field belongs in the required list.

    Any one exclusion signal is enough; signals never restore requiredness.
    """
    annotations = field.annotations
    if annotations.skip:
        return False
    return not (
        is_optional_field_type(field.value_type)
        or container.default
        or annotations.default is not None
        or annotations.skip_serializing_if
        or annotations.double_option
    )
