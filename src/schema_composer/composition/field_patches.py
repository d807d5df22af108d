"""Post-composition patches carrying field and container modifiers."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from schema_composer.schema_ir.schema_nodes import (
    PATCHABLE_NODES,
    ArrayNode,
    ObjectNode,
    SchemaRef,
)
from schema_composer.type_descriptors.descriptor_models import (
    ContainerAnnotations,
    DefaultKind,
    FieldAnnotations,
)

logger = logging.getLogger(__name__)

_CONSTRAINT_ATTRIBUTES = (
    "minimum",
    "maximum",
    "exclusive_minimum",
    "exclusive_maximum",
    "multiple_of",
    "min_length",
    "max_length",
    "pattern",
    "min_properties",
    "max_properties",
)


def field_patch(annotations: FieldAnnotations) -> dict[str, Any]:
    """Collect the schema keywords a field's annotations contribute."""
    patch: dict[str, Any] = {}
    constraints = annotations.constraints
    for attribute in _CONSTRAINT_ATTRIBUTES:
        value = getattr(constraints, attribute)
        if value is not None:
            patch[attribute] = value

    default = annotations.default
    if default is not None and default.kind is not DefaultKind.TRAIT:
        patch["default"] = default.value

    if annotations.format is not None:
        patch["format"] = annotations.format
    if annotations.description is not None:
        patch["description"] = annotations.description
    if annotations.title is not None:
        patch["title"] = annotations.title
    if annotations.example is not None:
        patch["example"] = annotations.example
    if annotations.deprecated:
        patch["deprecated"] = True
    if annotations.read_only:
        patch["read_only"] = True
    if annotations.write_only:
        patch["write_only"] = True
    if annotations.nullable is not None:
        patch["nullable"] = annotations.nullable
    return patch


def container_patch(container: ContainerAnnotations) -> dict[str, Any]:
    """Collect the schema keywords contributed by type-level annotations."""
    patch: dict[str, Any] = {}
    if container.description is not None:
        patch["description"] = container.description
    if container.title is not None:
        patch["title"] = container.title
    if container.example is not None:
        patch["example"] = container.example
    if container.deprecated:
        patch["deprecated"] = True
    return patch


def apply_patch(schema: SchemaRef, patch: dict[str, Any]) -> SchemaRef:
    """Apply ``patch`` to an inline leaf or object schema.

    References and arrays cannot carry these keywords; the patch is dropped.
    """
    if not patch:
        return schema
    if isinstance(schema, PATCHABLE_NODES):
        if "format" in patch and isinstance(schema, ObjectNode):
            patch = {key: value for key, value in patch.items() if key != "format"}
        return replace(schema, **patch)
    if isinstance(schema, ArrayNode) and set(patch) == {"description"}:
        return replace(schema, description=patch["description"])
    logger.debug(
        "Dropping schema modifiers %s on %s", sorted(patch), type(schema).__name__
    )
    return schema
