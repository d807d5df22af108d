"""Serialization of schema IR trees into document fragments."""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any

from .schema_nodes import ArrayNode, LeafNode, ObjectNode, Reference, SchemaRef, SchemaType

_MODIFIER_KEYS: tuple[tuple[str, str], ...] = (
    ("enum_values", "enum"),
    ("default", "default"),
    ("example", "example"),
    ("title", "title"),
    ("description", "description"),
    ("deprecated", "deprecated"),
    ("read_only", "readOnly"),
    ("write_only", "writeOnly"),
    ("nullable", "nullable"),
    ("minimum", "minimum"),
    ("maximum", "maximum"),
    ("exclusive_minimum", "exclusiveMinimum"),
    ("exclusive_maximum", "exclusiveMaximum"),
    ("multiple_of", "multipleOf"),
    ("min_length", "minLength"),
    ("max_length", "maxLength"),
    ("pattern", "pattern"),
    ("min_properties", "minProperties"),
    ("max_properties", "maxProperties"),
)


def to_document(node: SchemaRef) -> dict[str, Any]:
    """Return the JSON-compatible document fragment for ``node``."""
    if isinstance(node, Reference):
        return {"$ref": node.path}
    if isinstance(node, ArrayNode):
        document: dict[str, Any] = {"type": SchemaType.ARRAY.value}
        if node.items is not None:
            document["items"] = to_document(node.items)
        if node.description is not None:
            document["description"] = node.description
        return document
    if isinstance(node, LeafNode):
        document = {"type": _plain(node.schema_type)}
        if node.format is not None:
            document["format"] = _plain(node.format)
        document.update(_modifier_entries(node))
        return document
    if isinstance(node, ObjectNode):
        document = {"type": _plain(node.schema_type)}
        document.update(_modifier_entries(node))
        if node.properties:
            document["properties"] = {
                name: to_document(child) for name, child in node.properties.items()
            }
        if node.required:
            document["required"] = list(node.required)
        if node.additional_properties is not None:
            document["additionalProperties"] = node.additional_properties
        return document
    raise TypeError(f"Unsupported schema node: {type(node).__name__}")


def to_components_document(schemas: Mapping[str, SchemaRef]) -> dict[str, Any]:
    """Wrap named schemas as a ``components.schemas`` document."""
    return {
        "components": {"schemas": {name: to_document(node) for name, node in schemas.items()}}
    }


def render_json(document: Mapping[str, Any], *, indent: int | None = 2) -> str:
    """Render a document fragment as JSON text."""
    return json.dumps(document, indent=indent, ensure_ascii=False)


def _modifier_entries(node: LeafNode | ObjectNode) -> dict[str, Any]:
    entries: dict[str, Any] = {}
    for attribute, key in _MODIFIER_KEYS:
        value = getattr(node, attribute)
        if value is None:
            continue
        entries[key] = list(value) if attribute == "enum_values" else value
    return entries


def _plain(value: Enum | str) -> str:
    return value.value if isinstance(value, Enum) else value
