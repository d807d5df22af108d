"""Schema IR exports."""

from .schema_nodes import (
    COMPONENTS_SCHEMA_PREFIX,
    ArrayNode,
    LeafNode,
    ObjectNode,
    Reference,
    SchemaFormat,
    SchemaNode,
    SchemaRef,
    SchemaType,
)
from .schema_serialization import render_json, to_components_document, to_document

__all__ = [
    "COMPONENTS_SCHEMA_PREFIX",
    "ArrayNode",
    "LeafNode",
    "ObjectNode",
    "Reference",
    "SchemaFormat",
    "SchemaNode",
    "SchemaRef",
    "SchemaType",
    "render_json",
    "to_components_document",
    "to_document",
]
