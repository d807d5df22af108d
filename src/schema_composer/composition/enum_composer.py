"""Schemas for sum types under the four enum representations.

The target format has no union keyword, so every representation documents
"one of these shapes" as an object whose properties enumerate each legal
variant shape, keyed by the variant's output name.  Plain enums (unit
variants only) get the more compact encodings below; mixed enums compose
each variant's payload and wrap it according to the representation.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from typing import TYPE_CHECKING

from schema_composer.naming.rename_rules import resolve_name
from schema_composer.schema_ir.schema_nodes import (
    ArrayNode,
    LeafNode,
    ObjectNode,
    SchemaRef,
    SchemaType,
)
from schema_composer.type_descriptors.descriptor_models import (
    AdjacentlyTagged,
    ContainerAnnotations,
    EnumRepresentation,
    ExternallyTagged,
    InternallyTagged,
    Untagged,
    VariantDescriptor,
)

from .field_patches import apply_patch, container_patch, field_patch
from .record_composer import compose_named_fields

if TYPE_CHECKING:
    from .schema_composer import SchemaComposer

logger = logging.getLogger(__name__)


def compose_enum(
    variants: Sequence[VariantDescriptor],
    container: ContainerAnnotations,
    *,
    composer: SchemaComposer,
    bindings: Sequence[SchemaRef] = (),
) -> SchemaRef:
    """Compose the schema for a sum type."""
    kept = [variant for variant in variants if not variant.annotations.skip]
    names = [variant_output_name(variant, container) for variant in kept]
    representation = container.enum_representation

    if all(variant.is_unit for variant in kept):
        schema = _compose_plain_enum(names, representation)
    else:
        properties: dict[str, SchemaRef] = {}
        for variant, name in zip(kept, names):
            payload = _compose_variant_payload(
                variant,
                name,
                container,
                composer=composer,
                bindings=bindings,
            )
            properties[name] = _wrap_variant(payload, name, representation, unit=variant.is_unit)
        schema = ObjectNode(properties=properties)
    return apply_patch(schema, container_patch(container))


def variant_output_name(variant: VariantDescriptor, container: ContainerAnnotations) -> str:
    """Resolve a variant's output name; variant-level rules only affect nested fields."""
    return resolve_name(
        variant.name,
        explicit=variant.annotations.rename,
        container_rule=container.rename_all,
    )


def _compose_plain_enum(names: list[str], representation: EnumRepresentation) -> SchemaRef:
    if isinstance(representation, InternallyTagged):
        return ObjectNode(
            properties={name: _tag_only_object(representation.tag, name) for name in names}
        )
    if isinstance(representation, AdjacentlyTagged):
        return ObjectNode(
            properties={representation.tag: _string_enum(*names)},
            required=(representation.tag,),
        )
    if isinstance(representation, Untagged):
        return LeafNode(schema_type=SchemaType.NULL)
    return _string_enum(*names)


def _compose_variant_payload(
    variant: VariantDescriptor,
    name: str,
    container: ContainerAnnotations,
    *,
    composer: SchemaComposer,
    bindings: Sequence[SchemaRef],
) -> SchemaRef:
    payload = variant.payload
    if payload is None:
        return _string_enum(name)
    if isinstance(payload, tuple):
        return compose_named_fields(
            payload,
            _nested_field_rules(container),
            composer=composer,
            bindings=bindings,
            recursion_guard=container.no_recursion,
            variant_rule=variant.annotations.rename_all,
        )
    schema = composer.compose(
        payload,
        bindings,
        inline=variant.annotations.inline,
        recursion_guard=container.no_recursion or variant.annotations.no_recursion,
    )
    return apply_patch(schema, field_patch(variant.annotations))


def _wrap_variant(
    payload: SchemaRef,
    name: str,
    representation: EnumRepresentation,
    *,
    unit: bool,
) -> SchemaRef:
    if isinstance(representation, ExternallyTagged):
        return ObjectNode(properties={name: payload}, required=(name,))
    if isinstance(representation, InternallyTagged):
        tag = representation.tag
        if unit:
            return _tag_only_object(tag, name)
        if not isinstance(payload, ObjectNode):
            logger.debug(
                "Variant '%s' payload %s replaced by an object carrying tag '%s'",
                name,
                type(payload).__name__,
                tag,
            )
            return _tagged_stand_in(payload, tag, name)
        required = payload.required if tag in payload.required else payload.required + (tag,)
        return replace(
            payload,
            properties={**payload.properties, tag: _string_enum(name)},
            required=required,
        )
    if isinstance(representation, AdjacentlyTagged):
        tag, content = representation.tag, representation.content
        return ObjectNode(
            properties={tag: _string_enum(name), content: payload},
            required=(tag, content),
        )
    return payload


def _nested_field_rules(container: ContainerAnnotations) -> ContainerAnnotations:
    # Only the rules that govern fields carry over to variant payload objects.
    return ContainerAnnotations(
        rename_all=container.rename_all,
        no_recursion=container.no_recursion,
        default=container.default,
    )


def _tag_only_object(tag: str, name: str) -> ObjectNode:
    return ObjectNode(properties={tag: _string_enum(name)}, required=(tag,))


def _tagged_stand_in(payload: SchemaRef, tag: str, name: str) -> ObjectNode:
    # Only object payloads take a merged tag; anything else becomes a tag
    # object that keeps the payload's display modifiers.
    stand_in = _tag_only_object(tag, name)
    if isinstance(payload, LeafNode):
        return replace(
            stand_in,
            title=payload.title,
            description=payload.description,
            example=payload.example,
            deprecated=payload.deprecated,
        )
    if isinstance(payload, ArrayNode) and payload.description is not None:
        return replace(stand_in, description=payload.description)
    return stand_in


def _string_enum(*values: str) -> LeafNode:
    return LeafNode(schema_type=SchemaType.STRING, enum_values=tuple(values))
