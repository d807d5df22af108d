"""Object schemas for record types."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from schema_composer.naming.rename_rules import RenameRule, resolve_name
from schema_composer.requiredness.requiredness_rules import is_required, is_skipped
from schema_composer.schema_ir.schema_nodes import (
    ArrayNode,
    LeafNode,
    ObjectNode,
    SchemaRef,
    SchemaType,
)
from schema_composer.type_descriptors.descriptor_models import (
    ContainerAnnotations,
    FieldDescriptor,
    Record,
    RecordStyle,
)

from .field_patches import apply_patch, container_patch, field_patch

if TYPE_CHECKING:
    from .schema_composer import SchemaComposer


def compose_record(
    record: Record,
    container: ContainerAnnotations,
    *,
    composer: SchemaComposer,
    bindings: Sequence[SchemaRef] = (),
    recursion_guard: bool = False,
) -> SchemaRef:
    """Compose the schema of a record according to its field style."""
    if record.style is RecordStyle.UNIT:
        return apply_patch(LeafNode(schema_type=SchemaType.STRING), container_patch(container))
    if record.style is RecordStyle.UNNAMED:
        return compose_positional_fields(
            record.fields,
            container,
            composer=composer,
            bindings=bindings,
            recursion_guard=recursion_guard,
        )
    return compose_named_fields(
        record.fields,
        container,
        composer=composer,
        bindings=bindings,
        recursion_guard=recursion_guard,
    )


def compose_named_fields(
    fields: Sequence[FieldDescriptor],
    container: ContainerAnnotations,
    *,
    composer: SchemaComposer,
    bindings: Sequence[SchemaRef] = (),
    recursion_guard: bool = False,
    variant_rule: RenameRule | None = None,
) -> ObjectNode:
    """Compose an object schema from named fields.

    ``variant_rule`` is the rename rule of an enclosing sum-type variant;
    it outranks the container rule for these fields.
    """
    properties: dict[str, SchemaRef] = {}
    required: list[str] = []
    for field in fields:
        if is_skipped(field):
            continue
        name = resolve_name(
            field.name,
            explicit=field.annotations.rename,
            field_rule=variant_rule,
            container_rule=container.rename_all,
        )
        if is_required(field, container):
            required.append(name)
        properties[name] = compose_field(
            field,
            composer=composer,
            bindings=bindings,
            recursion_guard=recursion_guard or field.annotations.no_recursion,
        )

    schema = ObjectNode(
        properties=properties,
        required=tuple(required),
        additional_properties=False if container.additional_properties is False else None,
    )
    patched = apply_patch(schema, container_patch(container))
    assert isinstance(patched, ObjectNode)
    return patched


def compose_positional_fields(
    fields: Sequence[FieldDescriptor],
    container: ContainerAnnotations,
    *,
    composer: SchemaComposer,
    bindings: Sequence[SchemaRef] = (),
    recursion_guard: bool = False,
) -> SchemaRef:
    """Compose a tuple-like record.

    A single field, or fields that all share one type, compose to that
    type's schema.  Mixed types lose their positional typing and become an
    untyped array.
    """
    kept = [field for field in fields if not is_skipped(field)]
    if not kept:
        return apply_patch(LeafNode(schema_type=SchemaType.STRING), container_patch(container))

    first = kept[0]
    if all(field.value_type == first.value_type for field in kept[1:]):
        schema = compose_field(
            first,
            composer=composer,
            bindings=bindings,
            recursion_guard=recursion_guard or first.annotations.no_recursion,
        )
    else:
        schema = ArrayNode()
    return apply_patch(schema, container_patch(container))


def compose_field(
    field: FieldDescriptor,
    *,
    composer: SchemaComposer,
    bindings: Sequence[SchemaRef] = (),
    recursion_guard: bool = False,
) -> SchemaRef:
    """Compose one field's value schema and patch its modifiers onto it."""
    schema = composer.compose(
        field.value_type,
        bindings,
        inline=field.annotations.inline,
        recursion_guard=recursion_guard,
    )
    return apply_patch(schema, field_patch(field.annotations))
