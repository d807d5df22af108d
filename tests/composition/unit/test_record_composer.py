"""Record composition tests."""

from __future__ import annotations

import logging

import pytest
from schema_composer.composition.schema_composer import SchemaComposer
from schema_composer.schema_ir.schema_nodes import ArrayNode, LeafNode, Reference
from schema_composer.schema_ir.schema_serialization import to_document
from schema_composer.type_descriptors.descriptor_models import (
    ContainerAnnotations,
    DefaultKind,
    DefaultSignal,
    FieldAnnotations,
    FieldDescriptor,
    Leaf,
    Map,
    OpaqueRef,
    Optional,
    PrimitiveKind,
    Record,
    RecordStyle,
    Sequence,
    TypeCatalog,
    TypeDefinition,
    ValidationConstraints,
)

_INT32 = Leaf(PrimitiveKind.INT32)
_STRING = Leaf(PrimitiveKind.STRING)


def _field(name: str, value_type=_STRING, **annotations) -> FieldDescriptor:
    return FieldDescriptor(
        name=name, value_type=value_type, annotations=FieldAnnotations(**annotations)
    )


def _address_catalog() -> TypeCatalog:
    return TypeCatalog(
        [
            TypeDefinition(
                name="Address",
                shape=Record(fields=(_field("street"), _field("city"))),
            )
        ]
    )


def _compose(record: Record, container: ContainerAnnotations | None = None, catalog=None):
    composer = SchemaComposer(catalog)
    return composer.compose_shape(record, container or ContainerAnnotations())


def test_named_fields_compose_properties_in_declaration_order() -> None:
    record = Record(fields=(_field("zeta"), _field("alpha", _INT32)))

    document = to_document(_compose(record))

    assert list(document["properties"]) == ["zeta", "alpha"]
    assert document["required"] == ["zeta", "alpha"]


def test_skipped_field_is_omitted_entirely() -> None:
    record = Record(fields=(_field("kept"), _field("hidden", skip=True)))

    assert to_document(_compose(record)) == {
        "type": "object",
        "properties": {"kept": {"type": "string"}},
        "required": ["kept"],
    }


def test_field_constraints_and_modifiers_patch_leaf_schema() -> None:
    record = Record(
        fields=(
            _field(
                "count",
                _INT32,
                constraints=ValidationConstraints(minimum=1, maximum=10, min_items=2),
                default=DefaultSignal(kind=DefaultKind.EXPLICIT, value=5),
                description="How many.",
                read_only=True,
            ),
            _field("email", format="email", example="a@example.com", nullable=True),
        )
    )

    assert to_document(_compose(record)) == {
        "type": "object",
        "properties": {
            "count": {
                "type": "integer",
                "format": "int32",
                "default": 5,
                "description": "How many.",
                "readOnly": True,
                "minimum": 1,
                "maximum": 10,
            },
            "email": {
                "type": "string",
                "format": "email",
                "example": "a@example.com",
                "nullable": True,
            },
        },
        "required": ["email"],
    }


def test_trait_default_removes_requiredness_without_default_value() -> None:
    record = Record(fields=(_field("flag", default=DefaultSignal(kind=DefaultKind.TRAIT)),))

    assert to_document(_compose(record)) == {
        "type": "object",
        "properties": {"flag": {"type": "string"}},
    }


def test_patches_on_references_are_dropped() -> None:
    record = Record(fields=(_field("home", OpaqueRef("Address"), description="Ignored."),))

    schema = _compose(record, catalog=_address_catalog())

    assert schema.properties["home"] == Reference.to_component("Address")


def test_inline_field_expands_catalogued_type() -> None:
    record = Record(fields=(_field("home", OpaqueRef("Address"), inline=True),))

    document = to_document(_compose(record, catalog=_address_catalog()))

    assert document["properties"]["home"] == {
        "type": "object",
        "properties": {"street": {"type": "string"}, "city": {"type": "string"}},
        "required": ["street", "city"],
    }


def test_inline_unknown_type_falls_back_to_reference(caplog: pytest.LogCaptureFixture) -> None:
    record = Record(fields=(_field("home", OpaqueRef("Elsewhere"), inline=True),))

    with caplog.at_level(logging.WARNING):
        schema = _compose(record)

    assert schema.properties["home"] == Reference.to_component("Elsewhere")
    assert "Elsewhere" in caplog.text


def test_map_fields_become_open_objects() -> None:
    record = Record(
        fields=(
            _field("labels", Map(_STRING, _INT32)),
            _field("pages", Sequence(Map(_STRING, _STRING))),
            _field("extra", Optional(Map(_STRING, OpaqueRef("Address")))),
        )
    )

    document = to_document(_compose(record))

    assert document["properties"] == {
        "labels": {"type": "object", "additionalProperties": True},
        "pages": {"type": "array", "items": {"type": "object", "additionalProperties": True}},
        "extra": {"type": "object", "additionalProperties": True},
    }
    assert document["required"] == ["labels", "pages"]


def test_container_annotations_patch_object_schema() -> None:
    container = ContainerAnnotations(
        description="A thing.",
        title="Thing",
        deprecated=True,
        additional_properties=False,
        example={"name": "x"},
    )

    assert to_document(_compose(Record(fields=(_field("name"),)), container)) == {
        "type": "object",
        "title": "Thing",
        "description": "A thing.",
        "deprecated": True,
        "example": {"name": "x"},
        "properties": {"name": {"type": "string"}},
        "required": ["name"],
        "additionalProperties": False,
    }


def test_unit_record_degrades_to_string_leaf() -> None:
    container = ContainerAnnotations(description="Marker.")

    schema = _compose(Record(style=RecordStyle.UNIT), container)

    assert schema == LeafNode(description="Marker.")


def test_positional_records_are_transparent_when_homogeneous() -> None:
    single = Record(fields=(_field("0", _INT32),), style=RecordStyle.UNNAMED)
    homogeneous = Record(
        fields=(_field("0", _INT32), _field("1", _INT32)), style=RecordStyle.UNNAMED
    )
    referenced = Record(fields=(_field("0", OpaqueRef("Address")),), style=RecordStyle.UNNAMED)

    assert to_document(_compose(single)) == {"type": "integer", "format": "int32"}
    assert to_document(_compose(homogeneous)) == {"type": "integer", "format": "int32"}
    assert _compose(referenced) == Reference.to_component("Address")


def test_positional_records_degrade_when_empty_or_heterogeneous() -> None:
    empty = Record(fields=(), style=RecordStyle.UNNAMED)
    mixed = Record(fields=(_field("0", _INT32), _field("1")), style=RecordStyle.UNNAMED)

    assert _compose(empty) == LeafNode()
    assert _compose(mixed) == ArrayNode()
    assert _compose(mixed, ContainerAnnotations(description="Pair.")) == ArrayNode(
        description="Pair."
    )


def test_recursion_guard_forces_reference_on_inline_field() -> None:
    catalog = TypeCatalog(
        [
            TypeDefinition(
                name="Node",
                shape=Record(
                    fields=(
                        _field("value", _INT32),
                        _field("next", Optional(OpaqueRef("Node")), inline=True, no_recursion=True),
                    )
                ),
            )
        ]
    )

    schema = SchemaComposer(catalog).compose_definition(catalog["Node"])

    assert schema.properties["next"] == Reference.to_component("Node")
    assert schema.required == ("value",)


def test_container_recursion_guard_applies_to_every_field() -> None:
    catalog = TypeCatalog(
        [
            TypeDefinition(
                name="Node",
                shape=Record(fields=(_field("next", OpaqueRef("Node"), inline=True),)),
                container=ContainerAnnotations(no_recursion=True),
            )
        ]
    )

    schema = SchemaComposer(catalog).compose_definition(catalog["Node"])

    assert schema.properties["next"] == Reference.to_component("Node")


def test_unguarded_inline_cycle_exhausts_recursion() -> None:
    catalog = TypeCatalog(
        [
            TypeDefinition(
                name="Node",
                shape=Record(fields=(_field("next", OpaqueRef("Node"), inline=True),)),
            )
        ]
    )

    with pytest.raises(RecursionError):
        SchemaComposer(catalog).compose_definition(catalog["Node"])
