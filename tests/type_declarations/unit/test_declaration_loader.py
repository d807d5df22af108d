"""Type declaration loader tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from schema_composer.naming.rename_rules import RenameRule
from schema_composer.type_declarations.declaration_loader import (
    DeclarationError,
    load_declarations,
    load_declarations_file,
)
from schema_composer.type_descriptors.annotation_rules import (
    ConflictingEnumRepresentation,
    MissingRequiredAttribute,
    UnknownRenameRule,
)
from schema_composer.type_descriptors.descriptor_models import (
    AdjacentlyTagged,
    DefaultKind,
    DefaultSignal,
    GenericPlaceholder,
    Indirection,
    InternallyTagged,
    Leaf,
    Map,
    OpaqueRef,
    Optional,
    PrimitiveKind,
    Record,
    RecordStyle,
    Sequence,
    Sum,
)

_DECLARATIONS = """
types:
  - name: Response
    generics:
      - {name: T, default: int32}
    rename_all: camelCase
    description: Envelope.
    fields:
      - {name: data, type: T}
      - {name: status_code, type: int32, minimum: 100, maximum: 599}
      - {name: tags, type: {list: string}, default_factory: "Vec::new"}
      - {name: meta, type: {map: [string, {box: Meta}]}, skip_serializing_if: true}
      - {name: parent, type: {optional: {ref: {name: Node, arguments: [T]}}}}
  - name: Shape
    tag: kind
    content: data
    variants:
      - {name: Empty}
      - {name: Circle, rename_all: snake_case, fields: [{name: radius, type: float64}]}
      - {name: Label, type: string, description: Text label.}
      - {name: Point, items: [int32, int32]}
  - name: Meters
    items: [float64]
  - name: Marker
"""


def test_loads_records_with_generics_and_annotations() -> None:
    catalog = load_declarations(_DECLARATIONS)

    response = catalog["Response"]
    assert response.schema_name() == "Response<T>"
    assert response.container.rename_all is RenameRule.CAMEL_CASE
    assert response.container.description == "Envelope."
    assert isinstance(response.shape, Record)
    data, status_code, tags, meta, parent = response.shape.fields
    assert data.value_type == GenericPlaceholder(
        index=0, identifier="T", default=Leaf(PrimitiveKind.INT32)
    )
    assert status_code.annotations.constraints.minimum == 100
    assert status_code.annotations.constraints.maximum == 599
    assert tags.value_type == Sequence(Leaf(PrimitiveKind.STRING))
    assert tags.annotations.default == DefaultSignal(kind=DefaultKind.FUNCTION, value="Vec::new")
    assert meta.value_type == Map(Leaf(PrimitiveKind.STRING), Indirection(OpaqueRef("Meta")))
    assert meta.annotations.skip_serializing_if is True
    assert parent.value_type == Optional(
        OpaqueRef(
            "Node",
            arguments=(
                GenericPlaceholder(index=0, identifier="T", default=Leaf(PrimitiveKind.INT32)),
            ),
        )
    )


def test_loads_sum_types_and_positional_records() -> None:
    catalog = load_declarations(_DECLARATIONS)

    shape = catalog["Shape"]
    assert shape.container.enum_representation == AdjacentlyTagged(tag="kind", content="data")
    assert isinstance(shape.shape, Sum)
    empty, circle, label, point = shape.shape.variants
    assert empty.is_unit
    assert circle.annotations.rename_all is RenameRule.SNAKE_CASE
    assert isinstance(circle.payload, tuple)
    assert label.payload == Leaf(PrimitiveKind.STRING)
    assert label.annotations.description == "Text label."
    assert isinstance(point.payload, Record)
    assert point.payload.style is RecordStyle.UNNAMED

    meters = catalog["Meters"].shape
    assert isinstance(meters, Record)
    assert meters.style is RecordStyle.UNNAMED
    assert catalog["Marker"].shape == Record(style=RecordStyle.UNIT)


def test_internal_tag_without_content() -> None:
    catalog = load_declarations(
        "types:\n  - name: Event\n    tag: type\n    variants: [{name: Started}]\n"
    )

    assert catalog["Event"].container.enum_representation == InternallyTagged(tag="type")


def test_load_declarations_file_reads_from_disk(tmp_path: Path) -> None:
    path = tmp_path / "types.yaml"
    path.write_text(_DECLARATIONS, encoding="utf-8")

    assert list(load_declarations_file(path)) == ["Response", "Shape", "Meters", "Marker"]


def test_missing_declarations_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(DeclarationError, match="not found"):
        load_declarations_file(tmp_path / "missing.yaml")


def test_untagged_with_tag_is_conflicting() -> None:
    text = "types:\n  - name: Mixed\n    untagged: true\n    tag: kind\n    variants: [{name: A}]\n"

    with pytest.raises(ConflictingEnumRepresentation, match="^Mixed: "):
        load_declarations(text)


def test_content_without_tag_is_missing_attribute() -> None:
    text = "types:\n  - name: Mixed\n    content: data\n    variants: [{name: A}]\n"

    with pytest.raises(MissingRequiredAttribute, match="Mixed"):
        load_declarations(text)


def test_unknown_rename_rule_is_rejected() -> None:
    text = "types:\n  - name: Person\n    rename_all: Title Case\n    fields: []\n"

    with pytest.raises(UnknownRenameRule, match="Title Case"):
        load_declarations(text)


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("", "must be a mapping"),
        ("types: []", "non-empty 'types' list"),
        ("types:\n  - {name: A}\n  - {name: A}\n", "Duplicate type declaration: A"),
        ("types:\n  - {name: A, fields: [{name: x}]}\n", "requires a type"),
        ("types:\n  - {name: A, fields: [{name: x, type: {tuple: int32}}]}\n", "Type expression"),
        ("types:\n  - {name: A, fields: [{name: x, type: {map: [string]}}]}\n", "map requires"),
        ("types:\n  - {name: A, fields: [{name: x, type: int32, min_length: -1}]}\n", "negative"),
        ("types:\n  - {name: A, fields: [{name: x, type: int32, minimum: low}]}\n", "number"),
        ("types:\n  - {name: A, additional_properties: sometimes}\n", "boolean"),
        ("types: [unclosed", "Failed to parse"),
    ],
)
def test_malformed_declarations_are_rejected(text: str, message: str) -> None:
    with pytest.raises(DeclarationError, match=message):
        load_declarations(text)
