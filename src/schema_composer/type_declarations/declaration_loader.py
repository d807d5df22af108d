"""Loader for declarative type definitions written in YAML or JSON."""

from __future__ import annotations

from collections.abc import Mapping
from collections.abc import Sequence as SequenceABC
from pathlib import Path
from typing import Any

import yaml

from schema_composer.type_descriptors.annotation_rules import (
    TypeDefinitionError,
    parse_rename_rule,
    resolve_enum_representation,
)
from schema_composer.type_descriptors.descriptor_models import (
    ContainerAnnotations,
    DefaultKind,
    DefaultSignal,
    FieldAnnotations,
    FieldDescriptor,
    GenericParam,
    GenericPlaceholder,
    Indirection,
    Leaf,
    Map,
    OpaqueRef,
    Optional,
    PrimitiveKind,
    Record,
    RecordStyle,
    Sequence,
    Sum,
    TypeCatalog,
    TypeDefinition,
    TypeDescriptor,
    ValidationConstraints,
    VariantDescriptor,
)

_PRIMITIVES = {kind.value: kind for kind in PrimitiveKind}
_WRAPPER_KEYS = ("optional", "list", "box", "map", "ref")
_FLOAT_CONSTRAINTS = ("minimum", "maximum", "multiple_of")
_BOOL_CONSTRAINTS = ("exclusive_minimum", "exclusive_maximum")
_INT_CONSTRAINTS = (
    "min_length",
    "max_length",
    "min_properties",
    "max_properties",
    "min_items",
    "max_items",
)


class DeclarationError(Exception):
    """Raised when a type declaration document is malformed."""


def load_declarations_file(path: Path | str) -> TypeCatalog:
    """Load a declaration document from disk."""
    declaration_path = Path(path)
    if not declaration_path.exists():
        raise DeclarationError(f"Declaration file not found: {declaration_path}")
    return load_declarations(declaration_path.read_text(encoding="utf-8"))


def load_declarations(text: str) -> TypeCatalog:
    """Parse declaration text into a type catalog."""
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DeclarationError(f"Failed to parse type declarations: {exc}") from exc

    root = _require_mapping(parsed, "declarations")
    entries = root.get("types")
    if not isinstance(entries, list) or not entries:
        raise DeclarationError("Declarations must define a non-empty 'types' list.")

    definitions: list[TypeDefinition] = []
    seen_names: set[str] = set()
    for entry in entries:
        definition = _parse_definition(entry)
        if definition.name in seen_names:
            raise DeclarationError(f"Duplicate type declaration: {definition.name}")
        seen_names.add(definition.name)
        definitions.append(definition)
    return TypeCatalog(definitions)


def _parse_definition(entry: Any) -> TypeDefinition:
    section = _require_mapping(entry, "type declaration")
    name = _require_non_empty_string(section.get("name"), "type name")
    try:
        generic_params = _parse_generic_params(section.get("generics"), name)
        generics = {param.identifier: index for index, param in enumerate(generic_params)}
        container = _parse_container(section)
        shape = _parse_shape(section, name, generic_params, generics)
    except TypeDefinitionError as exc:
        raise type(exc)(f"{name}: {exc}") from exc
    return TypeDefinition(
        name=name,
        shape=shape,
        container=container,
        generic_params=generic_params,
        schema_name_override=_optional_string(section.get("as"), f"{name}.as"),
    )


def _parse_generic_params(value: Any, type_name: str) -> tuple[GenericParam, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise DeclarationError(f"{type_name}.generics must be a list.")
    params: list[GenericParam] = []
    for item in value:
        if isinstance(item, str):
            params.append(GenericParam(identifier=_require_non_empty_string(item, "generic")))
            continue
        mapping = _require_mapping(item, f"{type_name}.generics entry")
        identifier = _require_non_empty_string(mapping.get("name"), f"{type_name}.generics.name")
        default_expr = mapping.get("default")
        if default_expr is None:
            params.append(GenericParam(identifier=identifier))
        else:
            params.append(
                GenericParam(identifier=identifier, default=_parse_type(default_expr, (), {}))
            )
    return tuple(params)


def _parse_container(section: Mapping[str, Any]) -> ContainerAnnotations:
    rename_all = section.get("rename_all")
    additional_properties = section.get("additional_properties")
    if additional_properties is not None and not isinstance(additional_properties, bool):
        raise DeclarationError("additional_properties must be a boolean.")
    return ContainerAnnotations(
        rename_all=parse_rename_rule(rename_all) if rename_all is not None else None,
        enum_representation=resolve_enum_representation(
            tag=_optional_string(section.get("tag"), "tag"),
            content=_optional_string(section.get("content"), "content"),
            untagged=bool(section.get("untagged", False)),
        ),
        description=_optional_string(section.get("description"), "description"),
        title=_optional_string(section.get("title"), "title"),
        example=section.get("example"),
        deprecated=bool(section.get("deprecated", False)),
        additional_properties=additional_properties,
        no_recursion=bool(section.get("no_recursion", False)),
        default=bool(section.get("default", False)),
        deny_unknown_fields=bool(section.get("deny_unknown_fields", False)),
    )


def _parse_shape(
    section: Mapping[str, Any],
    type_name: str,
    generic_params: tuple[GenericParam, ...],
    generics: Mapping[str, int],
) -> Record | Sum:
    if "variants" in section:
        variants = section["variants"]
        if not isinstance(variants, list):
            raise DeclarationError(f"{type_name}.variants must be a list.")
        return Sum(
            variants=tuple(
                _parse_variant(variant, generic_params, generics) for variant in variants
            )
        )
    if "fields" in section:
        return Record(fields=_parse_fields(section["fields"], generic_params, generics))
    if "items" in section:
        return Record(
            fields=_parse_items(section["items"], generic_params, generics),
            style=RecordStyle.UNNAMED,
        )
    return Record(style=RecordStyle.UNIT)


def _parse_variant(
    entry: Any,
    generic_params: tuple[GenericParam, ...],
    generics: Mapping[str, int],
) -> VariantDescriptor:
    section = _require_mapping(entry, "variant")
    name = _require_non_empty_string(section.get("name"), "variant name")
    payload: tuple[FieldDescriptor, ...] | TypeDescriptor | None = None
    if "fields" in section:
        payload = _parse_fields(section["fields"], generic_params, generics)
    elif "items" in section:
        payload = Record(
            fields=_parse_items(section["items"], generic_params, generics),
            style=RecordStyle.UNNAMED,
        )
    elif "type" in section:
        payload = _parse_type(section["type"], generic_params, generics)
    return VariantDescriptor(name=name, payload=payload, annotations=_parse_annotations(section))


def _parse_fields(
    value: Any,
    generic_params: tuple[GenericParam, ...],
    generics: Mapping[str, int],
) -> tuple[FieldDescriptor, ...]:
    if not isinstance(value, list):
        raise DeclarationError("fields must be a list.")
    fields: list[FieldDescriptor] = []
    for entry in value:
        section = _require_mapping(entry, "field")
        name = _require_non_empty_string(section.get("name"), "field name")
        if "type" not in section:
            raise DeclarationError(f"Field '{name}' requires a type.")
        fields.append(
            FieldDescriptor(
                name=name,
                value_type=_parse_type(section["type"], generic_params, generics),
                annotations=_parse_annotations(section),
            )
        )
    return tuple(fields)


def _parse_items(
    value: Any,
    generic_params: tuple[GenericParam, ...],
    generics: Mapping[str, int],
) -> tuple[FieldDescriptor, ...]:
    if not isinstance(value, list):
        raise DeclarationError("items must be a list of type expressions.")
    return tuple(
        FieldDescriptor(name=str(index), value_type=_parse_type(item, generic_params, generics))
        for index, item in enumerate(value)
    )


def _parse_type(
    expression: Any,
    generic_params: tuple[GenericParam, ...],
    generics: Mapping[str, int],
) -> TypeDescriptor:
    if isinstance(expression, str):
        identifier = expression.strip()
        if identifier in generics:
            index = generics[identifier]
            return GenericPlaceholder(
                index=index,
                identifier=identifier,
                default=generic_params[index].default,
            )
        if identifier in _PRIMITIVES:
            return Leaf(_PRIMITIVES[identifier])
        if not identifier:
            raise DeclarationError("Type expression must not be empty.")
        return OpaqueRef(name=identifier)

    mapping = _require_mapping(expression, "type expression")
    if len(mapping) != 1 or next(iter(mapping)) not in _WRAPPER_KEYS:
        raise DeclarationError(
            f"Type expression must be a name or one of {', '.join(_WRAPPER_KEYS)}: {expression!r}"
        )
    key, inner = next(iter(mapping.items()))
    if key == "optional":
        return Optional(_parse_type(inner, generic_params, generics))
    if key == "list":
        return Sequence(_parse_type(inner, generic_params, generics))
    if key == "box":
        return Indirection(_parse_type(inner, generic_params, generics))
    if key == "map":
        return _parse_map(inner, generic_params, generics)
    return _parse_ref(inner, generic_params, generics)


def _parse_map(
    value: Any,
    generic_params: tuple[GenericParam, ...],
    generics: Mapping[str, int],
) -> Map:
    if isinstance(value, Mapping):
        key_expr, value_expr = value.get("key", "string"), value.get("value")
    elif isinstance(value, SequenceABC) and not isinstance(value, str) and len(value) == 2:
        key_expr, value_expr = value[0], value[1]
    else:
        raise DeclarationError("map requires [key, value] or {key, value}.")
    if value_expr is None:
        raise DeclarationError("map requires a value type.")
    return Map(
        key=_parse_type(key_expr, generic_params, generics),
        value=_parse_type(value_expr, generic_params, generics),
    )


def _parse_ref(
    value: Any,
    generic_params: tuple[GenericParam, ...],
    generics: Mapping[str, int],
) -> OpaqueRef:
    if isinstance(value, str):
        return OpaqueRef(name=_require_non_empty_string(value, "ref"))
    mapping = _require_mapping(value, "ref")
    name = _require_non_empty_string(mapping.get("name"), "ref.name")
    arguments = mapping.get("arguments") or []
    if not isinstance(arguments, list):
        raise DeclarationError("ref.arguments must be a list.")
    return OpaqueRef(
        name=name,
        arguments=tuple(_parse_type(argument, generic_params, generics) for argument in arguments),
    )


def _parse_annotations(section: Mapping[str, Any]) -> FieldAnnotations:
    rename_all = section.get("rename_all")
    nullable = section.get("nullable")
    if nullable is not None and not isinstance(nullable, bool):
        raise DeclarationError("nullable must be a boolean.")
    return FieldAnnotations(
        skip=bool(section.get("skip", False)),
        rename=_optional_string(section.get("rename"), "rename"),
        rename_all=parse_rename_rule(rename_all) if rename_all is not None else None,
        inline=bool(section.get("inline", False)),
        no_recursion=bool(section.get("no_recursion", False)),
        default=_parse_default(section),
        skip_serializing_if=bool(section.get("skip_serializing_if", False)),
        double_option=bool(section.get("double_option", False)),
        format=_optional_string(section.get("format"), "format"),
        description=_optional_string(section.get("description"), "description"),
        title=_optional_string(section.get("title"), "title"),
        example=section.get("example"),
        deprecated=bool(section.get("deprecated", False)),
        read_only=bool(section.get("read_only", False)),
        write_only=bool(section.get("write_only", False)),
        nullable=nullable,
        constraints=_parse_constraints(section),
    )


def _parse_default(section: Mapping[str, Any]) -> DefaultSignal | None:
    if "default" in section:
        return DefaultSignal(kind=DefaultKind.EXPLICIT, value=section["default"])
    if "default_factory" in section:
        return DefaultSignal(kind=DefaultKind.FUNCTION, value=section["default_factory"])
    if section.get("default_trait"):
        return DefaultSignal(kind=DefaultKind.TRAIT)
    return None


def _parse_constraints(section: Mapping[str, Any]) -> ValidationConstraints:
    values: dict[str, Any] = {}
    for name in _FLOAT_CONSTRAINTS:
        if section.get(name) is not None:
            values[name] = _require_number(section[name], name)
    for name in _BOOL_CONSTRAINTS:
        if section.get(name) is not None:
            values[name] = bool(section[name])
    for name in _INT_CONSTRAINTS:
        if section.get(name) is not None:
            values[name] = _require_non_negative_int(section[name], name)
    if section.get("pattern") is not None:
        values["pattern"] = _require_non_empty_string(section["pattern"], "pattern")
    return ValidationConstraints(**values)


def _require_mapping(value: Any, label: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise DeclarationError(f"Declaration {label} must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise DeclarationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise DeclarationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise DeclarationError(f"{field_name} must be a string.")
    return value


def _require_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DeclarationError(f"{field_name} must be a number.")
    return value


def _require_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise DeclarationError(f"{field_name} must be an integer.")
    if value < 0:
        raise DeclarationError(f"{field_name} must not be negative.")
    return value
