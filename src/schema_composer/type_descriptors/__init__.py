"""Type descriptor exports."""

from .annotation_rules import (
    ConflictingEnumRepresentation,
    MissingRequiredAttribute,
    TypeDefinitionError,
    UnknownRenameRule,
    UnsupportedTypeShape,
    parse_rename_rule,
    resolve_enum_representation,
)
from .descriptor_models import (
    AdjacentlyTagged,
    ContainerAnnotations,
    DefaultKind,
    DefaultSignal,
    EnumRepresentation,
    ExternallyTagged,
    FieldAnnotations,
    FieldDescriptor,
    GenericParam,
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
    TypeCatalog,
    TypeDefinition,
    TypeDescriptor,
    Untagged,
    ValidationConstraints,
    VariantDescriptor,
)

__all__ = [
    "AdjacentlyTagged",
    "ConflictingEnumRepresentation",
    "ContainerAnnotations",
    "DefaultKind",
    "DefaultSignal",
    "EnumRepresentation",
    "ExternallyTagged",
    "FieldAnnotations",
    "FieldDescriptor",
    "GenericParam",
    "GenericPlaceholder",
    "Indirection",
    "InternallyTagged",
    "Leaf",
    "Map",
    "MissingRequiredAttribute",
    "OpaqueRef",
    "Optional",
    "PrimitiveKind",
    "Record",
    "RecordStyle",
    "Sequence",
    "Sum",
    "TypeCatalog",
    "TypeDefinition",
    "TypeDefinitionError",
    "TypeDescriptor",
    "UnknownRenameRule",
    "UnsupportedTypeShape",
    "Untagged",
    "ValidationConstraints",
    "VariantDescriptor",
    "parse_rename_rule",
    "resolve_enum_representation",
]
