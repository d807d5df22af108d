"""Generic placeholder binding and deferred generic instantiation."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from schema_composer.schema_ir.schema_nodes import Reference, SchemaRef
from schema_composer.type_descriptors.descriptor_models import GenericPlaceholder, TypeDefinition

if TYPE_CHECKING:
    from .schema_composer import SchemaComposer


def bind_placeholder(
    placeholder: GenericPlaceholder,
    bindings: Sequence[SchemaRef],
    *,
    composer: SchemaComposer,
) -> SchemaRef:
    """Return the bound schema for ``placeholder``, or compose its unbound default."""
    if 0 <= placeholder.index < len(bindings):
        return bindings[placeholder.index]
    return composer.compose(placeholder.default)


def compose_instance(
    definition: TypeDefinition,
    bindings: Sequence[SchemaRef],
    *,
    composer: SchemaComposer,
) -> SchemaRef:
    """Compose ``definition`` as requested standalone.

    Generic definitions always yield a reference to their component name;
    whoever embeds the reference supplies bindings when resolving it.
    """
    if definition.is_generic:
        return Reference.to_component(instantiation_name(definition))
    return composer.compose_definition(definition, bindings)


def instantiation_name(definition: TypeDefinition) -> str:
    """Return the component name of a generic instantiation.

    The name uses placeholder identifiers, not bound types, so distinct
    instantiations of one generic type share it.
    """
    return definition.schema_name()
