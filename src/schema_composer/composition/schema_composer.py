"""Schema composition entry point."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from schema_composer.schema_ir.schema_nodes import (
    ArrayNode,
    LeafNode,
    ObjectNode,
    Reference,
    SchemaRef,
    SchemaType,
)
from schema_composer.type_descriptors.annotation_rules import UnsupportedTypeShape
from schema_composer.type_descriptors.descriptor_models import (
    ContainerAnnotations,
    GenericPlaceholder,
    Leaf,
    OpaqueRef,
    Record,
    Sum,
    TypeCatalog,
    TypeDefinition,
    TypeDescriptor,
)
from schema_composer.type_normalization.type_normalizer import (
    CoreKind,
    WrapperKind,
    classify,
    core_kind,
    primitive_schema,
)

from .enum_composer import compose_enum
from .generic_binder import bind_placeholder, compose_instance
from .record_composer import compose_record

logger = logging.getLogger(__name__)


class SchemaComposer:
    """Turns type descriptors into schema IR trees.

    Composition is synchronous and side-effect free: the same descriptor,
    catalog and bindings always yield a structurally equal tree.  Cycles in
    the type graph terminate only where a recursion guard forces a
    reference; unguarded cycles exhaust the interpreter stack.
    """

    def __init__(self, catalog: TypeCatalog | None = None) -> None:
        self.catalog = catalog if catalog is not None else TypeCatalog()

    def compose(
        self,
        descriptor: TypeDescriptor,
        bindings: Sequence[SchemaRef] = (),
        *,
        inline: bool = False,
        recursion_guard: bool = False,
    ) -> SchemaRef:
        """Compose the schema for ``descriptor``."""
        classified = classify(descriptor)
        try:
            if classified.has_map:
                schema: SchemaRef = ObjectNode(additional_properties=True)
                wrappers = classified.wrappers[: classified.wrappers.index(WrapperKind.MAP)]
            else:
                schema = self._compose_core(
                    classified.core,
                    bindings,
                    inline=inline,
                    recursion_guard=recursion_guard,
                )
                wrappers = classified.wrappers
        except UnsupportedTypeShape as exc:
            logger.warning("%s; degrading to a string schema", exc)
            return LeafNode(schema_type=SchemaType.STRING)

        for wrapper in reversed(wrappers):
            if wrapper is WrapperKind.SEQUENCE:
                schema = ArrayNode(items=schema)
        return schema

    def compose_definition(
        self,
        definition: TypeDefinition,
        bindings: Sequence[SchemaRef] = (),
    ) -> SchemaRef:
        """Compose the full schema of a named type definition."""
        return self.compose_shape(
            definition.shape,
            definition.container,
            bindings,
        )

    def compose_shape(
        self,
        shape: Record | Sum,
        container: ContainerAnnotations,
        bindings: Sequence[SchemaRef] = (),
    ) -> SchemaRef:
        """Compose a record or sum shape under the given container annotations."""
        if isinstance(shape, Sum):
            return compose_enum(
                shape.variants,
                container,
                composer=self,
                bindings=bindings,
            )
        return compose_record(
            shape,
            container,
            composer=self,
            bindings=bindings,
            recursion_guard=container.no_recursion,
        )

    def compose_instance(
        self,
        definition: TypeDefinition,
        bindings: Sequence[SchemaRef] = (),
    ) -> SchemaRef:
        """Compose a definition requested standalone, deferring generic instantiations."""
        return compose_instance(definition, bindings, composer=self)

    def _compose_core(
        self,
        core: TypeDescriptor,
        bindings: Sequence[SchemaRef],
        *,
        inline: bool,
        recursion_guard: bool,
    ) -> SchemaRef:
        kind = core_kind(core)
        if kind is CoreKind.PRIMITIVE:
            assert isinstance(core, Leaf)
            return primitive_schema(core.kind)
        if kind is CoreKind.GENERIC:
            assert isinstance(core, GenericPlaceholder)
            return bind_placeholder(core, bindings, composer=self)
        if kind is CoreKind.OPAQUE:
            assert isinstance(core, OpaqueRef)
            return self._compose_opaque(
                core,
                bindings,
                inline=inline,
                recursion_guard=recursion_guard,
            )
        assert isinstance(core, (Record, Sum))
        return self.compose_shape(core, ContainerAnnotations(), bindings)

    def _compose_opaque(
        self,
        reference: OpaqueRef,
        bindings: Sequence[SchemaRef],
        *,
        inline: bool,
        recursion_guard: bool,
    ) -> SchemaRef:
        target = Reference.to_component(self.catalog.reference_name(reference.name))
        if recursion_guard or not inline:
            return target

        definition = self.catalog.get(reference.name)
        if definition is None:
            logger.warning(
                "Cannot inline unknown type '%s'; emitting a reference", reference.name
            )
            return target
        argument_bindings = [self.compose(argument, bindings) for argument in reference.arguments]
        return self.compose_definition(definition, argument_bindings)
