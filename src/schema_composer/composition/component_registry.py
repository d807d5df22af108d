"""Registration of composed type definitions under component names."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from schema_composer.schema_ir.schema_nodes import SchemaRef
from schema_composer.type_descriptors.descriptor_models import TypeCatalog

from .schema_composer import SchemaComposer

logger = logging.getLogger(__name__)


class UnknownTypeError(Exception):
    """Raised when a requested type name is not in the catalog."""


def build_components(
    catalog: TypeCatalog,
    *,
    composer: SchemaComposer | None = None,
    names: Iterable[str] | None = None,
) -> dict[str, SchemaRef]:
    """Compose every (or each named) definition under its component name."""
    resolved_composer = composer or SchemaComposer(catalog)
    selected = list(names) if names is not None else list(catalog)
    components: dict[str, SchemaRef] = {}
    for name in selected:
        definition = catalog.get(name)
        if definition is None:
            raise UnknownTypeError(f"Unknown type: {name}")
        component_name = definition.schema_name()
        if component_name in components:
            logger.warning("Component '%s' registered twice; keeping the last one", component_name)
        components[component_name] = resolved_composer.compose_definition(definition)
    return components
