"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from schema_composer.type_descriptors.descriptor_models import TypeCatalog


@dataclass(frozen=True)
class DeclarationSource:
    """Normalized type declaration source."""

    text: str
    source_path: Path | None


@dataclass(frozen=True)
class OutputSettings:
    """Rendering options for composed documents."""

    indent: int
    type_names: tuple[str, ...]


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    declarations: DeclarationSource
    catalog: TypeCatalog
    output: OutputSettings
