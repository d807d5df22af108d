"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from schema_composer.type_declarations.declaration_loader import (
    DeclarationError,
    load_declarations,
)
from schema_composer.type_descriptors.annotation_rules import TypeDefinitionError

from .runtime_settings import Configuration, DeclarationSource, OutputSettings

DEFAULT_INDENT = 2


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    declarations = _parse_declarations_section(parsed.get("declarations"), path.parent)
    try:
        catalog = load_declarations(declarations.text)
    except (DeclarationError, TypeDefinitionError) as exc:
        raise ConfigurationError(str(exc)) from exc

    output = _parse_output_section(parsed.get("output"), available_types=set(catalog))
    return Configuration(path=path, declarations=declarations, catalog=catalog, output=output)


def _parse_declarations_section(value: Any, base_path: Path) -> DeclarationSource:
    mapping = _require_mapping(value, "declarations")
    inline = mapping.get("inline")
    path_value = mapping.get("path")
    if inline and path_value:
        raise ConfigurationError("Declarations must not set both inline and path.")
    if inline:
        if not isinstance(inline, str):
            raise ConfigurationError("Declarations inline value must be a string.")
        return DeclarationSource(text=inline, source_path=None)
    if path_value:
        if not isinstance(path_value, str):
            raise ConfigurationError("Declarations path must be a string.")
        declarations_path = _resolve_path(base_path, path_value)
        if not declarations_path.exists():
            raise ConfigurationError(f"Declarations file not found: {declarations_path}")
        text = declarations_path.read_text(encoding="utf-8")
        if not text.strip():
            raise ConfigurationError("Declarations text cannot be empty.")
        return DeclarationSource(text=text, source_path=declarations_path)
    raise ConfigurationError("Declarations require either inline or path.")


def _parse_output_section(value: Any, *, available_types: set[str]) -> OutputSettings:
    if value is None:
        return OutputSettings(indent=DEFAULT_INDENT, type_names=())
    section = _require_mapping(value, "output")
    indent = _require_positive_int(section.get("indent", DEFAULT_INDENT), "output.indent")
    type_names = _normalize_string_sequence(section.get("types"), "output.types")
    for type_name in type_names:
        if type_name not in available_types:
            raise ConfigurationError(f"output.types '{type_name}' is not a declared type.")
    return OutputSettings(indent=indent, type_names=type_names)


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
