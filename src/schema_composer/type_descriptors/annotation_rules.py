"""Setup-time validation of type-level annotations."""

from __future__ import annotations

from schema_composer.naming.rename_rules import RenameRule

from .descriptor_models import (
    AdjacentlyTagged,
    EnumRepresentation,
    ExternallyTagged,
    InternallyTagged,
    Untagged,
)


class TypeDefinitionError(Exception):
    """Raised when a type definition carries invalid annotations."""


class ConflictingEnumRepresentation(TypeDefinitionError):
    """Raised when enum representation annotations contradict each other."""


class MissingRequiredAttribute(TypeDefinitionError):
    """Raised when an annotation requires a companion attribute that is absent."""


class UnknownRenameRule(TypeDefinitionError):
    """Raised for a case convention outside the supported rule set."""


class UnsupportedTypeShape(TypeDefinitionError):
    """Raised for a descriptor node that cannot be classified."""


def resolve_enum_representation(
    *,
    tag: str | None = None,
    content: str | None = None,
    untagged: bool = False,
) -> EnumRepresentation:
    """Resolve the enum representation from its declared attributes."""
    if untagged:
        if tag is not None:
            raise ConflictingEnumRepresentation(
                f"Untagged enum cannot declare tag '{tag}'; remove either untagged or tag."
            )
        if content is not None:
            raise ConflictingEnumRepresentation(
                f"Untagged enum cannot declare content '{content}'; "
                "remove either untagged or content."
            )
        return Untagged()
    if content is not None:
        if tag is None:
            raise MissingRequiredAttribute(
                f"Adjacently tagged enum declares content '{content}' without a tag."
            )
        if tag == content:
            raise ConflictingEnumRepresentation(
                f"Adjacently tagged enum uses '{tag}' for both tag and content."
            )
        return AdjacentlyTagged(tag=tag, content=content)
    if tag is not None:
        return InternallyTagged(tag=tag)
    return ExternallyTagged()


def parse_rename_rule(value: str) -> RenameRule:
    """Return the rename rule spelled ``value``."""
    try:
        return RenameRule(value)
    except ValueError as exc:
        valid = ", ".join(rule.value for rule in RenameRule)
        raise UnknownRenameRule(
            f"Unknown rename rule: {value}. Valid rename rules are: {valid}"
        ) from exc
