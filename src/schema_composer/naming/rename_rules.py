"""Case-convention rename rules for field and variant identifiers."""

from __future__ import annotations

from enum import Enum


class RenameRule(str, Enum):
    """Supported case conventions, keyed by their declaration spelling."""

    LOWERCASE = "lowercase"
    UPPERCASE = "UPPERCASE"
    PASCAL_CASE = "PascalCase"
    CAMEL_CASE = "camelCase"
    SNAKE_CASE = "snake_case"
    SCREAMING_SNAKE_CASE = "SCREAMING_SNAKE_CASE"
    KEBAB_CASE = "kebab-case"
    SCREAMING_KEBAB_CASE = "SCREAMING-KEBAB-CASE"


def split_words(identifier: str) -> list[str]:
    """Split an identifier on underscores and before an uppercase letter that follows
    a lowercase letter or a digit, so ``version2Name`` becomes ``version2``, ``Name``.
    """
    words: list[str] = []
    current: list[str] = []
    previous = ""
    for char in identifier:
        if char == "_":
            if current:
                words.append("".join(current))
            current = []
        elif char.isupper() and (previous.islower() or previous.isdigit()) and current:
            words.append("".join(current))
            current = [char]
        else:
            current.append(char)
        previous = char
    if current:
        words.append("".join(current))
    return words


def apply_rename_rule(rule: RenameRule, identifier: str) -> str:
    """Return ``identifier`` transformed by ``rule``."""
    if rule is RenameRule.LOWERCASE:
        return identifier.lower()
    if rule is RenameRule.UPPERCASE:
        return identifier.upper()

    words = split_words(identifier)
    if rule is RenameRule.PASCAL_CASE:
        return "".join(_capitalize(word) for word in words)
    if rule is RenameRule.CAMEL_CASE:
        pascal = "".join(_capitalize(word) for word in words)
        return pascal[:1].lower() + pascal[1:]
    if rule is RenameRule.SNAKE_CASE:
        return "_".join(word.lower() for word in words)
    if rule is RenameRule.SCREAMING_SNAKE_CASE:
        return "_".join(word.upper() for word in words)
    if rule is RenameRule.KEBAB_CASE:
        return "-".join(word.lower() for word in words)
    return "-".join(word.upper() for word in words)


def resolve_name(
    identifier: str,
    *,
    explicit: str | None = None,
    field_rule: RenameRule | None = None,
    container_rule: RenameRule | None = None,
) -> str:
    """Resolve the output name of a field or variant.

    Precedence, highest first: an explicit rename, a rule attached to the
    enclosing variant, the container rule, the identifier unchanged.
    """
    if explicit is not None:
        return explicit
    rule = field_rule or container_rule
    if rule is None:
        return identifier
    return apply_rename_rule(rule, identifier)


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]
