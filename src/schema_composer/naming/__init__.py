"""Naming exports."""

from .rename_rules import RenameRule, apply_rename_rule, resolve_name, split_words

__all__ = [
    "RenameRule",
    "apply_rename_rule",
    "resolve_name",
    "split_words",
]
