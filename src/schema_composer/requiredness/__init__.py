"""Requiredness exports."""

from .requiredness_rules import is_required, is_skipped

__all__ = [
    "is_required",
    "is_skipped",
]
