"""Type declaration exports."""

from .declaration_loader import DeclarationError, load_declarations, load_declarations_file

__all__ = [
    "DeclarationError",
    "load_declarations",
    "load_declarations_file",
]
