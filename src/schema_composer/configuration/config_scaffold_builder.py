"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "schema-composer.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Configuration template for schema-composer.
# Replace every <REQUIRED> placeholder before running compose.
# Replace <OPTIONAL> placeholders only when your setup needs them.

declarations:
  # Provide either inline type declarations (YAML text) or a declarations path.
  path: "<REQUIRED>"
  # inline: "<OPTIONAL>"

output:
  # Indentation used for the rendered JSON document.
  indent: 2
  # Restrict the emitted component schemas to these declared type names.
  # types:
  #   - "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
