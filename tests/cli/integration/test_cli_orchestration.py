"""CLI orchestration integration tests."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner
from schema_composer.cli import cli, main
from schema_composer.configuration import loader as loader_module

_TYPES = """
types:
  - name: Person
    rename_all: camelCase
    fields:
      - {name: id, type: int64}
      - {name: display_name, type: string}
      - {name: nickname, type: {optional: string}}
  - name: Node
    fields:
      - {name: value, type: int32}
      - {name: children, type: {list: Node}, no_recursion: true}
  - name: Response
    generics: [T]
    fields:
      - {name: data, type: T}
"""


def _write_config(tmp_path: Path, output: str = "") -> Path:
    (tmp_path / "types.yaml").write_text(_TYPES, encoding="utf-8")
    config_path = tmp_path / "schema-composer.yaml"
    config_path.write_text(
        'declarations:\n  path: "types.yaml"\n' + output,
        encoding="utf-8",
    )
    return config_path


def test_compose_prints_components_document(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    runner = CliRunner()

    result = runner.invoke(cli, ["compose", "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    document = json.loads(result.stdout)
    schemas = document["components"]["schemas"]
    assert list(schemas) == ["Person", "Node", "Response<T>"]
    assert schemas["Person"] == {
        "type": "object",
        "properties": {
            "id": {"type": "integer", "format": "int64"},
            "displayName": {"type": "string"},
            "nickname": {"type": "string"},
        },
        "required": ["id", "displayName"],
    }
    assert schemas["Node"]["properties"]["children"] == {
        "type": "array",
        "items": {"$ref": "#/components/schemas/Node"},
    }
    assert schemas["Response<T>"]["properties"]["data"] == {"type": "string"}


def test_compose_restricts_to_selected_types(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path, "output:\n  types: [Node, Person]\n")
    runner = CliRunner()

    configured = runner.invoke(cli, ["compose", "--config", str(config_path)])
    overridden = runner.invoke(
        cli, ["compose", "--config", str(config_path), "--type", "Response"]
    )

    assert list(json.loads(configured.stdout)["components"]["schemas"]) == ["Node", "Person"]
    assert list(json.loads(overridden.stdout)["components"]["schemas"]) == ["Response<T>"]


def test_compose_writes_output_file_with_configured_indent(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path, "output:\n  indent: 4\n")
    output_path = tmp_path / "components.json"
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["compose", "--config", str(config_path), "--output", str(output_path)],
    )

    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == str(output_path.resolve())
    text = output_path.read_text(encoding="utf-8")
    assert text.startswith('{\n    "components": {\n        "schemas": {')
    assert "Person" in json.loads(text)["components"]["schemas"]


def test_compose_unknown_type_returns_error(tmp_path: Path, capsys) -> None:
    config_path = _write_config(tmp_path)

    exit_code = main(["compose", "--config", str(config_path), "--type", "Missing"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Unknown type: Missing" in captured.err


def test_generate_config_then_compose_round_trip(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = tmp_path / "generated.yaml"

    generated = runner.invoke(cli, ["generate-config", "--output", str(config_path)])
    assert generated.exit_code == 0
    assert config_path.exists()

    (tmp_path / "types.yaml").write_text(_TYPES, encoding="utf-8")
    config_path.write_text(
        config_path.read_text(encoding="utf-8").replace("<REQUIRED>", "types.yaml"),
        encoding="utf-8",
    )

    result = runner.invoke(cli, ["--log-level", "debug", "compose", "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    assert "Person" in json.loads(result.stdout)["components"]["schemas"]


def test_compose_parses_declarations_once(tmp_path: Path, monkeypatch) -> None:
    config_path = _write_config(tmp_path)
    calls: list[str] = []
    original_load = loader_module.load_declarations

    def _counting_load(text: str):
        calls.append(text)
        return original_load(text)

    monkeypatch.setattr(loader_module, "load_declarations", _counting_load)
    runner = CliRunner()

    result = runner.invoke(cli, ["compose", "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    assert len(calls) == 1
