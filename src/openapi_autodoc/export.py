"""Reading and writing OpenAPI documents as JSON or YAML."""

import json
from pathlib import Path
from typing import Any

import yaml


def detect_format(file_path: Path) -> str:
    """Pick the output format from a file name.

    Returns: 'yaml' for .yaml/.yml files, 'json' otherwise.
    """
    if file_path.suffix.lower() in (".yaml", ".yml"):
        return "yaml"
    return "json"


def dump_document(schema: dict[str, Any], fmt: str = "json") -> str:
    if fmt == "yaml":
        return yaml.safe_dump(schema, sort_keys=False, allow_unicode=True)
    return json.dumps(schema, indent=2, ensure_ascii=False) + "\n"


def load_document(file_path: Path) -> dict[str, Any]:
    """Load a JSON or YAML document (YAML is a superset of JSON)."""
    text = file_path.read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{file_path} does not contain a mapping at the top level")
    return data
