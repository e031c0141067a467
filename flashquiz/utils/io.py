from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

YAML_SUFFIXES = {".yaml", ".yml"}
JSON_SUFFIXES = {".json"}
DOCUMENT_SUFFIXES = YAML_SUFFIXES | JSON_SUFFIXES


def read_json(path: str | Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def read_yaml(path: str | Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def read_document(path: str | Path) -> Any:
    """Read a JSON or YAML file, chosen by suffix."""
    p = Path(path)
    if p.suffix in YAML_SUFFIXES:
        return read_yaml(p)
    if p.suffix in JSON_SUFFIXES:
        return read_json(p)
    raise ValueError(f"Expected .json, .yaml or .yml file, got: {p.suffix or p.name}")


def write_json(path: str | Path, payload: Any) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
