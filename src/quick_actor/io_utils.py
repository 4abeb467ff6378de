"""Loading preset field values."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml


def load_presets(path: Path) -> dict[str, Any]:
    """
    Reads field values from a JSON or YAML file holding a single mapping.
    """
    if not path.exists():
        raise FileNotFoundError(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Input file {path} must contain a mapping of field names to values.")
    return {str(key): value for key, value in data.items()}


def parse_assignments(pairs: list[str]) -> dict[str, str]:
    out: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got {pair!r}")
        out[key] = value
    return out
