"""File formats behind the workspace: the blob map and the settings file.

``storage.json`` is a flat JSON object of string values. ``settings.yaml`` is
a YAML mapping. Both are replaced whole through ``replace_file``.
"""

from __future__ import annotations

import fcntl
import json
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml


def read_text(path: Path) -> str:
    """File contents, or an empty string when the file does not exist."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ""


def read_string_map(path: Path) -> dict[str, str]:
    """Read a JSON object of strings. Missing or blank files read as ``{}``.

    Non-string values are dropped. Raises ``ValueError`` (``JSONDecodeError``
    included) when the file is not a JSON object.
    """
    text = read_text(path)
    if not text.strip():
        return {}
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}, got {type(data).__name__}")
    return {k: v for k, v in data.items() if isinstance(v, str)}


def read_mapping_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML mapping; anything else (or nothing) reads as ``{}``."""
    text = read_text(path)
    if not text.strip():
        return {}
    result = yaml.safe_load(text)
    return result if isinstance(result, dict) else {}


def replace_file(path: Path, content: str, suffix: str = ".tmp") -> None:
    """Swap *content* in for *path*: locked temp file in the same dir, then rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}_", suffix=suffix)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            try:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        os.replace(temp_path, path)
    except Exception:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise


def write_string_map(path: Path, data: Mapping[str, str]) -> None:
    replace_file(path, json.dumps(dict(data), indent=2, ensure_ascii=False) + "\n", suffix=".json")


def write_yaml_atomic(path: Path, data: dict[str, Any]) -> None:
    content = yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
    replace_file(path, content, suffix=".yaml")
