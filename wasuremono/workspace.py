"""Workspace root, path helpers and settings for Wasuremono."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from wasuremono.fileio import read_mapping_yaml, write_yaml_atomic
from wasuremono.models import Settings

logger = logging.getLogger(__name__)


def workspace_root() -> Path:
    """Get the workspace root directory (holds storage.json and settings.yaml)."""
    return Path(
        os.environ.get("WASUREMONO_ROOT", str(Path.home() / ".wasuremono"))
    ).expanduser().resolve()


# ── Path helpers ──────────────────────────────────────────────

def storage_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "storage.json"


def settings_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "settings.yaml"


# ── Settings ──────────────────────────────────────────────────

def load_settings(root: Path | None = None) -> Settings:
    """Load settings.yaml, falling back to defaults when missing or unreadable."""
    path = settings_path(root)
    try:
        data = read_mapping_yaml(path)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable settings %s: %s", path, e)
        return Settings()
    return Settings.from_dict(data)


def ensure_workspace(root: Path | None = None) -> Path:
    """Create the workspace directory and a default settings.yaml if missing."""
    if root is None:
        root = workspace_root()
    root.mkdir(parents=True, exist_ok=True)
    sp = settings_path(root)
    if not sp.exists():
        write_yaml_atomic(sp, Settings().to_dict())
        logger.info("Wrote default settings to %s", sp)
    return root
