from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml


def _package_root() -> Path:
    # workstation_setup/lib/manifests.py -> workstation_setup
    return Path(__file__).resolve().parents[1]


def load_yaml(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(p))
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Manifest must be a mapping/dict: {p}")
    return data


def bundled_profile_path(profile_id: str) -> Path:
    return _package_root() / "manifests" / "profiles" / f"{profile_id}.yaml"


def load_profile_manifest(profile_id: str) -> Dict[str, Any]:
    """Load one of the profiles shipped inside the package (dev, general)."""
    data = load_yaml(bundled_profile_path(profile_id))
    data.setdefault("id", profile_id)
    return data
