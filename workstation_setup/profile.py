from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .lib.manifests import load_profile_manifest, load_yaml

HIVES = ("HKCU", "HKLM")


@dataclass(frozen=True)
class CatalogEntry:
    identifier: str
    name: str
    extra_args: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SettingToggle:
    """A registry DWORD (kind=registry) or a Defender preference (kind=defender)."""

    name: str
    kind: str
    value: int
    hive: Optional[str] = None
    path: Optional[str] = None
    value_name: Optional[str] = None
    preference: Optional[str] = None


@dataclass(frozen=True)
class FontUtility:
    package: CatalogEntry
    command: Tuple[str, ...] = field(default_factory=tuple)


def parse_catalog(items: Any, *, section: str = "packages") -> List[CatalogEntry]:
    if items is None:
        return []
    if not isinstance(items, list):
        raise ValueError(f"{section} must be a list")

    entries: List[CatalogEntry] = []
    for idx, item in enumerate(items):
        if isinstance(item, str):
            item = {"id": item}
        if not isinstance(item, dict):
            raise ValueError(f"{section}[{idx}] must be a mapping or a string")
        identifier = str(item.get("id") or "").strip()
        if not identifier:
            raise ValueError(f"{section}[{idx}] is missing 'id'")
        name = str(item.get("name") or identifier).strip()
        extra = item.get("args") or []
        if isinstance(extra, str):
            extra = extra.split()
        if not isinstance(extra, list):
            raise ValueError(f"{section}[{idx}].args must be a list or a string")
        entries.append(CatalogEntry(identifier=identifier, name=name, extra_args=tuple(str(a) for a in extra)))
    return entries


def parse_setting(item: Any, idx: int) -> SettingToggle:
    if not isinstance(item, dict):
        raise ValueError(f"settings[{idx}] must be a mapping")
    kind = str(item.get("kind") or "registry").strip().lower()
    name = str(item.get("name") or f"setting {idx}")
    try:
        value = int(item.get("value"))
    except (TypeError, ValueError) as e:
        raise ValueError(f"settings[{idx}].value must be an integer") from e

    if kind == "registry":
        hive = str(item.get("hive") or "").upper()
        if hive not in HIVES:
            raise ValueError(f"settings[{idx}].hive must be one of {', '.join(HIVES)}")
        path = str(item.get("path") or "").strip()
        value_name = str(item.get("value_name") or "").strip()
        if not path or not value_name:
            raise ValueError(f"settings[{idx}] needs 'path' and 'value_name'")
        return SettingToggle(name=name, kind=kind, value=value, hive=hive, path=path, value_name=value_name)

    if kind == "defender":
        preference = str(item.get("preference") or "").strip()
        if not preference.isidentifier():
            raise ValueError(f"settings[{idx}].preference must be a Set-MpPreference parameter name")
        return SettingToggle(name=name, kind=kind, value=value, preference=preference)

    raise ValueError(f"settings[{idx}].kind must be 'registry' or 'defender', got {kind!r}")


@dataclass(frozen=True)
class SetupProfile:
    raw: Dict[str, Any]

    @property
    def profile_id(self) -> str:
        return str(self.raw.get("id") or "custom")

    @property
    def title(self) -> str:
        return str(self.raw.get("title") or self.profile_id)

    @property
    def packages(self) -> List[CatalogEntry]:
        return parse_catalog(self.raw.get("packages"), section="packages")

    @property
    def remove_apps(self) -> List[str]:
        items = self.raw.get("remove_apps") or []
        if not isinstance(items, list):
            raise ValueError("remove_apps must be a list")
        return [str(i).strip() for i in items if str(i).strip()]

    @property
    def settings(self) -> List[SettingToggle]:
        items = self.raw.get("settings") or []
        if not isinstance(items, list):
            raise ValueError("settings must be a list")
        return [parse_setting(item, idx) for idx, item in enumerate(items)]

    @property
    def wsl_enabled(self) -> bool:
        return bool((self.raw.get("wsl") or {}).get("enabled", False))

    @property
    def font_utility(self) -> Optional[FontUtility]:
        cfg = self.raw.get("font_utility")
        if not cfg:
            return None
        if not isinstance(cfg, dict):
            raise ValueError("font_utility must be a mapping")
        package = parse_catalog([cfg], section="font_utility")[0]
        command = cfg.get("command") or []
        if isinstance(command, str):
            command = command.split()
        return FontUtility(package=package, command=tuple(str(c) for c in command))

    @property
    def restart_prompt(self) -> bool:
        return bool((self.raw.get("finalize") or {}).get("restart_prompt", False))

    @property
    def restart_delay(self) -> int:
        return int((self.raw.get("finalize") or {}).get("restart_delay", 5))

    @property
    def banner(self) -> List[str]:
        lines = (self.raw.get("finalize") or {}).get("banner") or []
        if isinstance(lines, str):
            lines = lines.splitlines()
        return [str(line) for line in lines]


def load_profile(profile: str) -> SetupProfile:
    """Load a bundled profile by id, or any YAML profile by path."""

    p = Path(profile)
    if p.suffix.lower() in {".yaml", ".yml"}:
        raw = load_yaml(p)
    else:
        raw = load_profile_manifest(profile)
    return SetupProfile(raw=raw)
