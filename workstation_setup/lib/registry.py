from __future__ import annotations

import logging
import os
from typing import Any, List

try:  # pragma: no cover - only importable on Windows
    import winreg
except ImportError:  # pragma: no cover
    winreg = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)

MACHINE_ENVIRONMENT = r"SYSTEM\CurrentControlSet\Control\Session Manager\Environment"
USER_ENVIRONMENT = "Environment"


def _ensure_winreg() -> Any:
    if winreg is None:
        raise OSError("Windows registry APIs are unavailable on this platform")
    return winreg


def hive_handle(hive: str) -> Any:
    reg = _ensure_winreg()
    mapping = {
        "HKCU": reg.HKEY_CURRENT_USER,
        "HKLM": reg.HKEY_LOCAL_MACHINE,
    }
    try:
        return mapping[hive.upper()]
    except KeyError:
        raise ValueError(f"Unsupported hive: {hive}") from None


def access_mask(hive: str, access: int) -> int:
    """HKLM is always addressed through the 64-bit view, even from 32-bit Python."""

    reg = _ensure_winreg()
    if hive.upper() == "HKLM":
        return access | reg.KEY_WOW64_64KEY
    return access


def _query(hive: str, path: str, value_name: str) -> tuple[Any, int] | None:
    reg = _ensure_winreg()
    try:
        with reg.OpenKey(hive_handle(hive), path, 0, access_mask(hive, reg.KEY_READ)) as key:
            return reg.QueryValueEx(key, value_name)
    except FileNotFoundError:
        return None


def get_dword(hive: str, path: str, value_name: str) -> int | None:
    found = _query(hive, path, value_name)
    if found is None:
        return None
    try:
        return int(found[0])
    except (TypeError, ValueError):
        return None


def get_string(hive: str, path: str, value_name: str) -> str | None:
    reg = _ensure_winreg()
    found = _query(hive, path, value_name)
    if found is None:
        return None
    value, kind = found
    if kind == reg.REG_EXPAND_SZ:
        value = reg.ExpandEnvironmentStrings(value)
    return str(value)


def set_dword(hive: str, path: str, value_name: str, value: int, *, dry_run: bool = False) -> bool:
    """Ensure ``value_name`` holds ``value``, creating the key when missing.

    Returns True when a write happened, False when the value was already set.
    """

    reg = _ensure_winreg()
    current = get_dword(hive, path, value_name)
    if current == value:
        logger.info("%s\\%s\\%s already %s", hive, path, value_name, value)
        return False

    logger.info("Set %s\\%s\\%s = %s (was %s)", hive, path, value_name, value, current)
    if dry_run:
        return True
    with reg.CreateKeyEx(hive_handle(hive), path, 0, access_mask(hive, reg.KEY_SET_VALUE)) as key:
        reg.SetValueEx(key, value_name, 0, reg.REG_DWORD, int(value))
    return True


def refreshed_path() -> str:
    """PATH as a new shell would see it: machine, then user, then this process.

    Installers update the registry copy of PATH, not ours.
    """

    parts: List[str] = []
    for hive, path in (("HKLM", MACHINE_ENVIRONMENT), ("HKCU", USER_ENVIRONMENT)):
        try:
            value = get_string(hive, path, "Path")
        except OSError as e:
            logger.debug("Cannot read %s\\%s Path: %s", hive, path, e)
            continue
        if value:
            parts.extend(value.split(os.pathsep))
    parts.extend(os.environ.get("PATH", "").split(os.pathsep))

    seen: set[str] = set()
    merged: List[str] = []
    for part in parts:
        key = part.strip().lower()
        if key and key not in seen:
            seen.add(key)
            merged.append(part.strip())
    return os.pathsep.join(merged)
