from __future__ import annotations

import logging

from .command import run_powershell

logger = logging.getLogger(__name__)


def get_preference(preference: str) -> int | None:
    r = run_powershell(f"(Get-MpPreference).{preference}")
    text = r.stdout.strip()
    if r.returncode != 0 or not text:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def set_preference(preference: str, value: int, *, dry_run: bool = False) -> bool:
    """Ensure a Defender preference holds ``value``; True on success."""

    if get_preference(preference) == value:
        logger.info("Defender %s already %s", preference, value)
        return True

    r = run_powershell(f"Set-MpPreference -{preference} {int(value)}", dry_run=dry_run)
    if r.returncode != 0:
        logger.error("Set-MpPreference -%s failed (exit %s): %s", preference, r.returncode, r.output.strip())
        return False
    logger.info("Defender %s set to %s", preference, value)
    return True
