from __future__ import annotations

import logging
from typing import List, Optional

from .command import run_powershell

logger = logging.getLogger(__name__)


def _ps_quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def find_packages(name: str) -> Optional[List[str]]:
    """Return the PackageFullName of every installed package matching ``name``.

    Returns None when the query itself failed, so callers can tell a failed
    lookup apart from an app that is not installed.
    """

    r = run_powershell(
        f"Get-AppxPackage -Name {_ps_quote(name)} -ErrorAction SilentlyContinue"
        " | Select-Object -ExpandProperty PackageFullName"
    )
    if r.returncode != 0:
        logger.error("Get-AppxPackage %s failed (exit %s): %s", name, r.returncode, r.output.strip())
        return None
    return [ln.strip() for ln in r.stdout.splitlines() if ln.strip()]


def remove_app(name: str, *, dry_run: bool = False) -> bool:
    """Remove a UWP app by name. An app that is not present counts as removed."""

    packages = find_packages(name)
    if packages is None:
        return False
    if not packages:
        logger.info("%s is not present", name)
        return True

    ok = True
    for full_name in packages:
        r = run_powershell(
            f"Remove-AppxPackage -Package {_ps_quote(full_name)} -ErrorAction Stop", dry_run=dry_run
        )
        if r.returncode != 0:
            logger.error("Failed to remove %s (exit %s): %s", full_name, r.returncode, r.output.strip())
            ok = False
        else:
            logger.info("Removed %s", full_name)
    return ok
