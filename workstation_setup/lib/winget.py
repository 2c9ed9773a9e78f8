from __future__ import annotations

import enum
import logging
import shutil
from dataclasses import dataclass
from typing import List, Sequence

from ..profile import CatalogEntry
from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)

WINGET = "winget"

# winget HRESULTs that mean the package is already in the desired state.
ALREADY_INSTALLED = 0x8A150061
UPDATE_NOT_APPLICABLE = 0x8A15002B
BENIGN_EXIT_CODES = frozenset({ALREADY_INSTALLED, UPDATE_NOT_APPLICABLE})

BENIGN_MARKERS = (
    "already installed",
    "no newer version",
    "no newer package versions",
    "nothing to do",
    "no available upgrade found",
    "no applicable upgrade found",
    "no package found matching input criteria",
)

INSTALL_FLAGS = (
    "--exact",
    "--silent",
    "--accept-package-agreements",
    "--accept-source-agreements",
)


class InstallOutcome(enum.Enum):
    SKIPPED = "skipped"
    INSTALLED = "installed"
    FAILED = "failed"

    @property
    def ok(self) -> bool:
        return self is not InstallOutcome.FAILED


@dataclass(frozen=True)
class InstallReport:
    entry: CatalogEntry
    outcome: InstallOutcome
    returncode: int = 0
    output: str = ""


def is_available() -> bool:
    return shutil.which(WINGET) is not None


def is_benign(returncode: int, output: str) -> bool:
    """True when a non-zero result means the target is already satisfied."""

    # Windows reports exit codes unsigned, other runtimes signed.
    if (returncode & 0xFFFFFFFF) in BENIGN_EXIT_CODES:
        return True
    text = (output or "").lower()
    return any(marker in text for marker in BENIGN_MARKERS)


def classify_install(returncode: int, output: str) -> InstallOutcome:
    if returncode == 0 or is_benign(returncode, output):
        return InstallOutcome.INSTALLED
    return InstallOutcome.FAILED


def is_installed(identifier: str) -> bool:
    r = run_cmd([WINGET, "list", "--id", identifier, "--exact", "--accept-source-agreements"])
    return r.returncode == 0 and identifier.lower() in r.output.lower()


def install(entry: CatalogEntry, *, dry_run: bool = False) -> CmdResult:
    argv = [WINGET, "install", "--id", entry.identifier, *INSTALL_FLAGS, *entry.extra_args]
    return run_cmd(argv, dry_run=dry_run)


def ensure_package(entry: CatalogEntry, *, dry_run: bool = False) -> InstallReport:
    """Install ``entry`` unless winget already lists it."""

    if is_installed(entry.identifier):
        logger.info("%s is already installed (%s)", entry.name, entry.identifier)
        return InstallReport(entry=entry, outcome=InstallOutcome.SKIPPED)

    logger.info("Installing %s (%s)", entry.name, entry.identifier)
    r = install(entry, dry_run=dry_run)
    outcome = classify_install(r.returncode, r.output)

    if outcome is InstallOutcome.FAILED:
        logger.error(
            "Failed to install %s (exit %s): %s", entry.name, r.returncode, r.output.strip()
        )
    elif r.returncode != 0:
        logger.info("%s already satisfied (exit %s)", entry.name, r.returncode)
    else:
        logger.info("%s installed", entry.name)

    return InstallReport(entry=entry, outcome=outcome, returncode=r.returncode, output=r.output)


def install_catalog(entries: Sequence[CatalogEntry], *, dry_run: bool = False) -> List[InstallReport]:
    return [ensure_package(entry, dry_run=dry_run) for entry in entries]


def verify_catalog(entries: Sequence[CatalogEntry]) -> dict[str, bool]:
    """Re-query every entry and report presence; never retries."""

    verdicts: dict[str, bool] = {}
    for entry in entries:
        present = is_installed(entry.identifier)
        verdicts[entry.identifier] = present
        if present:
            logger.info("%s is installed", entry.name)
        else:
            logger.warning("%s is NOT installed", entry.name)
    return verdicts
