from __future__ import annotations

import logging
import shutil
from typing import Any, Dict

from ..lib.command import run_cmd
from ..lib.registry import refreshed_path
from ..lib.winget import ensure_package
from ..run_state import record_summary

logger = logging.getLogger(__name__)


class InstallFontUtilityStep:
    step_id = "60_install_font_utility"

    def _run_font_command(self, command: tuple[str, ...], *, dry_run: bool) -> bool:
        # winget updates PATH in the registry; this process still has the old one.
        path = refreshed_path()
        exe = shutil.which(command[0], path=path)
        if exe is None:
            logger.warning("%s not found on PATH; run '%s' from a new shell", command[0], " ".join(command))
            return False

        r = run_cmd([exe, *command[1:]], env={"PATH": path}, dry_run=dry_run)
        if r.returncode != 0:
            logger.error("Font command failed (exit %s): %s", r.returncode, r.output.strip())
            return False
        return True

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))
        font = state["profile"].font_utility
        if font is None:
            return state

        failed: list[str] = []
        report = ensure_package(font.package, dry_run=dry_run)
        if not report.outcome.ok:
            failed.append(font.package.identifier)
        elif font.command and not self._run_font_command(font.command, dry_run=dry_run):
            failed.append(font.command[0])

        record_summary(state, self.step_id, total=1 + (1 if font.command else 0), failed=failed)
        return state
