from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.winget import install_catalog
from ..run_state import record_summary

logger = logging.getLogger(__name__)


class InstallPackagesStep:
    step_id = "20_install_packages"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        profile = state["profile"]
        dry_run = bool(cfg.get("dry_run", False))

        entries = profile.packages
        logger.info("Installing %s package(s) for profile %s", len(entries), profile.profile_id)

        reports = install_catalog(entries, dry_run=dry_run)
        state.setdefault("execution", {})["installs"] = {
            r.entry.identifier: r.outcome.value for r in reports
        }

        summary = record_summary(
            state,
            self.step_id,
            total=len(reports),
            failed=[r.entry.identifier for r in reports if not r.outcome.ok],
        )
        logger.info("Packages: %s/%s succeeded", summary["succeeded"], summary["total"])
        if summary["failed"]:
            logger.warning("Failed packages: %s", ", ".join(summary["failed"]))
        return state
