from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.appx import remove_app
from ..run_state import record_summary

logger = logging.getLogger(__name__)


class RemoveAppsStep:
    step_id = "30_remove_apps"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))
        names = state["profile"].remove_apps

        failed: list[str] = []
        for name in names:
            logger.info("Removing %s", name)
            if not remove_app(name, dry_run=dry_run):
                failed.append(name)

        summary = record_summary(state, self.step_id, total=len(names), failed=failed)
        logger.info("App removal: %s/%s succeeded", summary["succeeded"], summary["total"])
        return state
