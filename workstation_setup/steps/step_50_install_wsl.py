from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.wsl import install_wsl
from ..run_state import record_summary

logger = logging.getLogger(__name__)


class InstallWslStep:
    step_id = "50_install_wsl"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        if bool(cfg.get("skip_wsl", False)):
            logger.info("Skipping WSL installation (--skip-wsl)")
            return state

        ok = install_wsl(dry_run=bool(cfg.get("dry_run", False)))
        record_summary(state, self.step_id, total=1, failed=[] if ok else ["wsl"])
        return state
