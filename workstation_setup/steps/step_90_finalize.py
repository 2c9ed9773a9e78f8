from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from ..confirm import request_restart
from ..lib.power import restart

logger = logging.getLogger(__name__)


class FinalizeStep:
    step_id = "90_finalize"

    def __init__(self, input_func: Optional[Callable[[str], str]] = None) -> None:
        self.input_func = input_func

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        profile = state["profile"]
        dry_run = bool(cfg.get("dry_run", False))

        for step_id, summary in ((state.get("execution") or {}).get("summary") or {}).items():
            logger.info("Summary %s: %s/%s succeeded", step_id, summary["succeeded"], summary["total"])
        for line in profile.banner:
            logger.info("%s", line)

        if not profile.restart_prompt:
            return state

        if cfg.get("assume_yes") or dry_run:
            logger.info("Restart skipped for unattended run; restart manually to finish setup")
        elif request_restart(input_func=self.input_func):
            restart(profile.restart_delay, dry_run=dry_run)
        else:
            logger.info("Restart later to finish setup")
        return state
