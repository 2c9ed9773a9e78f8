from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.defender import set_preference
from ..lib.registry import set_dword
from ..profile import SettingToggle
from ..run_state import record_summary

logger = logging.getLogger(__name__)


class ApplySettingsStep:
    step_id = "40_apply_settings"

    def _apply(self, toggle: SettingToggle, *, dry_run: bool) -> bool:
        if toggle.kind == "defender":
            return set_preference(str(toggle.preference), toggle.value, dry_run=dry_run)
        try:
            set_dword(str(toggle.hive), str(toggle.path), str(toggle.value_name), toggle.value, dry_run=dry_run)
        except OSError as e:
            logger.error("Could not apply %s: %s", toggle.name, e)
            return False
        return True

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))
        toggles = state["profile"].settings

        failed: list[str] = []
        for toggle in toggles:
            logger.info("Applying setting: %s", toggle.name)
            if not self._apply(toggle, dry_run=dry_run):
                failed.append(toggle.name)

        summary = record_summary(state, self.step_id, total=len(toggles), failed=failed)
        logger.info("Settings: %s/%s applied", summary["succeeded"], summary["total"])
        return state
