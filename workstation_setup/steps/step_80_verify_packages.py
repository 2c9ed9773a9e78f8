from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.winget import verify_catalog

logger = logging.getLogger(__name__)


class VerifyPackagesStep:
    step_id = "80_verify_packages"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        profile = state["profile"]
        entries = list(profile.packages)
        font = profile.font_utility
        if font is not None:
            entries.append(font.package)

        logger.info("Verifying %s package(s)", len(entries))
        verdicts = verify_catalog(entries)
        state.setdefault("execution", {})["verification"] = verdicts

        present = sum(1 for v in verdicts.values() if v)
        logger.info("Verification: %s/%s present", present, len(verdicts))
        return state
