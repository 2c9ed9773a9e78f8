from __future__ import annotations

import logging

from .command import run_cmd

logger = logging.getLogger(__name__)


def restart(delay_seconds: int = 5, *, dry_run: bool = False) -> None:
    logger.info("Restarting in %s seconds", delay_seconds)
    run_cmd(["shutdown", "/r", "/t", str(int(delay_seconds))], check=True, dry_run=dry_run)
