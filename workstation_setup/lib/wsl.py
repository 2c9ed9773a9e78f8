from __future__ import annotations

import logging

from .command import run_cmd
from .winget import is_benign

logger = logging.getLogger(__name__)


def install_wsl(*, dry_run: bool = False) -> bool:
    # wsl.exe writes UTF-16 unless told otherwise.
    r = run_cmd(["wsl", "--install"], env={"WSL_UTF8": "1"}, dry_run=dry_run)
    if r.returncode == 0:
        logger.info("WSL installation completed (a restart may be required)")
        return True
    if is_benign(r.returncode, r.output):
        logger.info("WSL is already installed")
        return True
    logger.error("WSL installation failed (exit %s): %s", r.returncode, r.output.strip())
    return False
