from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"
FALLBACK_LOG_NAME = "workstation-setup.log"

_CONFIGURED_ATTR = "_workstation_setup_log_path"


def default_log_path() -> str:
    base = os.environ.get("LOCALAPPDATA") or str(Path.home() / ".local" / "state")
    return str(Path(base) / "workstation-setup" / FALLBACK_LOG_NAME)


DEFAULT_LOG_PATH = default_log_path()


def _open_log_file(log_path: str) -> tuple[logging.FileHandler, str]:
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path, encoding="utf-8"), log_path
    except OSError:
        fallback = str(Path.cwd() / FALLBACK_LOG_NAME)
        return logging.FileHandler(fallback, encoding="utf-8"), fallback


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    *,
    verbose: bool = False,
    also_console: bool = True,
) -> str:
    """Send everything to the log file and a shorter view to the console.

    The file always records DEBUG, which includes the captured output of every
    winget, PowerShell and WSL call. The console shows INFO unless ``verbose``.
    If ``log_path`` cannot be opened the file lands in the working directory.

    Only the first call configures handlers; it returns the file actually used.
    """

    root = logging.getLogger()
    if hasattr(root, _CONFIGURED_ATTR):
        return getattr(root, _CONFIGURED_ATTR)

    root.setLevel(logging.DEBUG)
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    file_handler, chosen_path = _open_log_file(log_path)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setLevel(logging.DEBUG if verbose else logging.INFO)
        console.setFormatter(fmt)
        root.addHandler(console)

    setattr(root, _CONFIGURED_ATTR, chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
