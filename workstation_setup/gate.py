from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from .confirm import request_go_ahead
from .lib import elevation, winget

logger = logging.getLogger(__name__)


class PrerequisiteError(RuntimeError):
    """A tool the whole run depends on is missing."""


class SetupCancelled(Exception):
    """The operator declined to continue."""


def check_prerequisites(state: Dict[str, Any]) -> None:
    admin = elevation.is_admin()
    state.setdefault("execution", {})["elevated"] = admin
    if not admin:
        logger.warning("Not running as Administrator; some steps may fail")

    if not winget.is_available():
        raise PrerequisiteError(
            "winget was not found on PATH. Install 'App Installer' from the Microsoft Store and retry."
        )


def run_gate(state: Dict[str, Any], *, input_func: Optional[Callable[[str], str]] = None) -> None:
    """Run all checks that must pass before anything is changed."""

    cfg = state.get("config") or {}
    check_prerequisites(state)

    if not request_go_ahead(
        assume_yes=bool(cfg.get("assume_yes", False)),
        dry_run=bool(cfg.get("dry_run", False)),
        input_func=input_func,
    ):
        raise SetupCancelled("Setup cancelled by user")
