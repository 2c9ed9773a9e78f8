"""Yes/no prompts shared by both setup entry points."""

from __future__ import annotations

from typing import Callable, Optional

PROCEED_PROMPT = "This will install and remove applications and change system settings. Proceed? [y/N]"
RESTART_PROMPT = "Setup finished. Restart now? [y/N]"


def ask_yes_no(prompt: str, *, input_func: Optional[Callable[[str], str]] = None) -> bool:
    """Ask a yes/no question; anything but y/yes (including EOF) is no."""

    if input_func is None:
        input_func = input
    try:
        response = input_func(f"{prompt} ")
    except EOFError:
        return False
    return response.strip().lower() in ("y", "yes")


def request_go_ahead(
    *,
    assume_yes: bool = False,
    dry_run: bool = False,
    input_func: Optional[Callable[[str], str]] = None,
) -> bool:
    if assume_yes or dry_run:
        return True
    return ask_yes_no(PROCEED_PROMPT, input_func=input_func)


def request_restart(*, input_func: Optional[Callable[[str], str]] = None) -> bool:
    return ask_yes_no(RESTART_PROMPT, input_func=input_func)
