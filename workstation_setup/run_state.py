from __future__ import annotations

from typing import Any, Dict, Iterable, Optional


def new_state(config: Dict[str, Any], state: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Build the in-memory state shared by all steps of one run.

    A caller-supplied ``state`` dict is filled in place so the caller can
    inspect it even when the run raises.
    """

    if state is None:
        state = {}
    state["config"] = dict(config)
    state["execution"] = {}
    cfg = state["config"]
    cfg.setdefault("dry_run", False)
    cfg.setdefault("assume_yes", False)
    cfg.setdefault("skip_wsl", False)

    exe = state["execution"]
    exe.setdefault("current_step", None)
    exe.setdefault("summary", {})
    exe.setdefault("verification", {})
    exe.setdefault("errors", [])
    return state


def record_summary(
    state: Dict[str, Any],
    step_id: str,
    *,
    total: int,
    failed: Iterable[str],
) -> Dict[str, Any]:
    failed_list = list(failed)
    summary = {
        "total": total,
        "succeeded": total - len(failed_list),
        "failed": failed_list,
    }
    state.setdefault("execution", {}).setdefault("summary", {})[step_id] = summary
    return summary
