from __future__ import annotations

import argparse
import logging
from typing import Any, Callable, Dict, List, Optional

from .gate import PrerequisiteError, SetupCancelled, run_gate
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import Step, check_step_ids, run_pipeline
from .profile import SetupProfile, load_profile
from .run_state import new_state
from .steps import (
    ApplySettingsStep,
    FinalizeStep,
    InstallFontUtilityStep,
    InstallPackagesStep,
    InstallWslStep,
    RemoveAppsStep,
    VerifyPackagesStep,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PREREQUISITE = 1
EXIT_UNEXPECTED = 2


def build_steps(
    profile: SetupProfile, *, input_func: Optional[Callable[[str], str]] = None
) -> List[Step]:
    steps: List[Step] = []
    if profile.packages:
        steps.append(InstallPackagesStep())
    if profile.remove_apps:
        steps.append(RemoveAppsStep())
    if profile.settings:
        steps.append(ApplySettingsStep())
    if profile.wsl_enabled:
        steps.append(InstallWslStep())
    if profile.font_utility is not None:
        steps.append(InstallFontUtilityStep())
    if profile.packages or profile.font_utility is not None:
        steps.append(VerifyPackagesStep())
    steps.append(FinalizeStep(input_func=input_func))
    return steps


def run(
    *,
    profile: str,
    log_path: str = DEFAULT_LOG_PATH,
    skip_wsl: bool = False,
    assume_yes: bool = False,
    dry_run: bool = False,
    verbose: bool = False,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    input_func: Optional[Callable[[str], str]] = None,
    state: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Run one setup profile end to end.

    Raises PrerequisiteError when winget is missing and SetupCancelled when the
    operator declines; both happen before any change is made. Any other error
    is recorded in ``state["execution"]["errors"]`` before it propagates.
    """

    configure_logging(log_path=log_path, verbose=verbose)

    state = new_state(
        {
            "profile": profile,
            "skip_wsl": skip_wsl,
            "assume_yes": assume_yes,
            "dry_run": dry_run,
        },
        state,
    )

    try:
        setup_profile = load_profile(profile)
        state["profile"] = setup_profile
        logger.info("Profile %s (%s), dry_run=%s", setup_profile.profile_id, setup_profile.title, dry_run)

        steps = build_steps(setup_profile, input_func=input_func)
        check_step_ids(steps, start_at, stop_after)

        run_gate(state, input_func=input_func)

        result = run_pipeline(state=state, steps=steps, start_at=start_at, stop_after=stop_after)
    except SetupCancelled:
        raise
    except Exception as e:
        state["execution"]["errors"].append(
            {
                "step": state["execution"].get("current_step"),
                "error": str(e),
            }
        )
        raise
    result.state["execution"]["ran_steps"] = result.ran_steps
    return result.state


def build_parser(prog: str, default_profile: str) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=prog)
    p.add_argument(
        "--profile",
        default=default_profile,
        help=f"Bundled profile id (dev|general) or path to a YAML profile (default: {default_profile})",
    )
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the setup log")
    p.add_argument("--skip-wsl", action="store_true", help="Do not install the Windows Subsystem for Linux")
    p.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation before making changes")
    p.add_argument("--dry-run", action="store_true", help="Log changes without making them")
    p.add_argument("-v", "--verbose", action="store_true", help="Show command output on the console")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 30_remove_apps)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id")
    return p


def main(
    argv: Optional[list[str]] = None,
    *,
    prog: str = "workstation-setup",
    default_profile: str = "general",
    input_func: Optional[Callable[[str], str]] = None,
) -> int:
    args = build_parser(prog, default_profile).parse_args(argv)

    try:
        run(
            profile=args.profile,
            log_path=args.log,
            skip_wsl=bool(args.skip_wsl),
            assume_yes=bool(args.yes),
            dry_run=bool(args.dry_run),
            verbose=bool(args.verbose),
            start_at=args.start_at,
            stop_after=args.stop_after,
            input_func=input_func,
        )
    except PrerequisiteError as e:
        logger.error("%s", e)
        return EXIT_PREREQUISITE
    except SetupCancelled as e:
        logger.info("%s", e)
        return EXIT_OK
    except Exception:
        logger.exception("Setup failed")
        return EXIT_UNEXPECTED
    return EXIT_OK


def main_general(argv: Optional[list[str]] = None) -> int:
    return main(argv, prog="workstation-setup", default_profile="general")


def main_dev(argv: Optional[list[str]] = None) -> int:
    return main(argv, prog="workstation-dev-setup", default_profile="dev")


if __name__ == "__main__":
    raise SystemExit(main_general())
