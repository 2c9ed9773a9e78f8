from .step_20_install_packages import InstallPackagesStep
from .step_30_remove_apps import RemoveAppsStep
from .step_40_apply_settings import ApplySettingsStep
from .step_50_install_wsl import InstallWslStep
from .step_60_install_font_utility import InstallFontUtilityStep
from .step_80_verify_packages import VerifyPackagesStep
from .step_90_finalize import FinalizeStep

__all__ = [
    "InstallPackagesStep",
    "RemoveAppsStep",
    "ApplySettingsStep",
    "InstallWslStep",
    "InstallFontUtilityStep",
    "VerifyPackagesStep",
    "FinalizeStep",
]
