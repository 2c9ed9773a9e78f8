from __future__ import annotations

import ctypes
import os


def is_admin() -> bool:
    """Determine whether the current process token has administrative rights."""

    if os.name != "nt":
        return False
    try:
        return bool(ctypes.windll.shell32.IsUserAnAdmin())  # type: ignore[attr-defined]
    except Exception:
        return False
