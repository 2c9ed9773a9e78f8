"""Workstation setup (winget-driven, step-based).

Core design goals:
- Install-or-skip for every catalog entry
- Lenient classification of benign package-manager errors
- One sequential pass, no persisted state
- Centralized logging
"""

__all__ = []
