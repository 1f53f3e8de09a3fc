"""
ush Process Module

Runs external programs in child processes:
- fork/exec
- Blocking wait with stopped-child retry
"""

from .launcher import ProcessLauncher, ChildResult, LauncherStats

__all__ = [
    'ProcessLauncher',
    'ChildResult',
    'LauncherStats',
]
