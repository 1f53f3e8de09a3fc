"""
ush - a minimal interactive command interpreter

Reads a line, splits it into words, runs a builtin (cd, help, exit) or
launches the named program, and waits for it before prompting again.
"""

__version__ = "1.0.0"
__author__ = "YSNRFD"

from .core.states import LoopStatus
from .shell.shell import Shell, create_shell

__all__ = [
    'LoopStatus',
    'Shell',
    'create_shell',
]
