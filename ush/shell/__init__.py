"""
ush Shell Module

Provides the interactive command interpreter:
- Line reading
- Tokenizing
- Built-in commands
- Dispatch to builtins or external programs
"""

from .reader import LineReader
from .parser import CommandParser, split_line
from .builtins import BuiltinCommands
from .dispatcher import Dispatcher
from .shell import Shell, create_shell

__all__ = [
    'LineReader',
    'CommandParser',
    'split_line',
    'BuiltinCommands',
    'Dispatcher',
    'Shell',
    'create_shell',
]
