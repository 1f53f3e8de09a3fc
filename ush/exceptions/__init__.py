"""
ush Exception Hierarchy

Each subsystem raises its own exception family. Every exception carries a
numeric error code and a context dictionary.

Architecture:
    ShellException
    └── ConfigValidationError
    ProcessException
    ├── ForkError
    └── ExecError
    MemoryException
    └── OutOfMemoryError
"""

from .shell_exceptions import (
    ShellException,
    ConfigValidationError,
)

from .process_exceptions import (
    ProcessException,
    ForkError,
    ExecError,
)

from .memory_exceptions import (
    MemoryException,
    OutOfMemoryError,
)

__all__ = [
    # Shell exceptions
    "ShellException",
    "ConfigValidationError",
    # Process exceptions
    "ProcessException",
    "ForkError",
    "ExecError",
    # Memory exceptions
    "MemoryException",
    "OutOfMemoryError",
]
