"""
ush Core Module

Core components:
- Configuration Loader
- Loop states
"""

from .config_loader import (
    ConfigLoader,
    Config,
    ShellConfig,
    LoggingConfig,
    get_config,
)
from .states import LoopStatus, EXIT_SUCCESS, EXIT_FAILURE

__all__ = [
    # Config
    'ConfigLoader',
    'Config',
    'ShellConfig',
    'LoggingConfig',
    'get_config',
    # States
    'LoopStatus',
    'EXIT_SUCCESS',
    'EXIT_FAILURE',
]
