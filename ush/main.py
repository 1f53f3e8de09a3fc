#!/usr/bin/env python3
"""
ush - main entry point

Runs the command loop once and uses its result as the process exit code.

Usage:
    ush            interactive session
    ush --debug    same, with debug logging on stderr

Author: YSNRFD
Version: 1.0.0
"""

import sys
from typing import List, Optional

from ush.core.config_loader import get_config
from ush.logger import Logger, LogLevel
from ush.shell.shell import Shell


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for ush.

    Sequence:
    1. Initialize logging
    2. Run the command loop
    3. Return its exit code
    """
    if argv is None:
        argv = sys.argv[1:]

    config = get_config()

    if '--debug' in argv:
        level = LogLevel.DEBUG
    else:
        level = LogLevel.from_name(config.logging.level)

    Logger.initialize(
        level=level,
        log_file=config.logging.log_file,
        use_colors=config.logging.use_colors
    )

    shell = Shell(config)
    return shell.run()


if __name__ == '__main__':
    sys.exit(main())
