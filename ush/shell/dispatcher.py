"""
Command Dispatcher Module

Routes a token list to a builtin handler or to the process launcher.

Author: YSNRFD
Version: 1.0.0
"""

from typing import List

from ush.core.states import LoopStatus
from ush.logger import get_logger


class Dispatcher:
    """
    Decides builtin vs external and runs the command.

    The registry only needs ``is_builtin(name)`` and ``execute(args)``,
    and the launcher only needs ``launch(args)``, so either can be
    swapped for a test double.

    Example:
        >>> dispatcher = Dispatcher(BuiltinCommands(), ProcessLauncher())
        >>> dispatcher.execute(['exit'])
        <LoopStatus.TERMINATE_SUCCESS: 2>
    """

    def __init__(self, builtins, launcher):
        self._builtins = builtins
        self._launcher = launcher
        self._logger = get_logger('dispatcher')

    @property
    def builtins(self):
        return self._builtins

    @property
    def launcher(self):
        return self._launcher

    def execute(self, args: List[str]) -> LoopStatus:
        """
        Execute a token list.

        Args:
            args: Tokens; args[0] is the command name

        Returns:
            Loop status from the builtin or the launcher
        """
        if not args:
            return LoopStatus.CONTINUE

        if self._builtins.is_builtin(args[0]):
            return self._builtins.execute(args)

        self._logger.debug(f"{args[0]} is not a builtin, launching")
        return self._launcher.launch(args)
