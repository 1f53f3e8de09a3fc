"""
Shell Built-in Commands

Implements the commands the interpreter runs in-process.

Author: YSNRFD
Version: 1.0.0
"""

import os
import sys
from typing import Optional, Callable, List, TextIO

from ush.core.states import LoopStatus
from ush.core.config_loader import Config, get_config
from ush.logger import get_logger


BuiltinHandler = Callable[[List[str]], LoopStatus]


class BuiltinCommands:
    """
    Built-in shell commands.

    These commands are executed directly by the interpreter without
    creating a new process. The table is built once here and is
    read-only afterwards; lookups are exact, case-sensitive matches.

    Handlers receive the full token list, command name included.
    """

    def __init__(
        self,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        config: Optional[Config] = None
    ):
        """
        Initialize built-in commands.

        Args:
            stdout: Stream for regular output (defaults to sys.stdout)
            stderr: Stream for diagnostics (defaults to sys.stderr)
            config: Interpreter configuration (defaults to the global one)
        """
        self._stdout = stdout
        self._stderr = stderr
        self._config = config or get_config()
        self._logger = get_logger('builtins')
        self._commands: dict[str, BuiltinHandler] = {
            'cd': self.cmd_cd,
            'help': self.cmd_help,
            'exit': self.cmd_exit,
        }

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    def names(self) -> List[str]:
        """Builtin names in table order."""
        return list(self._commands)

    def is_builtin(self, name: str) -> bool:
        """Check if a command is built-in."""
        return name in self._commands

    def lookup(self, name: str) -> Optional[BuiltinHandler]:
        """Return the handler for ``name``, or None."""
        return self._commands.get(name)

    def execute(self, args: List[str]) -> LoopStatus:
        """
        Execute a built-in command.

        Args:
            args: Full token list; args[0] names the builtin

        Returns:
            The handler's loop status

        Raises:
            KeyError: If args[0] is not a builtin
        """
        handler = self.lookup(args[0])
        if handler is None:
            raise KeyError(args[0])
        self._logger.debug(f"Running builtin {args[0]}", context={'argc': len(args)})
        return handler(args)

    def _error(self, message: str) -> None:
        print(f"{self._config.shell.name}: {message}", file=self.stderr)

    # Command implementations

    def cmd_cd(self, args: List[str]) -> LoopStatus:
        """Change directory."""
        if len(args) < 2:
            self._error('expected argument to "cd"')
            return LoopStatus.CONTINUE

        try:
            os.chdir(args[1])
        except OSError as e:
            self._error(e.strerror or str(e))
            self._logger.debug("chdir failed", context={'path': args[1], 'errno': e.errno})

        return LoopStatus.CONTINUE

    def cmd_help(self, args: List[str]) -> LoopStatus:
        """Display help information."""
        out = self.stdout
        print(self._config.shell.banner, file=out)
        print("The following are built in:", file=out)

        for name in self.names():
            print(f"  {name}", file=out)

        print("Use the man command for information on other programs.", file=out)
        return LoopStatus.CONTINUE

    def cmd_exit(self, args: List[str]) -> LoopStatus:
        """Exit the shell."""
        return LoopStatus.TERMINATE_SUCCESS
