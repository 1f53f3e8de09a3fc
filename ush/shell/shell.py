"""
ush Shell Module

The interactive read, parse, dispatch loop.

Author: YSNRFD
Version: 1.0.0
"""

import sys
from typing import Optional, TextIO

from .reader import LineReader
from .parser import CommandParser
from .builtins import BuiltinCommands
from .dispatcher import Dispatcher
from ush.core.config_loader import Config, get_config
from ush.core.states import LoopStatus
from ush.exceptions import OutOfMemoryError
from ush.process.launcher import ProcessLauncher
from ush.logger import get_logger


class Shell:
    """
    ush Interactive Shell.

    Each cycle prints the prompt, reads a line, splits it, dispatches it
    and throws the line and tokens away. The loop stops on the first
    status other than CONTINUE.

    Example:
        >>> shell = Shell()
        >>> sys.exit(shell.run())
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        builtins=None,
        launcher=None
    ):
        self._config = config or get_config()
        self._stdout = stdout if stdout is not None else sys.stdout
        self._stderr = stderr if stderr is not None else sys.stderr
        self._logger = get_logger('shell')

        shell_config = self._config.shell
        self._reader = LineReader(
            stdin if stdin is not None else sys.stdin,
            bufsize=shell_config.line_bufsize
        )
        self._parser = CommandParser(
            delimiters=shell_config.delimiters,
            bufsize=shell_config.token_bufsize
        )
        if builtins is None:
            builtins = BuiltinCommands(self._stdout, self._stderr, self._config)
        if launcher is None:
            launcher = ProcessLauncher(self._stderr, self._config)
        self._dispatcher = Dispatcher(builtins, launcher)

        self._running = False
        self._lines_read = 0
        self._status: Optional[LoopStatus] = None

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @property
    def parser(self) -> CommandParser:
        return self._parser

    @property
    def running(self) -> bool:
        return self._running

    @property
    def lines_read(self) -> int:
        return self._lines_read

    @property
    def status(self) -> Optional[LoopStatus]:
        """Status that ended the last run, None before that."""
        return self._status

    def run(self) -> int:
        """
        Run the interactive shell.

        Returns:
            Exit code for the hosting process
        """
        self._running = True
        self._logger.info("Shell started")

        status = LoopStatus.CONTINUE
        while not status.terminates:
            self._show_prompt()
            status = self._step()

        self._running = False
        self._status = status
        self._logger.info("Shell stopped", context={'status': status.name, 'lines': self._lines_read})
        return status.exit_code

    def _show_prompt(self) -> None:
        self._stdout.write(self._config.shell.prompt)
        self._stdout.flush()

    def _step(self) -> LoopStatus:
        """Read and execute one line."""
        try:
            line = self._reader.read_line()
            if line is None:
                return LoopStatus.TERMINATE_SUCCESS
            self._lines_read += 1
            return self.execute_line(line)
        except OutOfMemoryError as e:
            return self._allocation_failed(e)
        except MemoryError:
            return self._allocation_failed(OutOfMemoryError())

    def _allocation_failed(self, error: OutOfMemoryError) -> LoopStatus:
        print(f"{self._config.shell.name}: {error.message}", file=self._stderr)
        self._logger.critical("Allocation failed", context=error.context)
        return LoopStatus.TERMINATE_ERROR

    def execute_line(self, line: str) -> LoopStatus:
        """
        Execute a command line without prompting.

        Args:
            line: Command line string

        Returns:
            Loop status of the command

        Raises:
            OutOfMemoryError: If the token storage cannot be grown
        """
        args = self._parser.split(line)
        return self._dispatcher.execute(args)


def create_shell(config: Optional[Config] = None) -> Shell:
    """Factory function to create a shell on the process's standard streams."""
    return Shell(config)
