"""
Process Launcher Module

Runs external programs:
- fork() a child
- exec() the program in the child, searching PATH
- wait in the parent until that child exits or is killed

Author: YSNRFD
Version: 1.0.0
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional, List, TextIO

from ush.core.states import LoopStatus, EXIT_FAILURE
from ush.core.config_loader import Config, get_config
from ush.exceptions import ForkError, ExecError
from ush.logger import get_logger


@dataclass
class ChildResult:
    """How a launched child ended."""
    pid: int
    exit_code: Optional[int] = None
    signal: Optional[int] = None

    @property
    def signaled(self) -> bool:
        return self.signal is not None


@dataclass
class LauncherStats:
    """Counters for launched children."""
    spawned: int = 0
    reaped: int = 0
    fork_failures: int = 0
    stops_observed: int = 0


class ProcessLauncher:
    """
    Launches one external program per call and blocks until it ends.

    The exit status of the program is recorded and logged but never
    changes the interpreter's flow: every launch returns CONTINUE.

    Example:
        >>> launcher = ProcessLauncher()
        >>> launcher.launch(['ls', '-la'])
        <LoopStatus.CONTINUE: 1>
    """

    def __init__(self, stderr: Optional[TextIO] = None, config: Optional[Config] = None):
        self._stderr = stderr
        self._config = config or get_config()
        self._logger = get_logger('launcher')
        self._stats = LauncherStats()
        self._last_result: Optional[ChildResult] = None

    @property
    def stderr(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    @property
    def stats(self) -> LauncherStats:
        return self._stats

    @property
    def last_result(self) -> Optional[ChildResult]:
        return self._last_result

    def launch(self, args: List[str]) -> LoopStatus:
        """
        Run ``args[0]`` with argument vector ``args`` and wait for it.

        Args:
            args: Full token list, program name first

        Returns:
            LoopStatus.CONTINUE, whatever happened to the child
        """
        try:
            pid = self._fork()
        except ForkError as e:
            self._stats.fork_failures += 1
            self._report(e.message)
            self._logger.error("fork failed", pid=e.parent_pid, context={'program': args[0]})
            return LoopStatus.CONTINUE

        if pid == 0:
            self._run_child(args)

        self._stats.spawned += 1
        self._logger.debug(f"Spawned {args[0]}", pid=pid, context={'argv': args})

        result = self._wait(pid)
        self._stats.reaped += 1
        self._last_result = result

        if result.signaled:
            self._logger.debug("Child killed by signal", pid=pid, context={'signal': result.signal})
        else:
            self._logger.debug("Child exited", pid=pid, context={'exit_code': result.exit_code})

        return LoopStatus.CONTINUE

    def _fork(self) -> int:
        # Buffered output would otherwise be written twice, once per process
        sys.stdout.flush()
        self.stderr.flush()
        try:
            return os.fork()
        except OSError as e:
            raise ForkError(e.strerror or str(e), parent_pid=os.getpid()) from e

    def _run_child(self, args: List[str]) -> None:
        """Replace the child's image; never returns."""
        try:
            try:
                self._exec(args)
            except ExecError as e:
                self._report(e.message)
        finally:
            os._exit(EXIT_FAILURE)

    def _exec(self, args: List[str]) -> None:
        try:
            os.execvp(args[0], args)
        except OSError as e:
            raise ExecError(e.strerror or str(e), pid=os.getpid(), path=args[0]) from e

    def _wait(self, pid: int) -> ChildResult:
        """Block until ``pid`` has exited or was killed; stops are not an end."""
        while True:
            _, status = os.waitpid(pid, os.WUNTRACED)

            if os.WIFEXITED(status):
                return ChildResult(pid=pid, exit_code=os.WEXITSTATUS(status))

            if os.WIFSIGNALED(status):
                return ChildResult(pid=pid, signal=os.WTERMSIG(status))

            self._stats.stops_observed += 1
            self._logger.debug("Child stopped, waiting again", pid=pid)

    def _report(self, message: str) -> None:
        stream = self.stderr
        print(f"{self._config.shell.name}: {message}", file=stream)
        stream.flush()
