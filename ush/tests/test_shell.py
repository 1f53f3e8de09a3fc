#!/usr/bin/env python3
"""
ush Shell Tests

Tests for the process launcher, the main loop and the entry point.
Launcher tests fork real children running standard POSIX programs.

Author: YSNRFD
Version: 1.0.0
"""

import io
import os
import signal
import sys
import unittest
from unittest import mock

from ush.core.config_loader import Config, ShellConfig
from ush.core.states import LoopStatus
from ush.exceptions import OutOfMemoryError
from ush.logger import Logger, LogLevel
from ush.process.launcher import ProcessLauncher
from ush.shell.reader import LineReader
from ush.shell.shell import Shell


MISSING_PROGRAM = 'ush-definitely-missing-program'


def setUpModule():
    Logger.initialize(level=LogLevel.CRITICAL, use_colors=False)


def exited(code):
    """waitpid status word for a normal exit."""
    return (code & 0xff) << 8


def stopped(sig):
    """waitpid status word for a stopped child."""
    return (sig << 8) | 0x7f


class RecordingLauncher:
    """Launcher double that records argument vectors."""

    def __init__(self):
        self.calls = []

    def launch(self, args):
        self.calls.append(list(args))
        return LoopStatus.CONTINUE


class TestLoopStatus(unittest.TestCase):
    """Test the loop status values."""

    def test_exit_codes(self):
        self.assertFalse(LoopStatus.CONTINUE.terminates)
        self.assertTrue(LoopStatus.TERMINATE_SUCCESS.terminates)
        self.assertTrue(LoopStatus.TERMINATE_ERROR.terminates)
        self.assertEqual(LoopStatus.TERMINATE_SUCCESS.exit_code, 0)
        self.assertEqual(LoopStatus.TERMINATE_ERROR.exit_code, 1)


@unittest.skipUnless(hasattr(os, 'fork'), "requires fork()")
class TestProcessLauncher(unittest.TestCase):
    """Test launching external programs."""

    def setUp(self):
        self.err = io.StringIO()
        self.launcher = ProcessLauncher(self.err)

    def test_successful_program(self):
        """The child is spawned, waited for and reaped."""
        status = self.launcher.launch(['true'])

        self.assertIs(status, LoopStatus.CONTINUE)
        self.assertEqual(self.launcher.last_result.exit_code, 0)
        self.assertFalse(self.launcher.last_result.signaled)
        self.assertEqual(self.launcher.stats.spawned, 1)
        self.assertEqual(self.launcher.stats.reaped, 1)

    def test_failing_program(self):
        """A non-zero exit is recorded but does not stop the loop."""
        status = self.launcher.launch(['false'])

        self.assertIs(status, LoopStatus.CONTINUE)
        self.assertNotEqual(self.launcher.last_result.exit_code, 0)
        self.assertEqual(self.err.getvalue(), '')

    def test_arguments_passed(self):
        """Arguments reach the program verbatim."""
        self.launcher.launch(['sh', '-c', 'exit $#', 'sh', 'a', 'b', 'c'])

        self.assertEqual(self.launcher.last_result.exit_code, 3)

    def test_signaled_program(self):
        """A child killed by a signal counts as finished."""
        status = self.launcher.launch(['sh', '-c', 'kill -TERM $$'])

        self.assertIs(status, LoopStatus.CONTINUE)
        self.assertTrue(self.launcher.last_result.signaled)
        self.assertEqual(self.launcher.last_result.signal, signal.SIGTERM)

    def test_missing_program(self):
        """The child fails with status 1; the interpreter carries on."""
        status = self.launcher.launch([MISSING_PROGRAM])

        self.assertIs(status, LoopStatus.CONTINUE)
        self.assertEqual(self.launcher.last_result.exit_code, 1)
        self.assertEqual(self.launcher.stats.spawned, self.launcher.stats.reaped)

    def test_wait_count_matches_spawn_count(self):
        for args in (['true'], ['false'], [MISSING_PROGRAM], ['true']):
            self.launcher.launch(args)

        self.assertEqual(self.launcher.stats.spawned, 4)
        self.assertEqual(self.launcher.stats.reaped, 4)

    def test_child_execs_argument_vector(self):
        """In the child, the full token list is handed to execvp."""
        with mock.patch.object(self.launcher, '_fork', return_value=0), \
                mock.patch('ush.process.launcher.os.execvp') as execvp, \
                mock.patch('ush.process.launcher.os._exit', side_effect=SystemExit) as _exit:
            with self.assertRaises(SystemExit):
                self.launcher.launch(['ls', '-la'])

        execvp.assert_called_once_with('ls', ['ls', '-la'])
        _exit.assert_called_once_with(1)
        self.assertEqual(self.launcher.stats.spawned, 0)

    def test_exec_failure_reported_in_child(self):
        """A failed exec is reported and the child exits with failure."""
        error = OSError(2, 'No such file or directory')
        with mock.patch.object(self.launcher, '_fork', return_value=0), \
                mock.patch('ush.process.launcher.os.execvp', side_effect=error), \
                mock.patch('ush.process.launcher.os._exit', side_effect=SystemExit) as _exit:
            with self.assertRaises(SystemExit):
                self.launcher.launch([MISSING_PROGRAM])

        _exit.assert_called_once_with(1)
        self.assertEqual(self.err.getvalue(), 'ush: No such file or directory\n')

    def test_stopped_child_waited_again(self):
        """A stop notification is not completion; wait is retried."""
        statuses = [(4242, stopped(signal.SIGSTOP)), (4242, exited(7))]
        with mock.patch.object(self.launcher, '_fork', return_value=4242), \
                mock.patch('ush.process.launcher.os.waitpid', side_effect=statuses) as waitpid:
            status = self.launcher.launch(['sleep', '100'])

        self.assertIs(status, LoopStatus.CONTINUE)
        self.assertEqual(waitpid.call_count, 2)
        waitpid.assert_called_with(4242, os.WUNTRACED)
        self.assertEqual(self.launcher.stats.stops_observed, 1)
        self.assertEqual(self.launcher.last_result.exit_code, 7)

    def test_fork_failure(self):
        """A fork failure is reported and absorbed."""
        error = OSError(11, 'Resource temporarily unavailable')
        with mock.patch('ush.process.launcher.os.fork', side_effect=error):
            status = self.launcher.launch(['true'])

        self.assertIs(status, LoopStatus.CONTINUE)
        self.assertEqual(self.err.getvalue(), 'ush: Resource temporarily unavailable\n')
        self.assertEqual(self.launcher.stats.fork_failures, 1)
        self.assertEqual(self.launcher.stats.spawned, 0)
        self.assertIsNone(self.launcher.last_result)

    def test_exit_status_logged(self):
        """Exit statuses go to the log, not to the user."""
        Logger.clear_session_logs()
        self.launcher.launch(['false'])

        logs = Logger.get_session_logs(subsystem='launcher')
        self.assertTrue(any(l['message'] == "Child exited" for l in logs))
        self.assertEqual(self.err.getvalue(), '')


class TestShell(unittest.TestCase):
    """Test the main loop end to end."""

    def setUp(self):
        self.cwd = os.getcwd()

    def tearDown(self):
        os.chdir(self.cwd)

    def make_shell(self, text, config=None, launcher=None):
        self.out = io.StringIO()
        self.err = io.StringIO()
        return Shell(
            config=config or Config(),
            stdin=io.StringIO(text),
            stdout=self.out,
            stderr=self.err,
            launcher=launcher
        )

    def test_help_then_exit(self):
        """help lists every builtin once, exit ends with success."""
        shell = self.make_shell("help\nexit\n")

        self.assertEqual(shell.run(), 0)
        output = self.out.getvalue()

        self.assertIn("Uday's Shell (ush)", output)
        for name in ('cd', 'help', 'exit'):
            self.assertEqual(output.count(f"  {name}\n"), 1)
        self.assertEqual(output.count("--> "), 2)
        self.assertEqual(shell.lines_read, 2)
        self.assertIs(shell.status, LoopStatus.TERMINATE_SUCCESS)
        self.assertFalse(shell.running)

    def test_exit_stops_reading(self):
        """Lines after exit are never read."""
        launcher = RecordingLauncher()
        shell = self.make_shell("exit with arguments\nls\n", launcher=launcher)

        self.assertEqual(shell.run(), 0)
        self.assertEqual(shell.lines_read, 1)
        self.assertEqual(launcher.calls, [])

    def test_end_of_input(self):
        """End of input terminates with success."""
        shell = self.make_shell("")

        self.assertEqual(shell.run(), 0)
        self.assertEqual(shell.lines_read, 0)
        self.assertEqual(self.out.getvalue(), "--> ")

    def test_blank_lines_ignored(self):
        """Delimiter-only lines run nothing."""
        launcher = RecordingLauncher()
        shell = self.make_shell("\n   \t\a\r\n", launcher=launcher)

        self.assertEqual(shell.run(), 0)
        self.assertEqual(shell.lines_read, 2)
        self.assertEqual(launcher.calls, [])
        self.assertEqual(self.err.getvalue(), "")

    def test_external_command(self):
        """Non-builtins are launched with their full argument vector."""
        launcher = RecordingLauncher()
        shell = self.make_shell("ls -la\nexit\n", launcher=launcher)

        self.assertEqual(shell.run(), 0)
        self.assertEqual(launcher.calls, [['ls', '-la']])

    @unittest.skipUnless(hasattr(os, 'fork'), "requires fork()")
    def test_real_child_then_prompt(self):
        """After a real child exits, the loop prompts again."""
        shell = self.make_shell("false\ntrue\nexit\n")

        self.assertEqual(shell.run(), 0)
        self.assertEqual(self.out.getvalue().count("--> "), 3)
        launcher = shell.dispatcher.launcher
        self.assertEqual(launcher.stats.spawned, 2)
        self.assertEqual(launcher.stats.reaped, 2)

    def test_cd_errors_keep_prompting(self):
        """cd failures are reported and the loop goes on."""
        shell = self.make_shell("cd\ncd /definitely/not/a/real/path\nexit\n")

        self.assertEqual(shell.run(), 0)
        self.assertEqual(os.getcwd(), self.cwd)
        self.assertEqual(
            self.err.getvalue(),
            'ush: expected argument to "cd"\nush: No such file or directory\n'
        )
        self.assertEqual(shell.lines_read, 3)

    def test_cd_persists_across_prompts(self):
        launcher = RecordingLauncher()
        shell = self.make_shell("cd /\npwd\n", launcher=launcher)

        self.assertEqual(shell.run(), 0)
        self.assertEqual(os.getcwd(), '/')
        self.assertEqual(launcher.calls, [['pwd']])

    def test_allocation_failure(self):
        """A failed buffer growth ends the loop with failure status."""
        config = Config(shell=ShellConfig(line_bufsize=4))
        shell = self.make_shell("a very long line\nexit\n", config=config)

        with mock.patch.object(LineReader, '_grow', side_effect=OutOfMemoryError(requested=8, buffer='line')):
            self.assertEqual(shell.run(), 1)

        self.assertEqual(self.err.getvalue(), "ush: allocation error\n")
        self.assertIs(shell.status, LoopStatus.TERMINATE_ERROR)

    def test_token_allocation_failure(self):
        """A failed token growth drops the stored tokens and ends the loop."""
        config = Config(shell=ShellConfig(token_bufsize=1))
        launcher = RecordingLauncher()
        shell = self.make_shell("a b\n", config=config, launcher=launcher)
        stored = []

        def fail(tokens, size):
            stored.append(list(tokens))
            raise OutOfMemoryError(requested=size, buffer='token')

        with mock.patch.object(shell.parser, '_grow', side_effect=fail) as grow:
            self.assertEqual(shell.run(), 1)

        self.assertEqual(stored, [['a']])
        self.assertEqual(grow.call_args[0][0], [])
        self.assertEqual(launcher.calls, [])
        self.assertEqual(self.err.getvalue(), "ush: allocation error\n")

    def test_memory_error_anywhere(self):
        """A bare MemoryError is reported like any allocation failure."""
        launcher = RecordingLauncher()
        shell = self.make_shell("ls\nexit\n", launcher=launcher)

        with mock.patch.object(shell.parser, 'split', side_effect=MemoryError()):
            self.assertEqual(shell.run(), 1)

        self.assertEqual(self.err.getvalue(), "ush: allocation error\n")
        self.assertIs(shell.status, LoopStatus.TERMINATE_ERROR)
        self.assertEqual(launcher.calls, [])

    def test_undecodable_input(self):
        """Bytes that are not UTF-8 reach the program unchanged."""
        launcher = RecordingLauncher()
        stdin = io.TextIOWrapper(io.BytesIO(b"true \xff\nexit\n"), encoding='utf-8', errors='strict')
        err = io.StringIO()
        shell = Shell(config=Config(), stdin=stdin, stdout=io.StringIO(), stderr=err, launcher=launcher)

        self.assertEqual(shell.run(), 0)
        self.assertEqual(launcher.calls, [['true', '\udcff']])
        self.assertEqual(os.fsencode(launcher.calls[0][1]), b'\xff')
        self.assertEqual(err.getvalue(), "")

    def test_custom_prompt(self):
        shell = self.make_shell("exit\n", config=Config(shell=ShellConfig(prompt="% ")))

        self.assertEqual(shell.run(), 0)
        self.assertEqual(self.out.getvalue(), "% ")

    def test_execute_line(self):
        shell = self.make_shell("", launcher=RecordingLauncher())

        self.assertIs(shell.execute_line("exit"), LoopStatus.TERMINATE_SUCCESS)
        self.assertIs(shell.execute_line("  "), LoopStatus.CONTINUE)
        self.assertEqual(shell.lines_read, 0)


class TestMain(unittest.TestCase):
    """Test the entry point."""

    def test_exit_code_from_loop(self):
        from ush import main as main_module

        with mock.patch.object(main_module, 'Shell') as shell_cls:
            shell_cls.return_value.run.return_value = 1
            self.assertEqual(main_module.main(['--debug']), 1)

        shell_cls.return_value.run.assert_called_once_with()


def run_tests():
    """Run all tests."""
    loader = unittest.TestLoader()
    suite = loader.loadTestsFromModule(sys.modules[__name__])

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return 0 if result.wasSuccessful() else 1


if __name__ == '__main__':
    sys.exit(run_tests())
