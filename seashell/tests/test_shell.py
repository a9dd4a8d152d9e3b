"""
Shell Tests

Covers the read-eval loop, built-ins and error reporting.
"""

import errno
import io
import os
import tempfile
import unittest
from unittest import mock

from seashell.core.config_loader import Config
from seashell.shell.shell import Shell


def quiet_config():
    config = Config()
    config.shell.show_banner = False
    config.shell.prompt = "> "
    config.limits.max_line_length = 4096
    config.limits.max_tokens = 64
    return config


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self._cwd = os.getcwd()
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = os.path.realpath(self._tmp.name)
        self.shell = Shell(quiet_config())

    def tearDown(self):
        os.chdir(self._cwd)
        self._tmp.cleanup()

    def path(self, name):
        return os.path.join(self.dir, name)

    def read(self, name):
        with open(self.path(name), 'r') as f:
            return f.read()

    def run_shell(self, script):
        """Run the loop over ``script``; return (status, stdout, stderr)."""
        stdout, stderr = io.StringIO(), io.StringIO()
        with mock.patch('sys.stdin', io.StringIO(script)), \
                mock.patch('sys.stdout', stdout), \
                mock.patch('sys.stderr', stderr):
            status = self.shell.run()
        return status, stdout.getvalue(), stderr.getvalue()


class TestExecuteLine(ShellTestCase):
    """Test single line execution."""

    def test_blank_line(self):
        self.assertEqual(self.shell.execute_line("   "), 0)

    def test_runs_command(self):
        status = self.shell.execute_line(f"echo hi > {self.path('out.txt')}")

        self.assertEqual(status, 0)
        self.assertEqual(self.shell.last_status, 0)
        self.assertEqual(self.read('out.txt'), "hi\n")

    def test_malformed_creates_no_process(self):
        stderr = io.StringIO()
        with mock.patch('os.fork') as fork, mock.patch('sys.stderr', stderr):
            status = self.shell.execute_line("ls >")

        self.assertEqual(status, 2)
        fork.assert_not_called()
        self.assertIn("seashell: syntax error near '>'", stderr.getvalue())
        self.assertIn("missing file name", stderr.getvalue())

    def test_second_pipe_creates_no_process(self):
        with mock.patch('os.fork') as fork, mock.patch('sys.stderr', io.StringIO()):
            status = self.shell.execute_line("ls | sort | wc")

        self.assertEqual(status, 2)
        fork.assert_not_called()

    def test_too_many_tokens_reported(self):
        self.shell.config.limits.max_tokens = 3
        shell = Shell(self.shell.config)
        stderr = io.StringIO()
        with mock.patch('os.fork') as fork, mock.patch('sys.stderr', stderr):
            status = shell.execute_line("echo a b c d")

        self.assertEqual(status, 2)
        fork.assert_not_called()
        self.assertIn("too many tokens", stderr.getvalue())

    def test_fork_failure_reported(self):
        stderr = io.StringIO()
        with mock.patch('os.fork', side_effect=OSError(errno.EAGAIN, "Resource temporarily unavailable")), \
                mock.patch('sys.stderr', stderr):
            status = self.shell.execute_line("ls")

        self.assertEqual(status, 1)
        self.assertIn("fork failed", stderr.getvalue())
        self.assertFalse(self.shell.exiting)


class TestBuiltins(ShellTestCase):
    """Test exit and cd."""

    def test_exit(self):
        with mock.patch('os.fork') as fork:
            status = self.shell.execute_line("exit")

        fork.assert_not_called()
        self.assertEqual(status, 1)
        self.assertTrue(self.shell.exiting)
        self.assertEqual(self.shell.exit_status, 1)

    def test_cd(self):
        self.assertEqual(self.shell.execute_line(f"cd {self.dir}"), 0)
        self.assertEqual(os.getcwd(), self.dir)

    def test_cd_without_argument(self):
        before = os.getcwd()
        self.assertEqual(self.shell.execute_line("cd"), 0)
        self.assertEqual(os.getcwd(), before)

    def test_cd_failure_keeps_running(self):
        stderr = io.StringIO()
        with mock.patch('sys.stderr', stderr):
            status = self.shell.execute_line(f"cd {self.path('missing')}")

        self.assertEqual(status, 1)
        self.assertFalse(self.shell.exiting)
        self.assertIn("cd:", stderr.getvalue())

    def test_cd_home(self):
        stdout = io.StringIO()
        with mock.patch.dict(os.environ, {'HOME': self.dir}), mock.patch('sys.stdout', stdout):
            status = self.shell.execute_line("cd ~")

        self.assertEqual(status, 0)
        self.assertEqual(os.getcwd(), self.dir)
        self.assertIn("Changed directory to home.", stdout.getvalue())

    def test_cd_home_failure_is_fatal(self):
        with mock.patch.dict(os.environ, {'HOME': self.path('gone')}), \
                mock.patch('sys.stderr', io.StringIO()):
            status = self.shell.execute_line("cd ~")

        self.assertEqual(status, 1)
        self.assertTrue(self.shell.exiting)
        self.assertEqual(self.shell.exit_status, 1)

    def test_cd_home_unset(self):
        env = {k: v for k, v in os.environ.items() if k != 'HOME'}
        with mock.patch.dict(os.environ, env, clear=True), \
                mock.patch('sys.stderr', io.StringIO()):
            self.shell.execute_line("cd ~")

        self.assertTrue(self.shell.exiting)


class TestLoop(ShellTestCase):
    """Test the read-eval loop."""

    def test_end_of_input(self):
        status, stdout, _ = self.run_shell("")

        self.assertEqual(status, 0)
        self.assertIn("> ", stdout)

    def test_exit_stops_loop(self):
        status, _, _ = self.run_shell(
            f"echo first > {self.path('a.txt')}\n"
            "exit\n"
            f"echo never > {self.path('b.txt')}\n"
        )

        self.assertEqual(status, 1)
        self.assertEqual(self.read('a.txt'), "first\n")
        self.assertFalse(os.path.exists(self.path('b.txt')))

    def test_continues_after_errors(self):
        status, _, stderr = self.run_shell(
            "ls >\n"
            "seashell-no-such-command-xyz\n"
            f"echo ok > {self.path('ok.txt')}\n"
        )

        self.assertEqual(status, 0)
        self.assertIn("syntax error", stderr)
        self.assertEqual(self.read('ok.txt'), "ok\n")

    def test_unexpected_error_reported_once(self):
        with mock.patch.object(self.shell, 'execute_line', side_effect=RuntimeError("boom")):
            status, _, stderr = self.run_shell("anything\n")

        self.assertEqual(status, 0)
        self.assertEqual(stderr.count("boom"), 1)
        self.assertIn("seashell: error: boom", stderr)

    def test_background_then_prompt(self):
        status, _, _ = self.run_shell(f"sleep 0.1 &\necho done > {self.path('d.txt')}\n")

        self.assertEqual(status, 0)
        self.assertEqual(self.read('d.txt'), "done\n")
        for job in self.shell.orchestrator.background_jobs:
            os.waitpid(job.pid, 0)

    def test_banner(self):
        self.shell.config.shell.show_banner = True
        _, stdout, _ = self.run_shell("")

        self.assertIn("Welcome to SeaShell", stdout)
        self.assertIn("Created by", stdout)
        self.assertIn("Date: ", stdout)
        self.assertIn("Time: ", stdout)


if __name__ == '__main__':
    unittest.main()
