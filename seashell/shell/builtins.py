"""
Shell Built-in Commands

Implements the commands the interpreter runs itself, without creating a
process: ``exit`` and ``cd``.

Author: SeaShell Project
Version: 1.0.0
"""

import os
import sys
from typing import Callable, List

from seashell.logger import get_logger
from seashell.process.states import EXIT_SUCCESS, EXIT_FAILURE


class BuiltinCommands:
    """
    Built-in shell commands.

    These commands change the interpreter's own state (its working
    directory, or whether it keeps running), so they cannot run in a child.
    """

    def __init__(self, shell):
        """
        Initialize built-in commands.

        Args:
            shell: The shell instance
        """
        self._shell = shell
        self._logger = get_logger('shell')
        self._commands: dict[str, Callable[[List[str]], int]] = {
            'exit': self.cmd_exit,
            'cd': self.cmd_cd,
        }

    def get_commands(self) -> dict[str, Callable[[List[str]], int]]:
        """Get all built-in commands."""
        return self._commands

    def is_builtin(self, name: str) -> bool:
        """Check if a command is built-in."""
        return name in self._commands

    def execute(self, name: str, args: List[str]) -> int:
        """
        Execute a built-in command.

        Args:
            name: Command name
            args: Command arguments

        Returns:
            Exit code
        """
        return self._commands[name](args)

    def cmd_exit(self, args: List[str]) -> int:
        """Terminate the interpreter with a failure status."""
        self._shell.request_exit(EXIT_FAILURE)
        return EXIT_FAILURE

    def cmd_cd(self, args: List[str]) -> int:
        """
        Change the working directory.

        ``cd`` alone does nothing. ``cd ~`` goes to $HOME; failing to do so
        is fatal to the interpreter.
        """
        if not args:
            return EXIT_SUCCESS

        target = args[0]

        if target == '~':
            return self._cd_home()

        try:
            os.chdir(target)
        except OSError as e:
            print(f"cd: {target}: {e.strerror or e}", file=sys.stderr)
            return EXIT_FAILURE

        self._logger.debug("Changed directory", context={'cwd': os.getcwd()})
        return EXIT_SUCCESS

    def _cd_home(self) -> int:
        home = os.environ.get('HOME')
        try:
            if not home:
                raise OSError("HOME is not set")
            os.chdir(home)
        except OSError as e:
            print(
                f"Error: Failed to change directory to home: {e.strerror or e}",
                file=sys.stderr
            )
            self._logger.error("Cannot change to home directory", context={'home': home})
            self._shell.request_exit(EXIT_FAILURE)
            return EXIT_FAILURE

        print("Changed directory to home.")
        return EXIT_SUCCESS
