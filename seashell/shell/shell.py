"""
SeaShell Shell Module

The interactive read-eval loop.

Author: SeaShell Project
Version: 1.0.0
"""

import sys
from datetime import datetime
from typing import Optional

from .builtins import BuiltinCommands
from .parser import CommandParser
from .tokenizer import Tokenizer
from seashell import __author__
from seashell.core.config_loader import Config, get_config
from seashell.exceptions import ParseException, ProcessException
from seashell.logger import get_logger
from seashell.process.orchestrator import ProcessOrchestrator
from seashell.process.states import EXIT_SUCCESS, EXIT_FAILURE, EXIT_USAGE


BANNER_WIDTH = 50


class Shell:
    """
    SeaShell Interactive Shell.

    Provides:
    - Line tokenization and operator classification
    - Built-in commands (exit, cd)
    - External commands, redirection and a single pipe
    - Background execution

    Example:
        >>> shell = Shell()
        >>> shell.run()
    """

    def __init__(self, config: Optional[Config] = None):
        self._config = config or get_config()
        self._logger = get_logger('shell')
        self._tokenizer = Tokenizer(self._config.limits)
        self._parser = CommandParser(self._tokenizer)
        self._builtins = BuiltinCommands(self)
        self._orchestrator = ProcessOrchestrator(self._config.redirection)
        self._running = False
        self._exiting = False
        self._exit_status = EXIT_SUCCESS
        self._last_status = EXIT_SUCCESS

    @property
    def config(self) -> Config:
        return self._config

    @property
    def parser(self) -> CommandParser:
        return self._parser

    @property
    def orchestrator(self) -> ProcessOrchestrator:
        return self._orchestrator

    @property
    def last_status(self) -> int:
        return self._last_status

    @property
    def exit_status(self) -> int:
        return self._exit_status

    @property
    def exiting(self) -> bool:
        return self._exiting

    def run(self) -> int:
        """
        Run the interactive shell.

        This is the main REPL loop. It ends on end-of-input (status 0) or
        when a built-in requests termination (status 1).

        Returns:
            Interpreter exit status
        """
        self._running = True

        if self._config.shell.show_banner:
            self.print_banner()

        while self._running and not self._exiting:
            try:
                self._orchestrator.reap_background()

                try:
                    line = input(self._config.shell.prompt)
                except EOFError:
                    print()
                    break
                except KeyboardInterrupt:
                    print("^C")
                    continue

                self.execute_line(line)

            except Exception as e:
                print(f"seashell: error: {e}", file=sys.stderr)
                self._logger.debug("Unhandled error in command loop", context={'error': repr(e)})

        self._running = False
        return self._exit_status

    def print_banner(self) -> None:
        """Print the welcome banner with the current date and time."""
        now = datetime.now()
        inner = BANNER_WIDTH - 2
        lines = [
            "Welcome to SeaShell",
            "Created by",
            __author__,
            "",
            f"Date: {now.strftime('%m/%d/%Y')}",
            f"Time: {now.strftime('%H:%M:%S')}",
        ]

        print('*' * BANNER_WIDTH)
        for text in lines:
            print(f"*{text.center(inner)}*")
        print('*' * BANNER_WIDTH)
        print()

    def execute_line(self, line: str) -> int:
        """
        Execute a command line.

        Errors are reported on stderr and turned into a status; they never
        end the loop.

        Args:
            line: Command line string

        Returns:
            Exit code
        """
        try:
            tokens = self._tokenizer.tokenize(line)
            if not tokens:
                return EXIT_SUCCESS

            if self._builtins.is_builtin(tokens[0]):
                status = self._builtins.execute(tokens[0], tokens[1:])
            else:
                plan = self._parser.classify(tokens)
                self._logger.debug("Running command", context={'plan': str(plan)})
                status = self._orchestrator.run(plan)

        except ParseException as e:
            self._report(e.message)
            status = EXIT_USAGE

        except ProcessException as e:
            self._logger.error(e.message)
            self._report(e.message)
            status = EXIT_FAILURE

        self._last_status = status
        return status

    def _report(self, message: str) -> None:
        print(f"seashell: {message}", file=sys.stderr)

    def request_exit(self, status: int = EXIT_FAILURE) -> None:
        """Request the shell to exit with ``status``."""
        self._exit_status = status
        self._exiting = True

    def stop(self) -> None:
        """Stop the shell."""
        self._running = False


def create_shell(config: Optional[Config] = None) -> Shell:
    """Factory function to create a shell."""
    return Shell(config)
