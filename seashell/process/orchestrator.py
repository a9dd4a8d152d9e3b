"""
Process Orchestrator Module

Turns a CommandPlan into live processes:
- Single command: one child, optional redirections
- Pipeline: two children joined by one pipe
- Foreground: block until every child of the line is reaped
- Background: return at once, reap later without blocking

Correctness rests on descriptor hygiene. Every process that does not use
a pipe end closes its copy, so the reader sees end-of-stream as soon as
the writer exits. The parent closes both ends right after the second
fork, and closes them as well on every failure path.

Author: SeaShell Project
Version: 1.0.0
"""

from __future__ import annotations

import errno
import os
import signal
import sys
import traceback
from typing import Callable, List, Optional, Sequence, TYPE_CHECKING

from .handle import ProcessHandle
from .redirection import (
    STDIN_FILENO,
    STDOUT_FILENO,
    apply_input,
    apply_output,
    bind_stream,
)
from .states import ProcessState, EXIT_SUCCESS, EXIT_FAILURE
from seashell.core.config_loader import RedirectionConfig, get_config
from seashell.exceptions import (
    ExecError,
    ExecutableNotFoundError,
    PipeCreationError,
    ProcessCreationError,
    RedirectionError,
)
from seashell.logger import get_logger

if TYPE_CHECKING:
    from seashell.shell.parser import CommandPlan


STDERR_FILENO = 2


def exec_program(argv: Sequence[str]) -> None:
    """
    Replace the current process image with ``argv[0]``.

    The executable is looked up on PATH. Only returns by raising.

    Raises:
        ExecutableNotFoundError: If no such executable exists
        ExecError: If it exists but cannot be executed
    """
    command = argv[0]
    try:
        os.execvp(command, list(argv))
    except OSError as e:
        if e.errno in (errno.ENOENT, errno.ENOTDIR):
            raise ExecutableNotFoundError(command) from e
        raise ExecError(command, e.strerror or str(e)) from e


def _report(message: str) -> None:
    """Write an error line to this process's stderr descriptor."""
    try:
        os.write(STDERR_FILENO, f"seashell: {message}\n".encode(errors='replace'))
    except OSError:
        pass


def _flush_std_streams() -> None:
    """Flush interpreter-level buffers so a child never inherits pending output."""
    for stream in (sys.stdout, sys.stderr):
        if stream is not None and not getattr(stream, 'closed', False):
            stream.flush()


class ProcessOrchestrator:
    """
    Creates, wires and waits for the child processes of one command line.

    The orchestrator keeps no state between lines except the table of
    detached background children, which ``reap_background()`` drains
    without blocking.

    Example:
        >>> orchestrator = ProcessOrchestrator()
        >>> orchestrator.run(CommandParser().parse("ls -l | wc -l"))
        0
    """

    def __init__(self, redirection: Optional[RedirectionConfig] = None):
        self._redirection = redirection or get_config().redirection
        self._logger = get_logger('process')
        self._background: List[ProcessHandle] = []

    @property
    def background_jobs(self) -> List[ProcessHandle]:
        """Detached children that have not been reaped yet."""
        return list(self._background)

    def run(self, plan: CommandPlan) -> int:
        """
        Execute a command plan.

        Args:
            plan: Classified command line

        Returns:
            Exit status of the (last) command, or 0 for background lines

        Raises:
            PipeCreationError: If the pipe cannot be created
            ProcessCreationError: If a fork fails
        """
        if plan.is_pipeline:
            return self._run_pipeline(plan)
        return self._run_single(plan)

    # Single command

    def _run_single(self, plan: CommandPlan) -> int:
        def setup() -> None:
            if plan.output_redirect is not None:
                apply_output(
                    plan.output_redirect.path,
                    append=plan.output_redirect.append,
                    mode=self._redirection.file_mode,
                )
            if plan.input_redirect is not None:
                apply_input(plan.input_redirect)

        handle = self._spawn(plan.argv, setup)

        if plan.background:
            self._detach(handle)
            return EXIT_SUCCESS

        return self._wait(handle)

    # Pipeline

    def _run_pipeline(self, plan: CommandPlan) -> int:
        try:
            read_fd, write_fd = os.pipe()
        except OSError as e:
            raise PipeCreationError(f"pipe failed: {e.strerror or e}") from e

        def setup_writer() -> None:
            os.close(read_fd)
            bind_stream(write_fd, STDOUT_FILENO)
            if plan.input_redirect is not None:
                apply_input(plan.input_redirect)

        def setup_reader() -> None:
            os.close(write_fd)
            bind_stream(read_fd, STDIN_FILENO)
            if plan.output_redirect is not None:
                apply_output(
                    plan.output_redirect.path,
                    append=plan.output_redirect.append,
                    mode=self._redirection.file_mode,
                )

        try:
            first = self._spawn(plan.argv, setup_writer)
            try:
                second = self._spawn(plan.pipeline.argv, setup_reader)
            except ProcessCreationError:
                self._terminate(first)
                raise
        finally:
            # The parent never takes part in the data path
            os.close(read_fd)
            os.close(write_fd)

        if plan.background:
            self._detach(first)
            self._detach(second)
            return EXIT_SUCCESS

        self._wait(first)
        return self._wait(second)

    # Process lifecycle

    def _spawn(self, argv: Sequence[str], setup: Callable[[], None]) -> ProcessHandle:
        """Fork a child that runs ``setup`` and then replaces itself with ``argv``."""
        _flush_std_streams()

        try:
            pid = os.fork()
        except OSError as e:
            self._logger.error("fork failed", context={'argv': ' '.join(argv)})
            raise ProcessCreationError(f"fork failed: {e.strerror or e}", argv=argv) from e

        if pid == 0:
            self._exec_child(argv, setup)

        self._logger.debug("Spawned child", pid=pid, context={'argv': ' '.join(argv)})
        return ProcessHandle(pid=pid, argv=tuple(argv))

    @staticmethod
    def _exec_child(argv: Sequence[str], setup: Callable[[], None]) -> None:
        """Child side of a fork. Never returns."""
        status = EXIT_FAILURE
        try:
            setup()
            exec_program(argv)
        except (RedirectionError, ExecError) as e:
            status = e.exit_status
            _report(e.message)
        except BaseException:
            traceback.print_exc()
        finally:
            os._exit(status)

    def _wait(self, handle: ProcessHandle) -> int:
        """Block until ``handle`` terminates and return its exit status."""
        try:
            _, raw_status = os.waitpid(handle.pid, 0)
        except ChildProcessError:
            self._logger.warning("Child was already reaped", pid=handle.pid)
            handle.state = ProcessState.EXITED
            return EXIT_FAILURE

        status = handle.update(raw_status)
        self._logger.debug(
            "Child finished",
            pid=handle.pid,
            context={'status': status, 'state': handle.state.name}
        )
        return status

    def _poll(self, handle: ProcessHandle) -> bool:
        """Non-blocking status check. Returns True once the child is reaped."""
        try:
            pid, raw_status = os.waitpid(handle.pid, os.WNOHANG)
        except ChildProcessError:
            handle.state = ProcessState.EXITED
            return True

        if pid == 0:
            return False

        handle.update(raw_status)
        return True

    def _detach(self, handle: ProcessHandle) -> None:
        """Leave a child running in the background."""
        handle.detach()
        if self._poll(handle):
            self._logger.debug("Background child already finished", pid=handle.pid)
            return
        self._background.append(handle)
        self._logger.info(
            "Started background job",
            pid=handle.pid,
            context={'argv': ' '.join(handle.argv)}
        )

    def _terminate(self, handle: ProcessHandle) -> None:
        """Kill and reap a child that can no longer be used."""
        try:
            os.kill(handle.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
        self._wait(handle)
        self._logger.warning("Abandoned partially created pipeline", pid=handle.pid)

    def reap_background(self) -> List[ProcessHandle]:
        """
        Collect finished background children without blocking.

        Returns:
            Handles reaped by this call
        """
        reaped = [handle for handle in self._background if self._poll(handle)]
        for handle in reaped:
            self._background.remove(handle)
            self._logger.info(
                "Background job finished",
                pid=handle.pid,
                context={'status': handle.exit_status}
            )
        return reaped
