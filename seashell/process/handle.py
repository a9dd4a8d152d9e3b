"""
Process Handle Module

A ProcessHandle is the interpreter's record of one live child. It is
owned by the orchestrator from fork until the child is reaped; detached
background handles are kept until a non-blocking check collects them.

Author: SeaShell Project
Version: 1.0.0
"""

import os
import time
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .states import ProcessState, SIGNAL_EXIT_BASE


def describe_status(raw_status: int) -> int:
    """
    Convert a raw ``waitpid`` status to a shell exit status.

    A normal exit gives the exit code; death by signal N gives 128 + N.
    """
    code = os.waitstatus_to_exitcode(raw_status)
    if code < 0:
        return SIGNAL_EXIT_BASE - code
    return code


@dataclass
class ProcessHandle:
    """A child process created by the orchestrator."""
    pid: int
    argv: Tuple[str, ...]
    background: bool = False
    state: ProcessState = ProcessState.RUNNING
    exit_status: Optional[int] = None
    term_signal: Optional[int] = None
    started_at: float = field(default_factory=time.monotonic)

    @property
    def command(self) -> str:
        return self.argv[0] if self.argv else ''

    @property
    def is_reaped(self) -> bool:
        return self.state.is_reaped

    def detach(self) -> None:
        """Mark the child as running in the background."""
        self.background = True
        if not self.is_reaped:
            self.state = ProcessState.DETACHED

    def update(self, raw_status: int) -> int:
        """
        Record the status returned by ``waitpid`` for this child.

        Returns:
            The shell exit status
        """
        if os.WIFSIGNALED(raw_status):
            self.state = ProcessState.SIGNALED
            self.term_signal = os.WTERMSIG(raw_status)
        else:
            self.state = ProcessState.EXITED
        self.exit_status = describe_status(raw_status)
        return self.exit_status

    def __str__(self) -> str:
        return f"[{self.pid}] {' '.join(self.argv)} ({self.state.name.lower()})"
