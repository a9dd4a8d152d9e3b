"""
Process States Module

Defines the lifecycle states of the child processes SeaShell creates.

Author: SeaShell Project
Version: 1.0.0
"""

from enum import Enum, auto


class ProcessState(Enum):
    """
    Child process lifecycle states.

    State transitions:
        RUNNING -> EXITED: Reaped after a normal exit
        RUNNING -> SIGNALED: Reaped after being killed by a signal
        RUNNING -> DETACHED: Background child not yet reaped
        DETACHED -> EXITED | SIGNALED: Reaped by a later non-blocking check
    """

    RUNNING = auto()
    """Process has been created and not yet waited on."""

    DETACHED = auto()
    """Background process the interpreter is not waiting for."""

    EXITED = auto()
    """Process exited normally and has been reaped."""

    SIGNALED = auto()
    """Process was terminated by a signal and has been reaped."""

    @property
    def is_reaped(self) -> bool:
        return self in (ProcessState.EXITED, ProcessState.SIGNALED)


# Shell-style exit statuses
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_NOT_EXECUTABLE = 126
EXIT_NOT_FOUND = 127
SIGNAL_EXIT_BASE = 128
