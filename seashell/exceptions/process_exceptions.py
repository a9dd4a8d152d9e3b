"""
Process Exceptions

Exceptions related to creating, wiring and replacing child processes.

ProcessCreationError and PipeCreationError happen in the interpreter
itself and are reported before the prompt comes back. ExecError and
ExecutableNotFoundError happen inside a child after fork; they only
ever terminate that child, using ``exit_status`` as its status.

Author: SeaShell Project
Version: 1.0.0
"""

from typing import Optional, Any, Sequence

from .base_exceptions import SeaShellError


class ProcessException(SeaShellError):
    """
    Base exception for all process-related errors.

    Attributes:
        message: Human-readable error description
        pid: Process ID associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
        exit_status: Status a child uses when it dies of this error
    """

    exit_status = 1

    def __init__(
        self,
        message: str,
        pid: Optional[int] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message, error_code=error_code or 2000, context=context)
        self.pid = pid
        if pid is not None:
            self.context["pid"] = pid

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.pid is not None:
            base = f"{base} (pid={self.pid})"
        return base


class ProcessCreationError(ProcessException):
    """
    Error creating a new process.

    Raised when fork fails, typically because of a process table or
    memory limit.

    Example:
        >>> raise ProcessCreationError("fork failed: Resource temporarily unavailable")
    """

    def __init__(
        self,
        message: str,
        argv: Optional[Sequence[str]] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if argv:
            ctx["command"] = argv[0]
        super().__init__(
            message=message,
            error_code=2001,
            context=ctx
        )
        self.argv = tuple(argv) if argv else ()


class PipeCreationError(ProcessException):
    """
    Error creating the pipe that connects two pipeline stages.

    Example:
        >>> raise PipeCreationError("pipe failed: Too many open files")
    """

    def __init__(
        self,
        message: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            error_code=2002,
            context=context
        )


class ExecError(ProcessException):
    """
    Program replacement failed for a reason other than a missing executable.

    Example:
        >>> raise ExecError("./script.sh", "Permission denied")
    """

    exit_status = 126

    def __init__(
        self,
        command: str,
        reason: str,
        error_code: Optional[int] = None
    ) -> None:
        super().__init__(
            message=f"{command}: {reason}",
            error_code=error_code or 2003,
            context={"command": command}
        )
        self.command = command
        self.reason = reason


class ExecutableNotFoundError(ExecError):
    """
    The executable could not be found on the search path.

    Example:
        >>> raise ExecutableNotFoundError("nosuchcmd")
    """

    exit_status = 127

    def __init__(self, command: str) -> None:
        super().__init__(command, "command not found", error_code=2004)
