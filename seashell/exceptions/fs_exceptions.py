"""
Redirection Exceptions

Exceptions raised while binding a standard stream to a file. They are
raised inside a child process before program replacement and terminate
only that child.

Author: SeaShell Project
Version: 1.0.0
"""

from typing import Optional, Any

from .base_exceptions import SeaShellError


class RedirectionError(SeaShellError):
    """
    Base exception for all redirection errors.

    Attributes:
        message: Human-readable error description
        path: File path associated with the error
        error_code: Numeric error code for programmatic handling
        exit_status: Status the affected child exits with
    """

    exit_status = 1

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message, error_code=error_code or 4000, context=context)
        self.path = path
        if path:
            self.context["path"] = path

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.path:
            base = f"{base} (path={self.path})"
        return base


class FileNotFoundError(RedirectionError):
    """
    The input file of a redirection does not exist.

    Example:
        >>> raise FileNotFoundError("missing.txt")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"{path}: No such file or directory",
            path=path,
            error_code=4001,
            context=context
        )


class PermissionDeniedError(RedirectionError):
    """
    The file of a redirection cannot be opened with the required access.

    Example:
        >>> raise PermissionDeniedError("/etc/shadow", operation="read")
    """

    def __init__(
        self,
        path: str,
        operation: str = "open",
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["operation"] = operation
        super().__init__(
            message=f"{path}: Permission denied",
            path=path,
            error_code=4002,
            context=ctx
        )
        self.operation = operation
