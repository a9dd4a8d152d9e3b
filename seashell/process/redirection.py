"""
Redirection Module

Rebinds a process's standard streams to files or pipe ends.

These functions run inside a freshly forked child, before program
replacement, so the new program inherits the rebound streams. Failures
raise RedirectionError subclasses which the child turns into its exit
status; they never reach the interpreter.

Author: SeaShell Project
Version: 1.0.0
"""

import errno
import os

from seashell.exceptions import (
    RedirectionError,
    FileNotFoundError,
    PermissionDeniedError,
)
from seashell.logger import get_logger


STDIN_FILENO = 0
STDOUT_FILENO = 1

DEFAULT_FILE_MODE = 0o777

_logger = get_logger('redirect')


def bind_stream(fd: int, target: int) -> None:
    """
    Duplicate ``fd`` onto ``target`` and release the original descriptor.

    Args:
        fd: Open descriptor (file or pipe end)
        target: Standard stream number to rebind (0 or 1)
    """
    if fd == target:
        os.set_inheritable(fd, True)
        return
    os.dup2(fd, target)
    os.close(fd)


def _open(path: str, flags: int, mode: int, operation: str) -> int:
    """Open ``path`` and translate OS errors into redirection errors."""
    try:
        return os.open(path, flags, mode)
    except OSError as e:
        if e.errno == errno.ENOENT:
            raise FileNotFoundError(path) from e
        if e.errno in (errno.EACCES, errno.EPERM):
            raise PermissionDeniedError(path, operation=operation) from e
        raise RedirectionError(
            f"{path}: {e.strerror or e}",
            path=path,
            context={'errno': e.errno}
        ) from e


def apply_input(path: str) -> None:
    """
    Bind standard input to ``path``, opened read-only.

    Raises:
        FileNotFoundError: If the file does not exist
        PermissionDeniedError: If it cannot be read
        RedirectionError: For any other open failure
    """
    fd = _open(path, os.O_RDONLY, 0, 'read')
    bind_stream(fd, STDIN_FILENO)
    _logger.debug("Standard input bound to file", context={'path': path})


def apply_output(path: str, append: bool = False, mode: int = DEFAULT_FILE_MODE) -> None:
    """
    Bind standard output to ``path``, creating it if needed.

    Args:
        path: Target file
        append: Append to the file instead of truncating it
        mode: Permission bits for a newly created file (umask applies)

    Raises:
        PermissionDeniedError: If the file cannot be written
        RedirectionError: For any other open failure
    """
    flags = os.O_WRONLY | os.O_CREAT
    flags |= os.O_APPEND if append else os.O_TRUNC

    fd = _open(path, flags, mode, 'write')
    bind_stream(fd, STDOUT_FILENO)
    _logger.debug(
        "Standard output bound to file",
        context={'path': path, 'append': append}
    )
