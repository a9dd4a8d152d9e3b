"""
SeaShell Exception Hierarchy

All custom exceptions inherit from SeaShellError, with sub-categories for
each stage of turning a line into running processes.

Architecture:
    SeaShellError (Base)
    ├── ParseException
    │   ├── LineTooLongError
    │   ├── TooManyTokensError
    │   └── MalformedOperatorError
    ├── ProcessException
    │   ├── ProcessCreationError
    │   ├── PipeCreationError
    │   └── ExecError
    │       └── ExecutableNotFoundError
    ├── RedirectionError
    │   ├── FileNotFoundError
    │   └── PermissionDeniedError
    └── ConfigException
        ├── ConfigLoadError
        └── ConfigValidationError
"""

from .base_exceptions import SeaShellError

from .parse_exceptions import (
    ParseException,
    LineTooLongError,
    TooManyTokensError,
    MalformedOperatorError,
)

from .process_exceptions import (
    ProcessException,
    ProcessCreationError,
    PipeCreationError,
    ExecError,
    ExecutableNotFoundError,
)

from .fs_exceptions import (
    RedirectionError,
    FileNotFoundError,
    PermissionDeniedError,
)

from .config_exceptions import (
    ConfigException,
    ConfigLoadError,
    ConfigValidationError,
)

__all__ = [
    "SeaShellError",
    # Parse exceptions
    "ParseException",
    "LineTooLongError",
    "TooManyTokensError",
    "MalformedOperatorError",
    # Process exceptions
    "ProcessException",
    "ProcessCreationError",
    "PipeCreationError",
    "ExecError",
    "ExecutableNotFoundError",
    # Redirection exceptions
    "RedirectionError",
    "FileNotFoundError",
    "PermissionDeniedError",
    # Configuration exceptions
    "ConfigException",
    "ConfigLoadError",
    "ConfigValidationError",
]
