"""
Parse Exceptions

Exceptions raised while turning an input line into a command plan.
A line rejected with one of these never creates a process.

Author: SeaShell Project
Version: 1.0.0
"""

from typing import Optional, Any

from .base_exceptions import SeaShellError


class ParseException(SeaShellError):
    """
    Base exception for tokenization and classification errors.

    Attributes:
        message: Human-readable error description
        line: The offending input line (if known)
        error_code: Numeric error code for programmatic handling
    """

    def __init__(
        self,
        message: str,
        line: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message, error_code=error_code or 3000, context=context)
        self.line = line

    def __str__(self) -> str:
        return f"[Error {self.error_code}] {self.message}"


class LineTooLongError(ParseException):
    """
    The input line exceeds the configured maximum length.

    Example:
        >>> raise LineTooLongError(length=120, limit=99)
    """

    def __init__(
        self,
        length: int,
        limit: int,
        line: Optional[str] = None
    ) -> None:
        super().__init__(
            message=f"line too long ({length} characters, limit is {limit})",
            line=line,
            error_code=3001,
            context={"length": length, "limit": limit}
        )
        self.length = length
        self.limit = limit


class TooManyTokensError(ParseException):
    """
    The input line splits into more tokens than the configured maximum.

    Example:
        >>> raise TooManyTokensError(count=12, limit=10)
    """

    def __init__(
        self,
        count: int,
        limit: int,
        line: Optional[str] = None
    ) -> None:
        super().__init__(
            message=f"too many tokens ({count}, limit is {limit})",
            line=line,
            error_code=3002,
            context={"count": count, "limit": limit}
        )
        self.count = count
        self.limit = limit


class MalformedOperatorError(ParseException):
    """
    An operator token is missing its required argument or is misplaced.

    This covers a trailing redirection without a path, a pipe with an
    empty side, a second pipe, and a background marker that is not the
    last token.

    Example:
        >>> raise MalformedOperatorError(">", "missing file name")
    """

    def __init__(
        self,
        operator: str,
        reason: str,
        position: Optional[int] = None,
        line: Optional[str] = None
    ) -> None:
        ctx: dict[str, Any] = {"operator": operator}
        if position is not None:
            ctx["position"] = position
        super().__init__(
            message=f"syntax error near '{operator}': {reason}",
            line=line,
            error_code=3003,
            context=ctx
        )
        self.operator = operator
        self.reason = reason
        self.position = position
