"""
Tokenizer Module

Splits an input line into whitespace-delimited tokens.

There is no quoting, escaping or globbing: a token is any run of
non-whitespace characters. Operators are only recognized later, and only
when they stand alone, so ``file.txt>out`` stays a single token.

Author: SeaShell Project
Version: 1.0.0
"""

from typing import List, Optional

from seashell.core.config_loader import LimitsConfig
from seashell.exceptions import LineTooLongError, TooManyTokensError


def tokenize(
    line: str,
    max_tokens: Optional[int] = None,
    max_line_length: Optional[int] = None
) -> List[str]:
    """
    Split a line into tokens.

    Args:
        line: Raw input line, with or without its trailing newline
        max_tokens: Reject lines with more tokens than this (None = no limit)
        max_line_length: Reject lines longer than this (None = no limit)

    Returns:
        Tokens in input order; empty for a blank line

    Raises:
        LineTooLongError: If the line exceeds max_line_length
        TooManyTokensError: If the line holds more than max_tokens tokens
    """
    line = line.rstrip('\r\n')

    if max_line_length is not None and len(line) > max_line_length:
        raise LineTooLongError(len(line), max_line_length, line=line)

    tokens = line.split()

    if max_tokens is not None and len(tokens) > max_tokens:
        raise TooManyTokensError(len(tokens), max_tokens, line=line)

    return tokens


class Tokenizer:
    """
    Tokenizer bound to a set of input limits.

    Example:
        >>> Tokenizer(LimitsConfig(max_tokens=3)).tokenize("ls -l /tmp")
        ['ls', '-l', '/tmp']
    """

    def __init__(self, limits: Optional[LimitsConfig] = None):
        self._limits = limits or LimitsConfig()

    @property
    def max_tokens(self) -> int:
        return self._limits.max_tokens

    @property
    def max_line_length(self) -> int:
        return self._limits.max_line_length

    def tokenize(self, line: str) -> List[str]:
        """Split a line using the configured limits."""
        return tokenize(
            line,
            max_tokens=self._limits.max_tokens,
            max_line_length=self._limits.max_line_length,
        )
