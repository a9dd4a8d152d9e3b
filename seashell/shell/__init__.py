"""
SeaShell Shell Module

Provides the interactive command-line shell:
- Tokenization
- Operator classification
- Built-in commands
"""

from .tokenizer import Tokenizer, tokenize
from .parser import (
    CommandParser,
    CommandPlan,
    OutputRedirect,
    PipelineStage,
    Token,
    TokenType,
)
from .builtins import BuiltinCommands
from .shell import Shell, create_shell

__all__ = [
    'Tokenizer',
    'tokenize',
    'CommandParser',
    'CommandPlan',
    'OutputRedirect',
    'PipelineStage',
    'Token',
    'TokenType',
    'BuiltinCommands',
    'Shell',
    'create_shell',
]
