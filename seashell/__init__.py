"""
SeaShell - A small interactive command interpreter

Reads a line, splits it into a command and its operators, and runs it
directly, with redirection, as a two-stage pipeline, or in the background.
"""

__version__ = "1.0.0"
__author__ = "SeaShell Project"

from .shell.shell import Shell, create_shell
from .shell.parser import CommandParser, CommandPlan
from .process.orchestrator import ProcessOrchestrator

__all__ = [
    'Shell',
    'create_shell',
    'CommandParser',
    'CommandPlan',
    'ProcessOrchestrator',
]
