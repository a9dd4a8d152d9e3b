"""
SeaShell Process Module

Child process management:
- Process handles and states
- Standard stream redirection
- Fork/exec orchestration of single commands and pipelines
"""

from .states import ProcessState
from .handle import ProcessHandle, describe_status
from .redirection import apply_input, apply_output, bind_stream
from .orchestrator import ProcessOrchestrator, exec_program

__all__ = [
    # States
    'ProcessState',
    # Handles
    'ProcessHandle',
    'describe_status',
    # Redirection
    'apply_input',
    'apply_output',
    'bind_stream',
    # Orchestration
    'ProcessOrchestrator',
    'exec_program',
]
