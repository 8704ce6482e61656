"""
Command-line adapter
"""
from .app import run, run_session
from .arguments import Invocation, split_arguments

__all__ = [
    "run",
    "run_session",
    "Invocation",
    "split_arguments",
]
