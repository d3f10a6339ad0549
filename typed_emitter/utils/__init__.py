"""Utility functions for the event emitter."""

from .formatters import describe_handler, format_args
from .cli_helpers import print_error, print_info

__all__ = [
    'describe_handler',
    'format_args',
    'print_error',
    'print_info',
]
