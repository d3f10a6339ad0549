"""Formatting utilities for presenting handlers and event data."""

from typing import Any, Callable


def describe_handler(handler: Callable) -> str:
    """Format a handler for logs and tables.
    
    Uses the qualified name where one exists:
    - function or bound method -> 'module.qualname'
    - callable object (including ``once`` wrappers) -> its repr
    
    Args:
        handler: Handler to describe
        
    Returns:
        Human-readable handler description
    """
    qualname = getattr(handler, '__qualname__', None)
    if qualname is None:
        return repr(handler)
    module = getattr(handler, '__module__', None)
    if module:
        return f"{module}.{qualname}"
    return qualname


def format_args(args: tuple[Any, ...]) -> str:
    """Format emitted arguments as a call signature, e.g. ``('hello', 4)``."""
    return "(" + ", ".join(repr(a) for a in args) + ")"
