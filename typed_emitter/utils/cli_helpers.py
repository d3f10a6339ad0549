"""Console output helpers for scripts built on the emitter."""

from rich.console import Console
from rich.markup import escape

console = Console()


def print_error(msg: str, indent: int = 0):
    """Print an error message in bold red.
    
    Args:
        msg: Error message to display
        indent: Number of spaces to indent
    """
    prefix = " " * indent
    console.print(f"{prefix}[bold red]{escape(msg)}[/bold red]", highlight=False)


def print_info(msg: str, indent: int = 2):
    """Print info message with default 2-space indent.
    
    Args:
        msg: Info message to display, printed without markup
        indent: Number of spaces to indent (default: 2)
    """
    prefix = " " * indent
    console.print(f"{prefix}{msg}", markup=False, highlight=False)
