"""CLI presentation layer for event emitters.

Renders an emitter's registrations as a rich table and can trace
emissions to the console.
"""

from typing import Any, Hashable, Iterable, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...core import Connection, EventEmitter
from ...utils import describe_handler, format_args


class EmitterPresenter:
    """Displays emitter state and emitted events in the terminal.

    Example:
        emitter = EventEmitter()
        presenter = EmitterPresenter()
        presenter.attach(emitter, ['test'])

        emitter.emit('test', 'hello', 4)   # prints "test ('hello', 4)"
        presenter.render(emitter)          # prints the registration table
    """

    def __init__(self, console: Optional[Console] = None):
        """Initialize presenter.

        Args:
            console: Rich console to print to (optional, defaults to stdout)
        """
        self.console = console or Console()

    def attach(self, emitter: EventEmitter, events: Iterable[Hashable]) -> List[Connection]:
        """Subscribe a tracing handler to each of ``events``.

        Args:
            emitter: Emitter to trace
            events: Event names to trace

        Returns:
            Connections of the tracing handlers, for detaching later
        """
        connections = []
        for event in events:
            connections.append(emitter.on(event, self._tracer(event)))
        return connections

    def build_table(self, emitter: EventEmitter) -> Table:
        """Build a table with one row per event name.

        Args:
            emitter: Emitter to describe

        Returns:
            Table with event name, listener count and handler columns
        """
        table = Table(box=box.SIMPLE, header_style=None)

        table.add_column("Event", no_wrap=True)
        table.add_column("Listeners", no_wrap=True, justify="right")
        table.add_column("Handlers")

        for event in emitter.event_names():
            count = emitter.listener_count(event)
            handlers = ", ".join(
                escape(describe_handler(h)) for h in emitter.listeners(event)
            )
            # Emptied registries are kept, dim them
            count_display = str(count) if count else f"[dim]{count}[/dim]"
            table.add_row(escape(str(event)), count_display, handlers)

        return table

    def render(self, emitter: EventEmitter):
        """Print the registration table for ``emitter``."""
        self.console.print(self.build_table(emitter))

    def _tracer(self, event: Hashable):
        def trace(*args: Any):
            self.console.print(
                f"[bold cyan]{escape(str(event))}[/bold cyan] {escape(format_args(args))}",
                highlight=False,
            )
        trace.__qualname__ = f"trace[{event}]"
        return trace
