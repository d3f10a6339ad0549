"""Synchronous signal primitive with revocable connections."""

import logging
from typing import Any, Callable, List, Optional

from ..utils import describe_handler

logger = logging.getLogger(__name__)


class Connection:
    """Handle for one handler's registration on a :class:`Signal`.

    Each call to :meth:`Signal.connect` produces a new connection, so the
    same handler connected twice has two independent handles.
    ``on_disconnect`` is called with the connection once it is severed.
    """

    def __init__(
        self,
        signal: 'Signal',
        handler: Callable[..., Any],
        on_disconnect: Optional[Callable[['Connection'], None]] = None,
    ):
        self._signal: Optional[Signal] = signal
        self._on_disconnect = on_disconnect
        self.handler = handler

    @property
    def connected(self) -> bool:
        """True while the handler is still subscribed."""
        return self._signal is not None

    def disconnect(self) -> None:
        """Sever the subscription. Calling it again is a no-op."""
        signal = self._signal
        if signal is None:
            return
        self._signal = None
        signal._remove(self)
        if self._on_disconnect is not None:
            self._on_disconnect(self)

    def __repr__(self):
        state = 'connected' if self.connected else 'disconnected'
        return f"<Connection {describe_handler(self.handler)} ({state})>"


class Signal:
    """Ordered set of connections fired synchronously.

    Firing walks a snapshot of the connections taken when the fire starts:
    handlers connected mid-fire wait for the next fire, handlers
    disconnected mid-fire are skipped if not yet reached. An exception
    raised by one handler is logged and does not stop the others.

    Example:
        >>> signal = Signal()
        >>> conn = signal.connect(print)
        >>> signal.fire('hello')
        hello
        >>> conn.disconnect()
        >>> signal.fire('hello')
    """

    def __init__(self, name: str = ''):
        self.name = name
        self._connections: List[Connection] = []

    def connect(
        self,
        handler: Callable[..., Any],
        on_disconnect: Optional[Callable[[Connection], None]] = None,
    ) -> Connection:
        """Subscribe a handler.

        Args:
            handler: Callable invoked with the fired arguments
            on_disconnect: Called with the connection once it is severed
                (optional)

        Returns:
            Connection handle for this subscription
        """
        connection = Connection(self, handler, on_disconnect)
        self._connections.append(connection)
        return connection

    def fire(self, *args: Any) -> None:
        """Invoke every connected handler with ``args`` in connection order.

        Args:
            *args: Positional arguments passed to each handler
        """
        for connection in list(self._connections):
            if not connection.connected:
                continue
            try:
                connection.handler(*args)
            except Exception:
                logger.exception(
                    "Handler %s failed for signal '%s'",
                    describe_handler(connection.handler), self.name
                )

    def connection_count(self) -> int:
        """Number of live connections."""
        return len(self._connections)

    def disconnect_all(self) -> None:
        """Sever every connection."""
        for connection in list(self._connections):
            connection.disconnect()

    def _remove(self, connection: Connection) -> None:
        self._connections.remove(connection)
