"""Per-event handler registry."""

import inspect
import logging
from typing import Any, Callable, Dict, Hashable, List

from ..config import NotSubscribedError
from ..utils import describe_handler
from .signal import Connection, Signal

logger = logging.getLogger(__name__)


def handler_key(handler: Callable[..., Any]) -> Hashable:
    """Identity key for ``handler``.

    Bound methods, including those of builtin types, are keyed by receiver
    identity and function so that ``obj.method`` accessed twice maps to one
    key. Every other callable is keyed by ``id``: unhashable callables are
    accepted and equal but distinct callables stay separate.
    """
    if inspect.ismethod(handler):
        return (id(handler.__self__), id(handler.__func__))
    if inspect.isbuiltin(handler):
        receiver = handler.__self__
        if receiver is not None and not inspect.ismodule(receiver):
            return (id(receiver), handler.__name__)
    return id(handler)


class HandlerRegistry:
    """Handlers subscribed to a single event name.

    Maps each handler (by identity) to the connection that subscribed it
    to the registry's :class:`Signal`. Subscribing a handler that is
    already present opens a second, independent connection; the mapping
    then tracks the newest one, so :meth:`unsubscribe` severs the newest
    and the older connection stays live until its handle is disconnected.
    Disconnecting the tracked connection through its handle drops the
    mapping entry as well.

    Example:
        >>> registry = HandlerRegistry('progress')
        >>> conn = registry.subscribe(print)
        >>> registry.notify(50)
        50
        >>> registry.unsubscribe(print)
    """

    def __init__(self, event_name: Hashable):
        self.event_name = event_name
        self.signal = Signal(str(event_name))
        self._connections: Dict[Hashable, Connection] = {}

    def subscribe(self, handler: Callable[..., Any]) -> Connection:
        """Subscribe ``handler`` and track its connection.

        Args:
            handler: Callable to invoke on each notification

        Returns:
            Connection handle for the new subscription
        """
        key = handler_key(handler)
        connection = self.signal.connect(handler, self._forget)
        # Newest subscription moves to the end of the listing order
        self._connections.pop(key, None)
        self._connections[key] = connection
        return connection

    def unsubscribe(self, handler: Callable[..., Any]) -> None:
        """Sever ``handler``'s tracked subscription.

        Safe to call from inside a notification of this registry; a handler
        removed before it is reached is not invoked in that pass.

        Args:
            handler: Previously subscribed handler

        Raises:
            NotSubscribedError: If the handler is not subscribed
        """
        connection = self._connections.pop(handler_key(handler), None)
        if connection is None or not connection.connected:
            raise NotSubscribedError(self.event_name, handler)
        connection.disconnect()

    def notify(self, *args: Any) -> None:
        """Fire the registry's signal with ``args``."""
        self.signal.fire(*args)

    def current_handlers(self) -> List[Callable[..., Any]]:
        """Distinct handlers with a live tracked subscription."""
        return [conn.handler for conn in self._connections.values()]

    def active_count(self) -> int:
        """Number of live subscriptions, duplicates included."""
        return self.signal.connection_count()

    def clear(self) -> None:
        """Sever every subscription, tracked or not."""
        logger.debug(
            "Clearing %d handler(s) from event '%s'",
            self.active_count(), self.event_name
        )
        self.signal.disconnect_all()
        self._connections.clear()

    def _forget(self, connection: Connection) -> None:
        key = handler_key(connection.handler)
        if self._connections.get(key) is connection:
            del self._connections[key]

    def __len__(self) -> int:
        return len(self._connections)

    def __repr__(self):
        names = ", ".join(describe_handler(h) for h in self.current_handlers())
        return f"<HandlerRegistry {self.event_name!r} [{names}]>"
