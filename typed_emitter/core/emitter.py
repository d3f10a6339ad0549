"""Typed event emitter built on per-event handler registries."""

import logging
from typing import Any, Callable, Dict, Generic, Hashable, List, Optional, TypeVar, Union

from ..config import EmitterConfig
from ..utils import describe_handler, format_args
from .registry import HandlerRegistry
from .schema import EventSchema
from .signal import Connection

logger = logging.getLogger(__name__)

EventsT = TypeVar('EventsT')

Handler = Callable[..., Any]


class OnceWrapper:
    """Handler registered by :meth:`EventEmitter.once`.

    Unsubscribes itself from ``event`` and then calls the wrapped handler.
    """

    def __init__(self, emitter: 'EventEmitter', event: Hashable, handler: Handler):
        self.emitter = emitter
        self.event = event
        self.__wrapped__ = handler

    def __call__(self, *args: Any) -> Any:
        self.emitter.off(self.event, self)
        return self.__wrapped__(*args)

    def __repr__(self):
        return f"once({describe_handler(self.__wrapped__)})"


class EventEmitter(Generic[EventsT]):
    """Dispatches named events to registered handlers synchronously.

    A :class:`HandlerRegistry` is created for an event name the first
    time a handler subscribes to it and is kept afterwards, even once
    empty, unless ``config.prune_empty`` is set. Emitting an event nobody
    subscribed to does nothing.

    Handlers run in subscription order on the caller's stack. They may
    call back into the emitter: handlers added during an emission run
    from the next emission on, handlers removed before they are reached
    are skipped. A handler raising an exception is logged and the rest
    still run.

    Passing ``schema`` (an events declaration class, see
    :mod:`typed_emitter.core.schema`) turns on runtime checks of event
    names, handler arity and emitted arguments.

    Example:
        >>> class Events:
        ...     test: Callable[[str, int], None]
        >>> emitter: EventEmitter[Events] = EventEmitter(schema=Events)
        >>> conn = emitter.on('test', lambda a, b: print(a, b))
        >>> emitter.emit('test', 'hello', 4)
        hello 4
    """

    def __init__(
        self,
        schema: Union[type, EventSchema, None] = None,
        config: Optional[EmitterConfig] = None,
    ):
        """Initialize an emitter with no registries.

        Args:
            schema: Events declaration class or prepared EventSchema
                (optional, no runtime checks if None)
            config: Emitter behavior settings (optional, defaults apply)
        """
        if schema is not None and not isinstance(schema, EventSchema):
            schema = EventSchema.from_class(schema)
        self.schema: Optional[EventSchema] = schema
        self.config = config or EmitterConfig()
        self._registries: Dict[Hashable, HandlerRegistry] = {}

    # --- SUBSCRIPTION ---

    def on(self, event: Hashable, handler: Handler) -> Connection:
        """Subscribe ``handler`` to ``event``.

        Subscribing the same handler twice gives two live subscriptions;
        :meth:`off` removes the most recent one.

        Args:
            event: Event name
            handler: Callable invoked with the emitted arguments

        Returns:
            Connection handle that can disconnect this subscription directly

        Raises:
            EventSignatureError: If a schema is set and the event is
                undeclared or the handler does not fit its signature
        """
        if self.schema is not None:
            self.schema.check_handler(event, handler)
        return self._subscribe(event, handler)

    add_listener = on

    def once(self, event: Hashable, handler: Handler) -> Connection:
        """Subscribe ``handler`` for the next emission of ``event`` only.

        The registry holds a wrapper rather than ``handler`` itself, so
        ``off(event, handler)`` raises :class:`NotSubscribedError`; use the
        returned connection to cancel before the event fires. The wrapper
        unsubscribes before calling ``handler``, so nested emissions of the
        same event cannot reach it twice.

        Args:
            event: Event name
            handler: Callable invoked with the emitted arguments

        Returns:
            Connection handle of the wrapper's subscription
        """
        if self.schema is not None:
            self.schema.check_handler(event, handler)
        return self._subscribe(event, OnceWrapper(self, event, handler))

    def off(self, event: Hashable, handler: Handler) -> None:
        """Unsubscribe ``handler`` from ``event``.

        Does nothing if ``event`` has no registry.

        Args:
            event: Event name
            handler: Handler previously passed to :meth:`on`

        Raises:
            NotSubscribedError: If the handler is not subscribed to the event
        """
        registry = self._registries.get(event)
        if registry is None:
            return
        registry.unsubscribe(handler)
        logger.debug("Unsubscribed %s from '%s'", describe_handler(handler), event)
        self._prune(event, registry)

    remove_listener = off

    def remove_all_listeners(self, event: Optional[Hashable] = None) -> None:
        """Unsubscribe every handler from ``event``, or from all events.

        Args:
            event: Event name, or None for every event
        """
        if event is None:
            targets = list(self._registries.items())
        elif event in self._registries:
            targets = [(event, self._registries[event])]
        else:
            return

        for name, registry in targets:
            registry.clear()
            self._prune(name, registry)

    # --- EMISSION ---

    def emit(self, event: Hashable, *args: Any) -> None:
        """Call every handler subscribed to ``event`` with ``args``.

        Args:
            event: Event name
            *args: Arguments passed to each handler

        Raises:
            EventSignatureError: If a schema is set and the event is
                undeclared or the arguments do not match it
        """
        if self.schema is not None:
            self.schema.check_args(event, args)

        registry = self._registries.get(event)
        if registry is None:
            return
        if self.config.log_emits:
            logger.debug(
                "Emitting '%s'%s to %d handler(s)",
                event, format_args(args), registry.active_count()
            )
        registry.notify(*args)

    # --- INTROSPECTION ---

    def event_names(self) -> List[Hashable]:
        """Event names that have a registry, including emptied ones."""
        return list(self._registries)

    def listener_count(self, event: Hashable) -> int:
        """Number of live subscriptions for ``event``."""
        registry = self._registries.get(event)
        if registry is None:
            return 0
        return registry.active_count()

    def listeners(self, event: Hashable) -> List[Handler]:
        """Snapshot of the handlers subscribed to ``event``."""
        registry = self._registries.get(event)
        if registry is None:
            return []
        return registry.current_handlers()

    def __contains__(self, event) -> bool:
        return event in self._registries

    # --- INTERNALS ---

    def _subscribe(self, event: Hashable, handler: Handler) -> Connection:
        registry = self._registries.get(event)
        if registry is None:
            registry = HandlerRegistry(event)
            self._registries[event] = registry
        connection = registry.subscribe(handler)
        logger.debug("Subscribed %s to '%s'", describe_handler(handler), event)
        return connection

    def _prune(self, event: Hashable, registry: HandlerRegistry) -> None:
        if not self.config.prune_empty or registry.active_count():
            return
        if self._registries.get(event) is registry:
            del self._registries[event]
            logger.debug("Pruned empty registry for '%s'", event)
