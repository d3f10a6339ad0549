"""Declared event signatures and their runtime checks.

Events are declared as a class whose annotations map each event name to
the handler's ``Callable`` type::

    class ChatEvents:
        message: Callable[[str, int], None]
        closed: Callable[[], None]

The same class parameterizes :class:`~typed_emitter.core.emitter.EventEmitter`
for static checkers, and can be handed to the emitter as ``schema=`` to
check names and arguments at runtime.
"""

import collections.abc
import inspect
import logging
import typing
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

from ..config import EventSignatureError
from ..utils import describe_handler

logger = logging.getLogger(__name__)

# int is acceptable where float is declared, int and float where complex is
_NUMERIC_PROMOTIONS = {
    float: (int, float),
    complex: (int, float, complex),
}


@dataclass(frozen=True)
class EventSignature:
    """Parameter types declared for one event.

    ``params`` is None when the declaration is ``Callable[..., R]`` (or a
    bare ``Callable``), meaning any arguments are accepted.
    """
    name: str
    params: Optional[Tuple[Any, ...]]

    @property
    def arity(self) -> Optional[int]:
        return None if self.params is None else len(self.params)


def _parse_callable(name: str, annotation: Any) -> EventSignature:
    origin = typing.get_origin(annotation)
    if annotation is collections.abc.Callable or annotation is typing.Callable:
        return EventSignature(name, None)
    if origin is not collections.abc.Callable:
        raise EventSignatureError(
            f"Event '{name}' must be declared as a Callable, got {annotation!r}"
        )

    args = typing.get_args(annotation)
    params = args[0] if args else ...
    if params is ...:
        return EventSignature(name, None)
    return EventSignature(name, tuple(params))


class EventSchema:
    """Event name to :class:`EventSignature` mapping with runtime checks."""

    def __init__(self, signatures: Dict[str, EventSignature]):
        self.signatures = signatures

    @classmethod
    def from_class(cls, events: type) -> 'EventSchema':
        """Build a schema from an events declaration class.

        Args:
            events: Class whose annotations declare the events

        Returns:
            EventSchema with one signature per annotation

        Raises:
            EventSignatureError: If an annotation is not a Callable type
        """
        hints = typing.get_type_hints(events)
        signatures = {
            name: _parse_callable(name, annotation)
            for name, annotation in hints.items()
        }
        logger.debug(
            "Loaded event schema %s with %d event(s)",
            events.__name__, len(signatures)
        )
        return cls(signatures)

    def signature(self, event: Hashable) -> EventSignature:
        try:
            return self.signatures[event]
        except (KeyError, TypeError):
            raise EventSignatureError(
                f"Event {event!r} is not declared"
            ) from None

    def check_handler(self, event: Hashable, handler: Callable[..., Any]) -> None:
        """Verify ``handler`` accepts the arguments declared for ``event``.

        Handlers whose signature cannot be introspected (some builtins)
        are accepted.

        Raises:
            EventSignatureError: If the event is undeclared or the handler
                cannot take the declared number of positional arguments
        """
        sig = self.signature(event)
        if sig.arity is None:
            return
        try:
            handler_sig = inspect.signature(handler)
        except (TypeError, ValueError):
            return
        try:
            handler_sig.bind(*range(sig.arity))
        except TypeError as e:
            raise EventSignatureError(
                f"Handler {describe_handler(handler)} cannot accept "
                f"{sig.arity} argument(s) for event '{sig.name}': {e}"
            ) from e

    def check_args(self, event: Hashable, args: Tuple[Any, ...]) -> None:
        """Verify emitted ``args`` match the declaration for ``event``.

        Only plain classes are checked with isinstance; ``Any``, unions
        and generic aliases pass through.

        Raises:
            EventSignatureError: On an undeclared event, wrong argument
                count, or an argument of the wrong class
        """
        sig = self.signature(event)
        if sig.params is None:
            return
        if len(args) != len(sig.params):
            raise EventSignatureError(
                f"Event '{sig.name}' expects {len(sig.params)} argument(s), "
                f"got {len(args)}"
            )
        for position, (value, expected) in enumerate(zip(args, sig.params)):
            if expected is Any or expected is object:
                continue
            if not isinstance(expected, type):
                continue
            if typing.get_origin(expected) is not None:
                continue
            accepted = _NUMERIC_PROMOTIONS.get(expected, expected)
            try:
                matches = isinstance(value, accepted)
            except TypeError:
                # Protocols without runtime_checkable
                continue
            if not matches:
                raise EventSignatureError(
                    f"Event '{sig.name}' argument {position} must be "
                    f"{expected.__name__}, got {type(value).__name__}"
                )

    def __contains__(self, event):
        return event in self.signatures
