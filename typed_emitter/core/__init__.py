"""Core event dispatch: signals, registries and the emitter."""

from .signal import Signal, Connection
from .registry import HandlerRegistry
from .schema import EventSchema, EventSignature
from .emitter import EventEmitter

__all__ = [
    'Signal',
    'Connection',
    'HandlerRegistry',
    'EventSchema',
    'EventSignature',
    'EventEmitter',
]
