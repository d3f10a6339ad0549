"""Typed publish/subscribe event emitter."""

from .config import (
    EmitterConfig,
    EmitterError,
    NotSubscribedError,
    EventSignatureError,
)
from .core import EventEmitter, HandlerRegistry, Connection, Signal

__all__ = [
    'EventEmitter',
    'HandlerRegistry',
    'Connection',
    'Signal',
    'EmitterConfig',
    'EmitterError',
    'NotSubscribedError',
    'EventSignatureError',
]

__version__ = '1.0.0'
