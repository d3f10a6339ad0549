"""Configuration package for the event emitter."""

from .models import (
    AppConfig,
    EmitterConfig,
    LoggingConfig,
    EmitterError,
    ConfigError,
    NotSubscribedError,
    EventSignatureError,
    safe_load_dataclass,
)

__all__ = [
    'AppConfig',
    'EmitterConfig',
    'LoggingConfig',
    'EmitterError',
    'ConfigError',
    'NotSubscribedError',
    'EventSignatureError',
    'safe_load_dataclass',
]
