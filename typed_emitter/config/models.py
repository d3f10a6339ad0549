"""Configuration models and exceptions for the event emitter."""

import logging
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


# --- CUSTOM EXCEPTIONS ---

class EmitterError(Exception):
    """Base exception for event emitter errors."""


class ConfigError(EmitterError):
    """Configuration loading error."""


class NotSubscribedError(EmitterError):
    """Handler is not subscribed to the event it is being removed from.

    Raised both for handlers that were never registered and for handlers
    that were already removed.
    """

    def __init__(self, event_name, handler):
        self.event_name = event_name
        self.handler = handler
        super().__init__(
            f"Handler {handler!r} is not subscribed to event {event_name!r}"
        )


class EventSignatureError(EmitterError):
    """Event name or arguments do not match the declared event schema."""


# --- CONFIGURATION DATACLASSES ---

@dataclass
class EmitterConfig:
    """Configuration for emitter behavior."""
    prune_empty: bool = False
    log_emits: bool = False


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""
    level: str = "INFO"


# --- HELPER FUNCTIONS ---

def safe_load_dataclass(dclass_type, data: dict, section_name: str):
    """Safely load a dataclass from a dictionary.
    
    Ignores unknown keys and logs warnings for them.
    
    Args:
        dclass_type: Dataclass type to instantiate
        data: Dictionary with configuration data
        section_name: Name of config section (for logging)
        
    Returns:
        Instance of dclass_type with filtered data
    """
    valid_keys = {f.name for f in fields(dclass_type)}
    filtered_data = {}

    for k, v in data.items():
        if k in valid_keys:
            filtered_data[k] = v
        else:
            logger.warning(
                "Config warning: Unknown key '%s' in section '%s' ignored.",
                k, section_name
            )

    return dclass_type(**filtered_data)


@dataclass
class AppConfig:
    """Main application configuration container."""
    emitter: EmitterConfig
    logging: LoggingConfig

    @classmethod
    def default(cls) -> 'AppConfig':
        """Build a configuration with every section at its defaults."""
        return cls(emitter=EmitterConfig(), logging=LoggingConfig())

    @classmethod
    def load(cls, config_path: Path | str) -> 'AppConfig':
        """Load application configuration from a YAML file.
        
        Args:
            config_path: Path to config.yaml file
            
        Returns:
            AppConfig instance with loaded configuration
            
        Raises:
            ConfigError: If file not found, YAML parsing fails or the
                document is not a mapping
        """
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Configuration file '{path}' not found.")

        try:
            with path.open('r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing YAML: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Configuration file '{path}' must contain a mapping."
            )

        try:
            return cls(
                emitter=safe_load_dataclass(
                    EmitterConfig, data.get('emitter') or {}, 'emitter'
                ),
                logging=safe_load_dataclass(
                    LoggingConfig, data.get('logging') or {}, 'logging'
                ),
            )
        except (TypeError, AttributeError) as e:
            raise ConfigError(f"Invalid configuration section: {e}") from e
