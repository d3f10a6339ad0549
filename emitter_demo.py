#!/usr/bin/env python3
"""Walkthrough of the typed event emitter.

Subscribes, emits, unsubscribes and re-subscribes handlers on a small set
of declared events, then prints the emitter's registrations.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Callable

from dotenv import load_dotenv

from typed_emitter import EventEmitter, EmitterError
from typed_emitter.config import AppConfig
from typed_emitter.interfaces.cli.presenter import EmitterPresenter
from typed_emitter.utils import print_error, print_info

# Logger will be configured in main() after loading config
logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "config.yaml"


class DemoEvents:
    """Events used by the walkthrough."""
    test: Callable[[str, int], None]
    offTest: Callable[[str], None]


def setup_logging(config_log_level: str) -> None:
    """Configure console logging."""
    log_level = getattr(logging, config_log_level.upper(), logging.INFO)

    console_formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(funcName)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(console_formatter)

    logging.basicConfig(
        level=log_level,
        handlers=[console_handler],
        force=True
    )


def initialize_app() -> AppConfig:
    """Load configuration named by EMITTER_CONFIG, or defaults."""
    load_dotenv()
    config_path = os.getenv("EMITTER_CONFIG")
    if config_path:
        return AppConfig.load(config_path)
    if Path(DEFAULT_CONFIG_FILENAME).exists():
        return AppConfig.load(DEFAULT_CONFIG_FILENAME)
    return AppConfig.default()


def run_walkthrough(emitter: EventEmitter[DemoEvents]) -> None:
    """Exercise on/emit/off/once against ``emitter``."""
    emitter.on("test", lambda a, b: print_info(f"test fired with {a!r}, {b}"))

    print_info("emit test event", indent=0)
    emitter.emit("test", "hello", 4)
    emitter.emit("test", "hello 2", 5)

    print_info("testing EventEmitter.off", indent=0)

    def listener(message: str) -> None:
        print_info("offTest event fired with message: " + message)

    emitter.on("offTest", listener)
    emitter.emit("offTest", "hello")

    emitter.off("offTest", listener)
    # Nothing is printed for this one
    emitter.emit("offTest", "hello 2")
    print_info("nothing printed after off, good!")

    emitter.on("offTest", listener)
    emitter.emit("offTest", "hello 3")

    print_info("testing EventEmitter.once", indent=0)
    emitter.once("test", lambda a, b: print_info(f"once fired with {a!r}, {b}"))
    emitter.emit("test", "first", 1)
    emitter.emit("test", "second", 2)


def main() -> None:
    """Main entry point for the walkthrough."""
    try:
        config = initialize_app()
        setup_logging(config.logging.level)

        emitter: EventEmitter[DemoEvents] = EventEmitter(
            schema=DemoEvents, config=config.emitter
        )
        run_walkthrough(emitter)

        EmitterPresenter().render(emitter)

    except EmitterError as e:
        print_error(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        print_error(f"Unexpected Error: {e}")
        logger.debug("Unexpected error occurred", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
