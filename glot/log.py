"""Logging setup for the glot runner, REPL and server.

The tokenizer, parsers and evaluator never log; only the layers that drive
them (program assembly, execution, the command-line surfaces) do.
"""
import logging
import logging.config
from threading import RLock
from typing import Any

_CONFIG_LOCK = RLock()
_CONFIGURED = False

_DEFAULT_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "formatter": "standard",
        }
    },
    "loggers": {
        "glot": {
            "level": "WARNING",
            "handlers": ["console"],
            "propagate": False,
        }
    },
}


def configure(level: str | int | None = None) -> None:
    """Install the default logging config once; later calls only adjust the level."""
    global _CONFIGURED
    with _CONFIG_LOCK:
        if not _CONFIGURED:
            logging.config.dictConfig(_DEFAULT_CONFIG)
            _CONFIGURED = True
        if level is not None:
            if isinstance(level, str):
                level = level.upper()
            logging.getLogger("glot").setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the "glot" namespace."""
    if not name.startswith("glot"):
        name = f"glot.{name}"
    return logging.getLogger(name)
