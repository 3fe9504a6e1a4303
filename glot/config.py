"""
Glot Configuration
==================
Settings shared by the runner, the REPL and the HTTP server. Populate the
fields directly (from CLI flags) or from GLOT_* environment variables.
"""
import os
from dataclasses import dataclass, fields


_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class GlotConfig:
    """Configuration for running glot programs."""

    continue_on_error: bool = False   # Skip malformed lines instead of stopping
    log_level: str = "WARNING"        # Level for the "glot" logger
    encoding: str = "utf-8"           # Source file encoding
    host: str = "127.0.0.1"           # HTTP server bind address
    port: int = 8000                  # HTTP server port

    ENV_VARS = {
        "continue_on_error": "GLOT_CONTINUE_ON_ERROR",
        "log_level": "GLOT_LOG_LEVEL",
        "encoding": "GLOT_SOURCE_ENCODING",
        "host": "GLOT_HOST",
        "port": "GLOT_PORT",
    }

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "GlotConfig":
        """Build a config, overriding defaults with any GLOT_* variables set."""
        environ = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            var = cls.ENV_VARS[f.name]
            raw = environ.get(var)
            if raw is None or raw == "":
                continue
            if f.type in (bool, "bool"):
                values[f.name] = raw.strip().lower() in _TRUE_VALUES
            elif f.type in (int, "int"):
                try:
                    values[f.name] = int(raw)
                except ValueError:
                    raise ValueError(f"{var} must be an integer, got {raw!r}") from None
            elif f.name == "log_level":
                values[f.name] = raw.strip().upper()
            else:
                values[f.name] = raw
        return cls(**values)
