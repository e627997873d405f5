"""Server configuration.

ServerConfig is a frozen dataclass: immutable after creation, passed into
``App`` at construction, never read from module-level state.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from spaserve.errors import ConfigurationError

# Environment variable holding the log level (debug, info, warning, ...)
LOG_LEVEL_ENV = "SPASERVE_LOG"


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Server configuration. Immutable after creation.

    All fields have defaults matching the stock deployment::

        config = ServerConfig(static_dir="dist", port=3000)
    """

    # Listener
    host: str = "0.0.0.0"
    port: int = 8080

    # Static files
    static_dir: str | Path = "static"
    index: str = "index.html"
    chunk_size: int = 64 * 1024

    # Logging
    log_level: str = "info"

    def __post_init__(self) -> None:
        if not 0 <= self.port <= 65535:
            msg = f"port must be between 0 and 65535, got {self.port}"
            raise ConfigurationError(msg)
        if self.chunk_size <= 0:
            msg = f"chunk_size must be positive, got {self.chunk_size}"
            raise ConfigurationError(msg)
        if not self.index or "/" in self.index:
            msg = f"index must be a plain file name, got {self.index!r}"
            raise ConfigurationError(msg)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: object,
    ) -> "ServerConfig":
        """Build a config from the process environment.

        Only the log level is read from the environment; everything else
        keeps its default unless passed in *overrides*.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        level = env.get(LOG_LEVEL_ENV, "").strip()
        if level:
            values["log_level"] = level
        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]
