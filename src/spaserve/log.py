"""Logging setup and the per-request access line.

Uses named stdlib loggers: ``spaserve.server`` for lifecycle and errors,
``spaserve.access`` for one line per request.
"""

import logging

logger = logging.getLogger("spaserve.server")
access_logger = logging.getLogger("spaserve.access")

DEFAULT_LEVEL = logging.INFO
LOG_FORMAT = "%(asctime)s %(levelname)-5s %(name)s: %(message)s"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def parse_level(value: str) -> int | None:
    """Map a level name to a logging level, or None if unrecognized."""
    return _LEVELS.get(value.strip().lower())


def configure_logging(level: str = "info") -> int:
    """Configure the root logger and return the effective level.

    Unrecognized level names fall back to INFO with a warning rather
    than aborting startup.
    """
    parsed = parse_level(level)
    effective = DEFAULT_LEVEL if parsed is None else parsed
    logging.basicConfig(level=effective, format=LOG_FORMAT)
    logging.getLogger("spaserve").setLevel(effective)
    if parsed is None:
        logger.warning("unknown log level %r, using info", level)
    return effective


def log_access(method: str, path: str, status: int, elapsed: float) -> None:
    """Emit the access line for a finished request.

    *elapsed* is in seconds. Fields are also attached to the record so
    structured handlers can pick them up without parsing the message.
    """
    latency_ms = elapsed * 1000
    access_logger.info(
        "method=%s path=%s status=%d latency_ms=%.2f",
        method,
        path,
        status,
        latency_ms,
        extra={
            "method": method,
            "path": path,
            "status": status,
            "latency_ms": latency_ms,
        },
    )
