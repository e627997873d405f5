"""spaserve CLI — start the static file server.

Entry point registered as ``spaserve`` in ``pyproject.toml``::

    [project.scripts]
    spaserve = "spaserve.cli:main"

No subcommands and no options: the server listens on 0.0.0.0:8080 and
serves ``./static``. The log level comes from ``SPASERVE_LOG``.
"""

import argparse
import logging

from spaserve.app import App
from spaserve.config import LOG_LEVEL_ENV, ServerConfig
from spaserve.errors import BindFailure
from spaserve.log import configure_logging

logger = logging.getLogger("spaserve.server")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``spaserve`` command."""
    parser = argparse.ArgumentParser(
        prog="spaserve",
        description="Serve ./static over HTTP on port 8080.",
        epilog=f"Set {LOG_LEVEL_ENV}=debug|info|warning|error to change log verbosity.",
    )
    parser.parse_args(argv)

    config = ServerConfig.from_env()
    configure_logging(config.log_level)

    app = App(config)
    try:
        app.run()
    except BindFailure as exc:
        logger.error("server error: %s", exc)
        raise SystemExit(1) from exc
