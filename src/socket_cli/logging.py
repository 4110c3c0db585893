"""Logging bootstrap for the CLI entry points.

Diagnostics go through the standard :mod:`logging` module on stderr;
user-facing output goes through the Rich console instead.  Modules only
ever call ``logging.getLogger(__name__)``; this module configures the
root logger once per process.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: int = logging.WARNING) -> None:
    """Configure the root logger once.

    Repeated calls keep the handlers installed by the first call, so
    embedding environments (and pytest's caplog) are left intact.

    Usage example
    -------------
        configure_logging(logging.DEBUG)
        logging.getLogger(__name__).debug("hello")
    """
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("socket_cli").setLevel(level)
    # httpx logs every request at INFO; keep it quiet unless debugging.
    logging.getLogger("httpx").setLevel(logging.DEBUG if level <= logging.DEBUG else logging.WARNING)
