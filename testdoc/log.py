"""Central logging setup for the library.

Records go to loggers under the ``testdoc`` namespace. Handlers and levels
are left to the application; the package logger only carries a
``NullHandler`` so nothing is printed unless the application configures
logging.
"""

from __future__ import annotations

import logging

PACKAGE_LOGGER = "testdoc"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-level logger under the package namespace."""
    return logging.getLogger(name or PACKAGE_LOGGER)
