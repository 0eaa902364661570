"""Logging setup for the command-line entry point."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Route the package's loggers to stderr at ``level``."""
    root = logging.getLogger("icecreamshop")
    root.setLevel(level)
    if not any(getattr(h, "_icecreamshop", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._icecreamshop = True  # type: ignore[attr-defined]
        root.addHandler(handler)
