"""
Logging setup for applications embedding the risk engine.
"""

from __future__ import annotations

import logging

from tripsafety.config import settings


def configure_logging(level: str | None = None) -> logging.Logger:
    """Configure root logging once and return the package logger."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper(), logging.INFO),
        format=settings.log_format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("tripsafety")
