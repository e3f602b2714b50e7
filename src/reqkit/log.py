# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for reqkit.

The library only emits records on the ``reqkit`` logger hierarchy; nothing is
printed until an application calls :func:`setup_logging` or configures logging
itself.
"""

from __future__ import annotations

import logging
import os
from typing import TextIO

LOGGER_NAME = "reqkit"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def default_log_level() -> str:
    return os.getenv("REQKIT_LOG_LEVEL", "WARNING").upper()


def setup_logging(level: str | None = None, *, stream: TextIO | None = None) -> logging.Logger:
    """Attach a stream handler to the ``reqkit`` logger and set its level."""
    effective_level = (level or default_log_level()).upper()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, effective_level, logging.WARNING))
    if not any(getattr(handler, "_reqkit_handler", False) for handler in logger.handlers):
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._reqkit_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())

__all__ = ["LOGGER_NAME", "setup_logging"]
