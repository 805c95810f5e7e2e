# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for httpmodule."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("HTTPMODULE_LOG_LEVEL", "WARNING").upper()

# httpx logs every request at INFO; only surface that when debugging.
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for applications embedding the client."""
    effective_level = getattr(logging, (level or DEFAULT_LOG_LEVEL).upper(), logging.WARNING)
    logging.basicConfig(
        level=effective_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    transport_level = logging.DEBUG if effective_level <= logging.DEBUG else logging.WARNING
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)


__all__ = ["setup_logging"]
