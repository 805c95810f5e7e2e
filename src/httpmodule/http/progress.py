# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Progress hooks fired around each request."""

from __future__ import annotations

import logging
from typing import Protocol


class ProgressObserver(Protocol):
    """Receives ``start`` when a request is dispatched and ``stop`` once it settles."""

    def start(self) -> None: ...

    def stop(self) -> None: ...


class NullProgress(ProgressObserver):
    def start(self) -> None:
        return None

    def stop(self) -> None:
        return None


class CountingProgress(ProgressObserver):
    """Tracks how many requests are in flight, e.g. to drive a spinner."""

    def __init__(self) -> None:
        self.active = 0
        self.started = 0
        self.stopped = 0

    def start(self) -> None:
        self.active += 1
        self.started += 1

    def stop(self) -> None:
        self.active = max(0, self.active - 1)
        self.stopped += 1

    @property
    def busy(self) -> bool:
        return self.active > 0


class LoggingProgress(ProgressObserver):
    def __init__(self, name: str = "httpmodule.progress") -> None:
        self._logger = logging.getLogger(name)

    def start(self) -> None:
        self._logger.debug("request started")

    def stop(self) -> None:
        self._logger.debug("request settled")


__all__ = ["CountingProgress", "LoggingProgress", "NullProgress", "ProgressObserver"]
