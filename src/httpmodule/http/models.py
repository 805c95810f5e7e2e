# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request configuration, retry policy and result models."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

import httpx

from ..config import DEFAULT_RETRY_DELAY, HttpSettings

Headers = dict[str, str]
RequestConfig = dict[str, Any]


def _non_negative_int(value: Any) -> int:
    try:
        return max(0, int(value or 0))
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class RetryPolicy:
    """How many times a failed request is resubmitted, and how long to wait in between."""

    retry: int = 0
    retry_delay: float = DEFAULT_RETRY_DELAY

    @property
    def enabled(self) -> bool:
        return self.retry > 0

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None) -> RetryPolicy:
        """Read ``retry``/``retry_delay`` from a resolved request config."""
        config = config or {}
        delay = config.get("retry_delay")
        try:
            retry_delay = max(0.0, float(delay)) if delay else DEFAULT_RETRY_DELAY
        except (TypeError, ValueError):
            retry_delay = DEFAULT_RETRY_DELAY
        return cls(retry=_non_negative_int(config.get("retry")), retry_delay=retry_delay)

    @classmethod
    def from_settings(cls, settings: HttpSettings) -> RetryPolicy:
        return cls(retry=max(0, settings.retry), retry_delay=max(0.0, settings.retry_delay))


@dataclass(frozen=True)
class RetryState:
    """Per-attempt context; each resubmission gets a fresh instance."""

    retry_count: int = 0

    def advance(self) -> RetryState:
        return replace(self, retry_count=self.retry_count + 1)


@dataclass
class HttpResult:
    """Response-shaped value: decoded body, status and a human-readable status text."""

    data: Any = None
    status: int = 0
    status_text: str = ""
    headers: Headers = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 400

    @classmethod
    def from_response(cls, response: httpx.Response, status_text: str | None = None) -> HttpResult:
        return cls(
            data=decode_body(response),
            status=response.status_code,
            status_text=response.reason_phrase if status_text is None else status_text,
            headers=dict(response.headers),
        )


def decode_body(response: httpx.Response) -> Any:
    """Return the JSON-decoded body when possible, the text otherwise."""
    if not response.content:
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text
