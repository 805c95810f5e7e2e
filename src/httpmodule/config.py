# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for httpmodule."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"httpmodule/{__version__}"
DEFAULT_TIMEOUT = 10.0
DEFAULT_RETRY_DELAY = 0.02


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """Client defaults. Durations are in seconds."""

    base_url: str = ""
    timeout: float = DEFAULT_TIMEOUT
    retry: int = 0
    retry_delay: float = DEFAULT_RETRY_DELAY
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            base_url=os.getenv("HTTPMODULE_BASE_URL", cls.base_url),
            timeout=_float_env("HTTPMODULE_HTTP_TIMEOUT", cls.timeout),
            retry=max(0, _int_env("HTTPMODULE_HTTP_RETRIES", cls.retry)),
            retry_delay=max(0.0, _float_env("HTTPMODULE_HTTP_RETRY_DELAY", cls.retry_delay)),
            user_agent=os.getenv("HTTPMODULE_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("HTTPMODULE_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("HTTPMODULE_HTTP_VERIFY_SSL", cls.verify_ssl),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()
