# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
httpmodule package entrypoint.

An asynchronous convenience layer over httpx: default, common, per-method and per-call
headers are merged into each request, bodies are encoded as JSON or form data from the
resolved Content-Type, and failed requests can be resubmitted with a fixed delay.
"""

from .config import HttpSettings, load_http_settings
from .errors import ErrorCategory, InvalidMethodError, categorize_exception
from .http import (
    HeaderLayers,
    HttpClientModule,
    HttpResult,
    RetryingClient,
    RetryPolicy,
    create_client,
    normalize_error,
    resolve_config,
    resolve_headers,
    settle,
)
from .log import setup_logging
from .version import __version__

__all__ = [
    "ErrorCategory",
    "HeaderLayers",
    "HttpClientModule",
    "HttpResult",
    "HttpSettings",
    "InvalidMethodError",
    "RetryPolicy",
    "RetryingClient",
    "categorize_exception",
    "create_client",
    "load_http_settings",
    "normalize_error",
    "resolve_config",
    "resolve_headers",
    "settle",
    "setup_logging",
    "__version__",
]
