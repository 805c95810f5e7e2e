# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .client import create_client
from .headers import (
    HTTP_METHODS,
    HeaderLayers,
    header_value,
    normalize_method,
    resolve_config,
    resolve_headers,
)
from .httpx_client import HttpClientModule, RetryingClient
from .models import Headers, HttpResult, RequestConfig, RetryPolicy, RetryState
from .normalize import NO_RESPONSE_STATUS, normalize_error, settle
from .progress import CountingProgress, LoggingProgress, NullProgress, ProgressObserver
from .retry import send_with_retries, should_retry
from .serialize import FORM_CONTENT_TYPE, JSON_CONTENT_TYPE, encode_body

__all__ = [
    "FORM_CONTENT_TYPE",
    "HTTP_METHODS",
    "JSON_CONTENT_TYPE",
    "NO_RESPONSE_STATUS",
    "CountingProgress",
    "HeaderLayers",
    "Headers",
    "HttpClientModule",
    "HttpResult",
    "LoggingProgress",
    "NullProgress",
    "ProgressObserver",
    "RequestConfig",
    "RetryPolicy",
    "RetryState",
    "RetryingClient",
    "create_client",
    "encode_body",
    "header_value",
    "normalize_error",
    "normalize_method",
    "resolve_config",
    "resolve_headers",
    "send_with_retries",
    "settle",
    "should_retry",
]
