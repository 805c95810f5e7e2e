# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class InvalidMethodError(ValueError):
    """Raised when a request is issued with an unsupported HTTP method."""

    def __init__(self, method: object):
        super().__init__(f"method {method!r} is not a supported HTTP method")
        self.method = method


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    HTTP_ERROR = "HTTP_ERROR"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        return ErrorCategory.HTTP_ERROR

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    cause = exc.__cause__ or exc.__context__
    if isinstance(cause, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR
    if isinstance(cause, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


__all__ = ["ErrorCategory", "InvalidMethodError", "categorize_exception"]
