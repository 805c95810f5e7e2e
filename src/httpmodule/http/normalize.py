# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Turn propagated request failures into response-shaped results.

The client itself raises on failure. Callers that would rather branch on a status code
can wrap a call with :func:`settle` (or catch and pass the exception to
:func:`normalize_error`). Failures without a response get the synthetic status
``NO_RESPONSE_STATUS``.
"""

from __future__ import annotations

from collections.abc import Awaitable

import httpx

from ..errors import ErrorCategory, categorize_exception
from .models import HttpResult

NO_RESPONSE_STATUS = -404

STATUS_TEXTS: dict[int, str] = {
    401: "未授权，请登录",
    403: "拒绝访问",
    408: "请求超时",
    502: "网络错误",
    503: "服务不可用",
    504: "网络超时",
}
CLIENT_ERROR_TEXT = "请求错误"
SERVER_ERROR_TEXT = "服务器错误"
TIMEOUT_TEXT = "请求超时"
NETWORK_ERROR_TEXT = "网络连接失败"


def status_text_for(status: int) -> str:
    if status in STATUS_TEXTS:
        return STATUS_TEXTS[status]
    return SERVER_ERROR_TEXT if status >= 500 else CLIENT_ERROR_TEXT


def normalize_error(exc: httpx.HTTPError) -> HttpResult:
    """Build an HttpResult describing ``exc``."""
    response = exc.response if isinstance(exc, httpx.HTTPStatusError) else None
    if response is not None:
        return HttpResult.from_response(response, status_text=status_text_for(response.status_code))

    text = TIMEOUT_TEXT if categorize_exception(exc) is ErrorCategory.TIMEOUT else NETWORK_ERROR_TEXT
    return HttpResult(data=None, status=NO_RESPONSE_STATUS, status_text=text)


async def settle(call: Awaitable[httpx.Response]) -> HttpResult:
    """Await a client call and return its result; HTTP failures come back normalized."""
    try:
        response = await call
    except httpx.HTTPError as exc:
        return normalize_error(exc)
    return HttpResult.from_response(response)


__all__ = ["NO_RESPONSE_STATUS", "STATUS_TEXTS", "normalize_error", "settle", "status_text_for"]
