# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed client with per-method header merging and retry."""

from __future__ import annotations

import logging
from collections.abc import Coroutine, Mapping
from typing import Any

import httpx

from ..config import HttpSettings, load_http_settings
from .headers import HeaderLayers, normalize_method, resolve_config
from .models import RequestConfig, RetryPolicy
from .progress import NullProgress, ProgressObserver
from .retry import send_with_retries
from .serialize import JSON_CONTENT_TYPE, encode_body

logger = logging.getLogger(__name__)

# Per-call options forwarded to httpx.AsyncClient.request.
TRANSPORT_OPTIONS = ("params", "cookies", "timeout", "follow_redirects", "auth", "extensions")
_CONFIG_KEYS = frozenset(TRANSPORT_OPTIONS) | {"headers", "retry", "retry_delay"}
# httpx body options; the body always comes from the ``data`` argument.
BODY_OPTIONS = ("json", "content", "files")

ResponseCoroutine = Coroutine[Any, Any, httpx.Response]


class HttpClientModule:
    """
    Asynchronous HTTP client wrapper.

    Every call merges the client defaults with its own options (see
    :func:`~httpmodule.http.headers.resolve_config`), serializes ``data`` according to
    the resolved Content-Type and sends it through httpx. Failures (transport errors and
    statuses >= 400) are resubmitted according to the ``retry``/``retry_delay`` options
    and raised once retries are exhausted.
    """

    def __init__(
        self,
        settings: HttpSettings | None = None,
        *,
        base_url: str | None = None,
        headers: HeaderLayers | Mapping[str, Any] | None = None,
        timeout: float | None = None,
        retry: int | None = None,
        retry_delay: float | None = None,
        progress: ProgressObserver | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or load_http_settings()
        self.progress = progress or NullProgress()
        default_policy = RetryPolicy.from_settings(self.settings)
        default_headers = HeaderLayers(
            base={"Content-Type": JSON_CONTENT_TYPE, "User-Agent": self.settings.user_agent},
        )
        self.default_config: RequestConfig = {
            "headers": default_headers.merge(headers),
            "retry": default_policy.retry if retry is None else retry,
            "retry_delay": default_policy.retry_delay if retry_delay is None else retry_delay,
        }
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.settings.base_url if base_url is None else base_url,
            timeout=self.settings.timeout if timeout is None else timeout,
            follow_redirects=self.settings.allow_redirects,
            verify=self.settings.verify_ssl,
            transport=transport,
        )

    def request(self, method: str, url: str, data: Any = None, **config: Any) -> ResponseCoroutine:
        """
        Resolve the request config and return the coroutine that sends it.

        Resolution and body encoding happen before anything is awaited, so an unsupported
        method raises InvalidMethodError at call time.
        """
        method = normalize_method(method)
        body_options = [key for key in BODY_OPTIONS if key in config]
        if body_options:
            raise TypeError(f"unsupported body options {body_options}; pass the body as data")
        resolved = resolve_config(method, self.default_config, config)
        headers = resolved.get("headers") or {}
        content = encode_body(data, headers)
        return self._send(method.upper(), url, content, resolved)

    def get(self, url: str, **config: Any) -> ResponseCoroutine:
        return self.request("get", url, **config)

    def delete(self, url: str, **config: Any) -> ResponseCoroutine:
        return self.request("delete", url, **config)

    def head(self, url: str, **config: Any) -> ResponseCoroutine:
        return self.request("head", url, **config)

    def options(self, url: str, **config: Any) -> ResponseCoroutine:
        return self.request("options", url, **config)

    def post(self, url: str, data: Any = None, **config: Any) -> ResponseCoroutine:
        return self.request("post", url, data, **config)

    def put(self, url: str, data: Any = None, **config: Any) -> ResponseCoroutine:
        return self.request("put", url, data, **config)

    def patch(self, url: str, data: Any = None, **config: Any) -> ResponseCoroutine:
        return self.request("patch", url, data, **config)

    async def _send(self, method: str, url: str, content: bytes | None, config: RequestConfig) -> httpx.Response:
        headers = config.get("headers") or {}
        options = _transport_options(config)
        policy = RetryPolicy.from_config(config)

        async def attempt() -> httpx.Response:
            response = await self._client.request(method, url, content=content, headers=headers, **options)
            if response.status_code >= 400:
                response.raise_for_status()
            return response

        self.progress.start()
        try:
            return await send_with_retries(attempt, policy, describe=f"{method} {url}")
        finally:
            self.progress.stop()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpClientModule:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


RetryingClient = HttpClientModule


def _transport_options(config: Mapping[str, Any]) -> dict[str, Any]:
    unknown = sorted(str(key) for key in config if key not in _CONFIG_KEYS)
    if unknown:
        logger.debug("Ignoring unsupported request options: %s", ", ".join(unknown))
    return {key: config[key] for key in TRANSPORT_OPTIONS if config.get(key) is not None}


__all__ = ["HttpClientModule", "RetryingClient", "TRANSPORT_OPTIONS"]
