# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Client factory."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..config import HttpSettings

if TYPE_CHECKING:
    from .httpx_client import HttpClientModule


def create_client(options: HttpSettings | Mapping[str, Any] | None = None, **kwargs: Any) -> HttpClientModule:
    """
    Factory for the default httpx-backed client.

    ``options`` is either an HttpSettings or a mapping of HttpClientModule keyword
    arguments (``base_url``, ``headers``, ``timeout``, ``retry``, ``retry_delay``, ...).
    Keyword arguments override entries of the mapping.
    """
    from .httpx_client import HttpClientModule

    if isinstance(options, HttpSettings):
        return HttpClientModule(options, **kwargs)
    return HttpClientModule(**{**(options or {}), **kwargs})
