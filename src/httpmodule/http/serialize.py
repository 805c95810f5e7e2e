# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request body encoding driven by the resolved Content-Type."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from typing import Any
from urllib.parse import quote, urlencode

from .headers import header_value

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json;charset=UTF-8"


def is_form_content_type(headers: Mapping[str, Any] | None) -> bool:
    content_type = header_value(headers, "Content-Type")
    return content_type.split(";", 1)[0].strip().lower() == FORM_CONTENT_TYPE


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _flatten(prefix: str, value: Any) -> Iterator[tuple[str, str]]:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            yield from _flatten(f"{prefix}[{key}]" if prefix else str(key), item)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            yield from _flatten(f"{prefix}[{index}]", item)
    else:
        yield prefix, _scalar(value)


def encode_form(data: Mapping[str, Any]) -> str:
    """URL-encode ``data``; nested values use bracket keys (``a[b]=1``, ``tags[0]=x``)."""
    return urlencode(list(_flatten("", data)), quote_via=quote)


def encode_json(data: Any) -> str:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def encode_body(data: Any, headers: Mapping[str, Any] | None) -> bytes | None:
    """Serialize a request body; ``bytes`` and pre-encoded form strings are sent as-is."""
    if data is None:
        return None
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if is_form_content_type(headers):
        if isinstance(data, str):
            return data.encode("utf-8")
        if not isinstance(data, Mapping):
            raise TypeError(f"form-encoded bodies must be mappings, got {type(data).__name__}")
        return encode_form(data).encode("utf-8")
    return encode_json(data).encode("utf-8")


__all__ = [
    "FORM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "encode_body",
    "encode_form",
    "encode_json",
    "is_form_content_type",
]
