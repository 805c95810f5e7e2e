# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header and request-config composition.

Final headers are layered as ``base < common < per-method < per-call``. Defaults can be
given either as a :class:`HeaderLayers` or in the nested form where ``common`` and the
HTTP method names are sub-mappings::

    {"Accept": "application/json", "common": {"X-Team": "a"}, "post": {"X-Write": "1"}}

The nested form is split into layers when parsed, so reserved keys never reach the wire.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..errors import InvalidMethodError
from .models import Headers, RequestConfig

HTTP_METHODS = ("get", "post", "put", "delete", "patch", "options", "head")
RESERVED_HEADER_KEYS = frozenset(HTTP_METHODS) | {"common"}


def normalize_method(method: object) -> str:
    """Return the lower-cased method name or raise InvalidMethodError."""
    if not isinstance(method, str):
        raise InvalidMethodError(method)
    lowered = method.strip().lower()
    if lowered not in HTTP_METHODS:
        raise InvalidMethodError(method)
    return lowered


def _is_reserved(key: object) -> bool:
    return isinstance(key, str) and key.lower() in RESERVED_HEADER_KEYS


def _flat_headers(headers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Copy a header mapping, dropping reserved sub-mappings."""
    if not headers:
        return {}
    return {key: value for key, value in headers.items() if not _is_reserved(key)}


@dataclass(frozen=True)
class HeaderLayers:
    """Default headers split into their precedence layers."""

    base: dict[str, Any] = field(default_factory=dict)
    common: dict[str, Any] = field(default_factory=dict)
    per_method: dict[str, dict[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        normalized: dict[str, dict[str, Any]] = {}
        for method, values in self.per_method.items():
            normalized.setdefault(normalize_method(method), {}).update(values)
        object.__setattr__(self, "per_method", normalized)

    @classmethod
    def from_mapping(cls, headers: Mapping[str, Any] | HeaderLayers | None) -> HeaderLayers:
        """Parse the nested header form into layers."""
        if isinstance(headers, HeaderLayers):
            return headers
        if not headers:
            return cls()
        common: dict[str, Any] = {}
        per_method: dict[str, dict[str, Any]] = {}
        for key, value in headers.items():
            if not _is_reserved(key) or not isinstance(value, Mapping):
                continue
            if key.lower() == "common":
                common.update(_flat_headers(value))
            else:
                per_method.setdefault(key.lower(), {}).update(_flat_headers(value))
        return cls(base=_flat_headers(headers), common=common, per_method=per_method)

    def for_method(self, method: str) -> dict[str, Any]:
        return self.per_method.get(normalize_method(method), {})

    def merge(self, other: HeaderLayers | Mapping[str, Any] | None) -> HeaderLayers:
        """Layer ``other`` on top of this set, key by key within each layer."""
        other = HeaderLayers.from_mapping(other)
        per_method = {method: dict(values) for method, values in self.per_method.items()}
        for method, values in other.per_method.items():
            per_method.setdefault(method, {}).update(values)
        return HeaderLayers(
            base={**self.base, **other.base},
            common={**self.common, **other.common},
            per_method=per_method,
        )


def _apply(target: dict[str, str], layer: Mapping[str, Any]) -> None:
    for key, value in layer.items():
        # Header names are case-insensitive; the later layer's spelling wins.
        for existing in [name for name in target if name.lower() == str(key).lower()]:
            del target[existing]
        if value is not None:
            target[key] = str(value)


def resolve_headers(
    method: str,
    defaults: HeaderLayers | Mapping[str, Any] | None = None,
    extras: Mapping[str, Any] | None = None,
) -> Headers:
    """
    Combine header layers for ``method``: defaults < common < method < extras.

    A ``None`` value in a later layer removes the header. Reserved keys found in
    ``extras`` are ignored. Inputs are not modified.
    """
    method = normalize_method(method)
    layers = HeaderLayers.from_mapping(defaults)

    headers: Headers = {}
    for layer in (layers.base, layers.common, layers.for_method(method), _flat_headers(extras)):
        _apply(headers, layer)
    return headers


def resolve_config(
    method: str,
    defaults: Mapping[str, Any] | None = None,
    extras: Mapping[str, Any] | None = None,
) -> RequestConfig:
    """Merge request defaults with per-call options (extras win) and resolve headers."""
    if not defaults and not extras:
        return {}
    defaults = defaults or {}
    extras = extras or {}
    config: RequestConfig = {**defaults, **extras}
    config["headers"] = resolve_headers(method, defaults.get("headers"), extras.get("headers"))
    return config


def _coerce_headers_mapping(headers: Any) -> Mapping[object, object] | None:
    """Best-effort coercion of dict-like header containers (dicts, httpx.Headers, pairs)."""
    if not headers:
        return None
    if isinstance(headers, Mapping):
        return headers

    items = getattr(headers, "items", None)
    if callable(items):
        try:
            return dict(items())
        except (TypeError, ValueError):
            pass

    try:
        return dict(headers)
    except (TypeError, ValueError):
        return None


def header_value(headers: Mapping[object, object] | None, name: str, default: str = "") -> str:
    """
    Return a header value using case-insensitive key matching.

    Fast-paths common key casings before falling back to a full scan.
    """
    if not headers or not name:
        return default

    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return default

    lower = str(name).lower()
    for key in (name, lower, lower.title()):
        if key in coerced:
            value = coerced.get(key)
            return default if value is None else str(value).strip()

    for key, value in coerced.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


__all__ = [
    "HTTP_METHODS",
    "RESERVED_HEADER_KEYS",
    "HeaderLayers",
    "header_value",
    "normalize_method",
    "resolve_config",
    "resolve_headers",
]
