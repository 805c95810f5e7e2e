# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Retry helper for request coroutines."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import httpx

from .models import RetryPolicy, RetryState

logger = logging.getLogger(__name__)

T = TypeVar("T")


def should_retry(policy: RetryPolicy | None, state: RetryState) -> bool:
    """Return True while the policy still allows another resubmission."""
    if policy is None or not policy.enabled:
        return False
    return state.retry_count < policy.retry


async def send_with_retries(
    send: Callable[[], Awaitable[T]],
    policy: RetryPolicy | None,
    *,
    describe: str = "request",
) -> T:
    """
    Await ``send()`` and resubmit it on ``httpx.HTTPError`` while the policy allows.

    Each resubmission waits ``policy.retry_delay`` seconds. Once retries are exhausted
    (or disabled) the last failure is re-raised unchanged.
    """
    state = RetryState()
    while True:
        try:
            return await send()
        except httpx.HTTPError as exc:
            if not should_retry(policy, state):
                if state.retry_count:
                    logger.warning("%s failed after %d retries: %s", describe, state.retry_count, exc)
                raise
            state = state.advance()
            logger.debug(
                "%s failed (%s); retry %d/%d in %.3fs",
                describe,
                exc.__class__.__name__,
                state.retry_count,
                policy.retry,
                policy.retry_delay,
            )
            await asyncio.sleep(policy.retry_delay)


__all__ = ["send_with_retries", "should_retry"]
