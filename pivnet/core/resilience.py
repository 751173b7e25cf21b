"""
Resilience Infrastructure.

Retry policy and retry callback for calls to the Pivotal Network API.
Only transport failures (connection refused, timeouts) are retried; an HTTP
error status is an answer, not a failure, and is never retried.

Usage:
    from pivnet.core.resilience import retry_transport_errors

    @retry_transport_errors()
    async def send():
        return await client.request("GET", "/products")
"""

from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from pivnet.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ATTEMPTS = 3


def log_retry(retry_state: Any) -> None:
    """Tenacity before_sleep callback that emits structured retry events.

    Pass this as `before_sleep=log_retry` in any @retry decorator.

    Args:
        retry_state: tenacity.RetryCallState instance
    """
    duration_ms = None
    if retry_state.outcome_timestamp and retry_state.start_time:
        duration_ms = round(
            (retry_state.outcome_timestamp - retry_state.start_time) * 1000
        )

    error = None
    if retry_state.outcome and retry_state.outcome.failed:
        error = str(retry_state.outcome.exception())

    fn_name = getattr(retry_state.fn, "__name__", "unknown")

    logger.warning(
        f"Retrying {fn_name} (attempt {retry_state.attempt_number})",
        resilience_event="retry_attempt",
        dependency=fn_name,
        attempt=retry_state.attempt_number,
        duration_ms=duration_ms,
        error=error,
    )


def retry_transport_errors(
    attempts: int = DEFAULT_ATTEMPTS,
    min_wait: float = 0.5,
    max_wait: float = 4.0,
) -> Any:
    """
    Build a tenacity retry decorator for httpx transport errors.

    The last exception is re-raised once attempts are exhausted.

    Args:
        attempts: Total number of attempts, including the first one
        min_wait: Lower bound of the exponential backoff in seconds
        max_wait: Upper bound of the exponential backoff in seconds
    """
    return retry(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=min_wait, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(httpx.TransportError),
        before_sleep=log_retry,
        reraise=True,
    )
