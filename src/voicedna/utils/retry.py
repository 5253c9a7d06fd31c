"""Retry decorators using tenacity."""

from __future__ import annotations

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (TimeoutError, ConnectionError)


def retry_api(
    max_attempts: int = 3,
    *,
    retry_on: tuple[type[BaseException], ...] = TRANSIENT_ERRORS,
):
    """Retry decorator for analyst API calls with exponential backoff.

    The last error is re-raised once attempts run out.
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=1, max=30),
        retry=retry_if_exception_type(retry_on),
        reraise=True,
    )
