"""One retry-with-backoff combinator for every upstream call site."""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from pydantic import BaseModel
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from egldtax.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_transient(exc: BaseException) -> bool:
    return isinstance(exc, ExternalServiceError)


class RetryPolicy(BaseModel):
    """Bounded exponential backoff: base_delay, 2*base_delay, 4*base_delay ... capped at max_delay."""

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 10.0

    def retrying(self, is_retryable: Callable[[BaseException], bool] = is_transient) -> AsyncRetrying:
        return AsyncRetrying(
            retry=retry_if_exception(is_retryable),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.base_delay, max=self.max_delay),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )


async def call_with_retry(
    call: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    is_retryable: Callable[[BaseException], bool] = is_transient,
) -> T:
    """Run call() under policy. The last error propagates once attempts are exhausted."""
    async for attempt in policy.retrying(is_retryable):
        with attempt:
            return await call()
    raise AssertionError("unreachable: tenacity re-raises on the final attempt")
