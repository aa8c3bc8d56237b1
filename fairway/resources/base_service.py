# This file defines the base class shared by the resource layer's services.
# It exists so every service holds a store handle and a logger the same way and retries the same way.
# Retries are opt-in: only operations a caller wraps in with_retry are repeated, and only on transient failures.
# Instances keep no state beyond the store handle and logger, so they can be created per request.

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import Any, Literal, TypeVar

from fairway.resources.errors import is_transient
from fairway.resources.response_envelope import ServiceResponse
from fairway.resources.store import TableStore

R = TypeVar("R")

Backoff = Literal["linear", "exponential"]
RetryPredicate = Callable[[BaseException, int], bool]


def _default_should_retry(error: BaseException, _attempt: int) -> bool:
    return is_transient(error)


class BaseService:
    """Store handle, logger and retry helper for resource-layer services."""

    def __init__(
        self,
        store: TableStore,
        *,
        logger: logging.Logger | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if store is None:
            raise ValueError("A store handle is required.")
        self.store = store
        self.logger = logger or logging.getLogger(f"{type(self).__module__}.{type(self).__name__}")
        self._sleep = sleep

    def log(self, level: int, message: str, context: Mapping[str, Any] | None = None) -> None:
        if context:
            self.logger.log(
                level, "%s | service=%s context=%s", message, type(self).__name__, dict(context)
            )
        else:
            self.logger.log(level, "%s | service=%s", message, type(self).__name__)

    def with_retry(
        self,
        operation: Callable[[], R],
        *,
        retries: int = 3,
        backoff_ms: int = 500,
        backoff: Backoff = "linear",
        should_retry: RetryPredicate | None = None,
    ) -> R:
        """Run ``operation`` and repeat it on transient failures.

        ``operation`` may raise or return a :class:`ServiceResponse`; an error
        envelope counts as a failure. The call runs at most ``retries + 1``
        times. Once retries are exhausted, or the failure is not retryable,
        the last error envelope is returned or the last exception re-raised.
        """

        if retries < 0:
            raise ValueError("retries must be >= 0")
        if backoff not in {"linear", "exponential"}:
            raise ValueError("backoff must be 'linear' or 'exponential'")
        check = should_retry or _default_should_retry

        attempt = 0
        while True:
            attempt += 1
            try:
                result = operation()
            except Exception as exc:
                if attempt > retries or not check(exc, attempt):
                    raise
                failure: BaseException = exc
            else:
                if not isinstance(result, ServiceResponse) or result.error is None:
                    return result
                if attempt > retries or not check(result.error, attempt):
                    return result
                failure = result.error

            delay_ms = self._backoff_delay_ms(attempt, backoff_ms=backoff_ms, backoff=backoff)
            self.log(
                logging.WARNING,
                f"Operation failed, retrying ({attempt}/{retries})",
                {"error": repr(failure), "delay_ms": delay_ms},
            )
            self._sleep(delay_ms / 1000.0)

    @staticmethod
    def _backoff_delay_ms(attempt: int, *, backoff_ms: int, backoff: Backoff) -> int:
        if backoff == "exponential":
            return backoff_ms * 2 ** (attempt - 1)
        return backoff_ms * attempt
