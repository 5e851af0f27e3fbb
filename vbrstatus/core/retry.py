"""Retry utilities for operations against external systems.

The database connection is the only retried operation: one initial attempt and
a single reconnect after a fixed delay.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from vbrstatus.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 2
    backoff_base: float = 2.0
    retryable_exceptions: tuple[type[Exception], ...] = field(default_factory=lambda: (Exception,))


def retry_call[T](
    fn: Callable[[], T],
    config: RetryConfig | None = None,
    operation_name: str = "operation",
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Call fn, retrying on failure according to config.

    Args:
        fn: Function to execute (no arguments)
        config: Retry configuration, uses defaults if not provided
        operation_name: Name for logging purposes
        sleep: Sleep function, replaceable in tests

    Returns:
        Result of fn()

    Raises:
        Exception: The last exception if all attempts are exhausted
    """
    config = config or RetryConfig()

    for attempt in range(config.max_attempts):
        try:
            return fn()
        except config.retryable_exceptions as e:
            if attempt + 1 >= config.max_attempts:
                logger.bind(
                    operation=operation_name,
                    attempts=config.max_attempts,
                    error=str(e),
                ).error("retry_exhausted")
                raise

            delay = config.backoff_base
            logger.bind(
                operation=operation_name,
                attempt=attempt + 1,
                max_attempts=config.max_attempts,
                delay_seconds=round(delay, 2),
                error=str(e),
            ).warning("retry_attempt")
            sleep(delay)

    raise RuntimeError("retry_call requires max_attempts >= 1")
