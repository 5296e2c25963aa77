"""
Exponential backoff for remote calls.

Used around metadata resolution, where Comic Vine timeouts and rate
limits surface as UpstreamUnavailableError.
"""
import logging
import time
from typing import Any, Callable, Tuple, Type, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")


def with_backoff(
    operation: Callable[[Any], T],
    payload: Any,
    max_attempts: int = 3,
    initial_delay_ms: int = 1000,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Call ``operation(payload)``, retrying failures with exponential backoff.

    Waits ``initial_delay_ms * 2**attempt`` milliseconds after each failed
    attempt (0-indexed), up to ``max_attempts`` attempts in total.

    Args:
        operation: Callable taking a single payload argument
        payload: Value passed to the operation on every attempt
        max_attempts: Total number of attempts (not retries)
        initial_delay_ms: Delay before the first retry
        retry_on: Exception types worth retrying; anything else propagates at once
        sleep: Wait primitive, in seconds

    Returns:
        Whatever the first successful attempt returns

    Raises:
        The last exception, unchanged, once attempts are exhausted
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    for attempt in range(max_attempts):
        try:
            return operation(payload)
        except retry_on as e:
            if attempt == max_attempts - 1:
                logger.error("Giving up after %d attempts: %s", max_attempts, e)
                raise

            delay_ms = initial_delay_ms * (2 ** attempt)
            logger.warning(
                "Call failed (%s). Retrying in %dms (attempt %d/%d)",
                e, delay_ms, attempt + 1, max_attempts,
            )
            sleep(delay_ms / 1000)

    # Unreachable: the loop either returns or re-raises
    raise RuntimeError("with_backoff exited without a result")
