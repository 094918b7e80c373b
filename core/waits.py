import logging
import time
from typing import Callable, Optional, TypeVar

from tenacity import (
    Retrying,
    RetryError,
    retry_if_result,
    stop_after_delay,
    wait_fixed,
    before_sleep_log,
)

logger = logging.getLogger("shoptest.waits")

T = TypeVar("T")

# Fixed pauses after actions that trigger an asynchronous re-render
SETTLE_SHORT_MS = 500
SETTLE_DEFAULT_MS = 1000
SETTLE_LONG_MS = 2000


def settle(milliseconds: int = SETTLE_DEFAULT_MS):
    # Fixed pause used where no observable end condition exists
    time.sleep(milliseconds / 1000)


def wait_until(
    condition: Callable[[], T],
    timeout_ms: int = 5000,
    poll_ms: int = 250,
    description: Optional[str] = None,
) -> Optional[T]:
    # Poll condition until it returns a truthy value or the timeout elapses
    # Returns the last value seen; exceptions raised by condition propagate
    retrying = Retrying(
        stop=stop_after_delay(timeout_ms / 1000),
        wait=wait_fixed(poll_ms / 1000),
        retry=retry_if_result(lambda value: not value),
        before_sleep=before_sleep_log(logger, logging.DEBUG),
        reraise=True,
    )
    try:
        return retrying(condition)
    except RetryError as e:
        logger.debug(f"Condition not met within {timeout_ms}ms: {description or condition}")
        return e.last_attempt.result()
