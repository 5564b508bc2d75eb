"""
Resilience policies for remote calls.

Three composable wrappers, each taking and returning a zero-argument callable
(or, for the breaker, any callable):

    call = with_timeout(retry_with_backoff(breaker.protect(fn), ...), seconds)

- retry_with_backoff: exponential backoff on transient failures
- with_timeout: hard deadline enforced from a worker thread
- CircuitBreaker: stop calling an endpoint that keeps failing
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from enum import Enum
from functools import wraps
from typing import Callable, Optional, TypeVar

from loguru import logger

from jobsift.contexts.intake.exceptions import (
    CircuitOpenError,
    RemoteTimeoutError,
    RemoteUnavailableError,
    TransientRemoteError,
)

# Retry configuration
MAX_RETRIES = 3
BASE_DELAY = 1.0

# Circuit breaker configuration
FAILURE_THRESHOLD = 5
RECOVERY_TIMEOUT = 30.0

T = TypeVar("T")


# =============================================================================
# RETRY
# =============================================================================


def retry_with_backoff(
    operation: Callable[[], T],
    retryable_exception: type[Exception] = TransientRemoteError,
    max_retries: int = MAX_RETRIES,
    base_delay: float = BASE_DELAY,
    sleep: Callable[[float], None] = time.sleep,
    error_message: str = "Transient remote failure",
) -> Callable[[], T]:
    """
    Wrap operation with exponential backoff retry on a specific exception.

    Args:
        operation: Callable that performs the request and returns a result
        retryable_exception: Exception type that triggers a retry
        max_retries: Additional attempts after the first (0 = no retry)
        base_delay: Delay before the first retry; doubles on every retry
        sleep: Sleep function (injectable for tests)
        error_message: Message prefix for retry logging

    Returns:
        Zero-argument callable running the retry loop
    """
    if max_retries < 0:
        raise ValueError(f"max_retries must be >= 0, got: {max_retries}")

    def run() -> T:
        attempts = max_retries + 1
        for attempt in range(attempts):
            try:
                return operation()
            except CircuitOpenError:
                # Never retried
                raise
            except retryable_exception as e:
                if attempt == attempts - 1:
                    raise
                delay = base_delay * (2**attempt)
                logger.warning(
                    f"{error_message} ({e.__class__.__name__}), retrying in {delay:.1f}s... "
                    f"(attempt {attempt + 1}/{attempts})"
                )
                sleep(delay)

    return run


# =============================================================================
# TIMEOUT
# =============================================================================


def with_timeout(operation: Callable[[], T], seconds: Optional[float]) -> Callable[[], T]:
    """
    Wrap operation so that it fails with RemoteTimeoutError after `seconds`.

    The operation runs on a worker thread. On expiry the caller stops
    waiting; the abandoned call finishes in the background and its result is
    discarded.

    Args:
        operation: Zero-argument callable
        seconds: Deadline in seconds (None = no deadline)

    Returns:
        Zero-argument callable enforcing the deadline
    """
    if seconds is None:
        return operation
    if seconds <= 0:
        raise ValueError(f"seconds must be positive, got: {seconds}")

    def run() -> T:
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="remote-call")
        future = executor.submit(operation)
        try:
            return future.result(timeout=seconds)
        except FutureTimeoutError:
            future.cancel()
            raise RemoteTimeoutError(f"Remote call exceeded {seconds:.1f}s deadline") from None
        finally:
            executor.shutdown(wait=False)

    return run


# =============================================================================
# CIRCUIT BREAKER
# =============================================================================


class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half-open"


class CircuitBreaker:
    """
    Thread-safe circuit breaker.

    CLOSED: calls pass through; consecutive counted failures are tallied.
    OPEN: calls are rejected with CircuitOpenError until recovery_timeout passes.
    HALF_OPEN: exactly one trial call is let through. Success closes the
    circuit, failure reopens it.

    Only `counted_exception` failures (RemoteUnavailableError by default) move
    the breaker. Anything else propagates without touching its state.

    Args:
        name: Identifier used in errors and logs
        failure_threshold: Consecutive failures that open the circuit
        recovery_timeout: Seconds to stay open before allowing a trial call
        clock: Monotonic time source (injectable for tests)
        counted_exception: Exception type that counts as a failure
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = FAILURE_THRESHOLD,
        recovery_timeout: float = RECOVERY_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
        counted_exception: type[Exception] = RemoteUnavailableError,
    ):
        if failure_threshold < 1:
            raise ValueError(f"failure_threshold must be >= 1, got: {failure_threshold}")
        if recovery_timeout <= 0:
            raise ValueError(f"recovery_timeout must be positive, got: {recovery_timeout}")

        self.name = name
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self._clock = clock
        self._counted_exception = counted_exception

        self._lock = threading.RLock()
        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._opened_at = 0.0
        self._trial_in_flight = False

    @property
    def state(self) -> CircuitState:
        with self._lock:
            self._maybe_half_open()
            return self._state

    @property
    def failure_count(self) -> int:
        with self._lock:
            return self._failure_count

    def _maybe_half_open(self) -> None:
        if (
            self._state == CircuitState.OPEN
            and self._clock() - self._opened_at >= self.recovery_timeout
        ):
            self._state = CircuitState.HALF_OPEN
            self._trial_in_flight = False
            logger.info(f"Circuit '{self.name}' half-open, allowing one trial call")

    def _before_call(self) -> None:
        with self._lock:
            self._maybe_half_open()

            if self._state == CircuitState.OPEN:
                remaining = self.recovery_timeout - (self._clock() - self._opened_at)
                raise CircuitOpenError(self.name, max(remaining, 0.0))

            if self._state == CircuitState.HALF_OPEN:
                if self._trial_in_flight:
                    raise CircuitOpenError(self.name, 0.0)
                self._trial_in_flight = True

    def record_success(self) -> None:
        with self._lock:
            if self._state != CircuitState.CLOSED:
                logger.info(f"Circuit '{self.name}' closed")
            self._state = CircuitState.CLOSED
            self._failure_count = 0
            self._trial_in_flight = False

    def record_failure(self) -> None:
        with self._lock:
            self._failure_count += 1
            if (
                self._state == CircuitState.HALF_OPEN
                or self._failure_count >= self.failure_threshold
            ):
                self._open()

    def _open(self) -> None:
        self._state = CircuitState.OPEN
        self._opened_at = self._clock()
        self._trial_in_flight = False
        logger.warning(
            f"Circuit '{self.name}' opened after {self._failure_count} failure(s), "
            f"cooling down for {self.recovery_timeout:.1f}s"
        )

    def reset(self) -> None:
        """Force the breaker back to CLOSED."""
        with self._lock:
            self._state = CircuitState.CLOSED
            self._failure_count = 0
            self._trial_in_flight = False

    def call(self, fn: Callable[..., T], *args, **kwargs) -> T:
        """Invoke fn through the breaker."""
        self._before_call()
        try:
            result = fn(*args, **kwargs)
        except self._counted_exception:
            self.record_failure()
            raise
        except BaseException:
            # Uncounted failure: release a half-open trial slot without judging
            with self._lock:
                self._trial_in_flight = False
            raise
        self.record_success()
        return result

    def protect(self, fn: Callable[..., T]) -> Callable[..., T]:
        """Decorator form of call()."""

        @wraps(fn)
        def protected(*args, **kwargs) -> T:
            return self.call(fn, *args, **kwargs)

        return protected
