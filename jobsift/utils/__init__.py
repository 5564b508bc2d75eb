"""
Shared utilities for JOBSIFT.

Common functionality used across contexts:
- Logger configuration
- LLM provider abstraction
- Resilience policies (retry, timeout, circuit breaker)
"""

from jobsift.utils.resilience import CircuitBreaker, retry_with_backoff, with_timeout

__all__ = ["CircuitBreaker", "retry_with_backoff", "with_timeout"]
