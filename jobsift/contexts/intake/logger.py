"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
All intake modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from jobsift.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[intake]"


def setup_intake_logger(
    log_dir: Optional[Path] = None, model: Optional[str] = None, verbose: bool = False
) -> Optional[Path]:
    """
    Setup logger for intake context.

    Args:
        log_dir: Directory for this extraction session (None = console only)
        model: Model identifier recorded in the provenance header
        verbose: Show DEBUG messages on the console

    Returns:
        Path to log file, or None

    Example:
        from jobsift.contexts.intake.logger import setup_intake_logger, _log_info

        setup_intake_logger(Path("outs/logs/extract"), model="openai/gpt-4o-mini")
        _log_info("Starting extraction...")
    """
    return _setup_logger(
        context_name="intake",
        log_dir=log_dir,
        extra_provenance={"Model": model or "(offline)"},
        console_level="DEBUG" if verbose else "INFO",
    )


# Wrapper functions with automatic [intake] prefix


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [intake] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [intake] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level intake-specific logging helpers


def log_cache_hit(fingerprint: str) -> None:
    """Log a cache hit (fingerprint shortened for readability)."""
    _log_info(f"Returning cached job data ({fingerprint[:12]})")


def log_remote_attempt(endpoint: str, model: str, credential: str) -> None:
    """Log start of a remote call. Never logs the credential itself."""
    _log_info(f"Calling text-generation endpoint {endpoint} with model {model}")
    _log_debug(f"  Credential configured: {bool(credential)} (length: {len(credential)})")


def log_fallback(reason: str, needs_attention: bool = False) -> None:
    """
    Log a switch to heuristic extraction.

    Failures that will not clear on their own (rejected credential, unknown
    model) are logged as errors; everything else is a warning.
    """
    message = f"Falling back to heuristic extraction: {reason}"
    if needs_attention:
        _log_error(message)
    else:
        _log_warning(message)


def log_extraction_result(record, path: str, elapsed_time: float) -> None:
    """
    Log final extraction result.

    Args:
        record: ExtractedRecord produced by the orchestrator
        path: Which path produced it ("remote" or "heuristic")
        elapsed_time: Seconds spent (excluding cache hits)
    """
    _log_success(
        f"Extracted '{record.title}' at '{record.company}' via {path} ({elapsed_time:.2f}s)"
    )
    _log_debug(f"  Skills: {', '.join(record.skills)}")
    _log_debug(
        f"  Experience: {record.experience_level} | Location: {record.location} "
        f"| Salary: {record.salary_range}"
    )
