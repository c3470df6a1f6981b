"""Bounded retry for the positive-definite rejection loops.

Generation is retried as a whole batch until a check passes. Instead of
looping until success, each loop is capped and reports a tagged result,
so that non-convergence is an observable value rather than a hang.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar, Union

from rccsim.errors import NumericalNonConvergence

log = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Success:
    """A batch that passed its check."""

    value: Any
    attempts: int  # 1-based count of attempts used


@dataclass(frozen=True, slots=True)
class Failed:
    """Every attempt failed its check; ``reason`` holds the last errors."""

    reason: str
    attempts: int


Attempt = Union[Success, Failed]


def retry_until_valid(
    build: Callable[[], T],
    check: Callable[[T], list[str]],
    max_attempts: int,
    label: str = "batch",
) -> Attempt:
    """Call ``build`` until ``check`` returns no errors, at most ``max_attempts`` times.

    Args:
        build: Zero-argument callable producing a fresh candidate batch.
        check: Returns a list of error strings for a candidate (empty = valid).
        max_attempts: Upper bound on the number of builds.
        label: Name used in log messages.

    Returns:
        Success with the first valid batch, or Failed with the last errors.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    last_errors: list[str] = []
    for attempt in range(1, max_attempts + 1):
        candidate = build()
        errors = check(candidate)
        if not errors:
            return Success(value=candidate, attempts=attempt)
        last_errors = errors
        log.warning(
            "%s attempt %d failed: %s", label, attempt, "; ".join(errors)
        )

    return Failed(reason="; ".join(last_errors), attempts=max_attempts)


def unwrap(result: Attempt) -> Any:
    """Return the value of a Success or raise NumericalNonConvergence for a Failed."""
    if isinstance(result, Failed):
        raise NumericalNonConvergence(result.reason, result.attempts)
    return result.value
