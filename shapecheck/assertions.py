"""Switchable assertions over the matching engine.

Call sites can leave assert_matches() in place permanently: while assertions
are disabled (the default) it returns immediately without matching anything.

Usage:
    import shapecheck

    shapecheck.enable()
    shapecheck.assert_matches(response, {"access_token": shapecheck.required(str)})

The module-level functions share one process-wide ValidationContext. Toggling
it from several threads is a last-writer-wins race; code that needs its own
switch should create and pass around its own ValidationContext.
"""

from typing import Any, Optional

import structlog

from shapecheck.config import get_settings
from shapecheck.matching import Problem, matches

logger = structlog.get_logger()


class PatternAssertionError(AssertionError):
    """Raised by assert_matches() when enabled and data does not match."""

    def __init__(self, message: str, problems: list[Problem], data: Any):
        self.problems = problems
        self.data = data
        lines = [message] + [f" - {problem.path or '<root>'}: {problem.message}" for problem in problems]
        super().__init__("\n".join(lines))


class ValidationContext:
    """An on/off switch for assertions, plus the assertion itself."""

    def __init__(self, enabled: Optional[bool] = None):
        """Initialize the switch.

        Args:
            enabled: Initial state. If None, uses SHAPECHECK_ENABLED (off by default).
        """
        self._enabled = get_settings().ENABLED if enabled is None else enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        self._enabled = True
        logger.info("assertions_enabled")

    def disable(self) -> None:
        self._enabled = False
        logger.info("assertions_disabled")

    def assert_matches(self, data: Any, pattern: Any = None) -> None:
        """Raise PatternAssertionError if enabled and data does not match pattern.

        Raises:
            PatternAssertionError: carries .problems and .data
        """
        if not self._enabled:
            return

        problems = matches(data, pattern)
        if problems:
            logger.warning(
                "assertion_failed",
                total_problems=len(problems),
                paths=[problem.path for problem in problems],
            )
            raise PatternAssertionError("Assertions failed", problems, data)


# Process-wide default
default_context = ValidationContext()


def enable() -> None:
    """Turn assert_matches() on for the whole process."""
    default_context.enable()


def disable() -> None:
    """Turn assert_matches() off for the whole process."""
    default_context.disable()


def is_enabled() -> bool:
    return default_context.enabled


def assert_matches(data: Any, pattern: Any = None) -> None:
    """assert_matches() on the process-wide default context."""
    default_context.assert_matches(data, pattern)
