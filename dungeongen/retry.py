"""
Bounded retry loop shared by the generators.

Every generator runs as a sequence of attempts. An attempt starts from an
empty grid and either finishes, or gives up by raising RetryGeneration
(its own timer ran out, or the result failed validation). Two timers bound
the whole call:

    retry_timeout    per attempt, reset at the start of each attempt
    failure_timeout  per call, fixed when the first attempt starts

plus a hard cap on the number of attempts.
"""

import logging
import time
from typing import TYPE_CHECKING, Callable, Optional, TypeVar

from .errors import GenerationTimeoutError

if TYPE_CHECKING:
    from .grid import Grid

logger = logging.getLogger(__name__)

T = TypeVar("T")

Clock = Callable[[], float]


class RetryGeneration(Exception):
    """Abandon the current attempt and start over on a cleared grid."""


class Deadline:
    """Tracks the per-attempt and per-call timers."""

    def __init__(
        self,
        retry_timeout: float,
        failure_timeout: float,
        clock: Optional[Clock] = None,
    ) -> None:
        self.retry_timeout = retry_timeout
        self.failure_timeout = failure_timeout
        self.clock: Clock = clock or time.monotonic
        self.call_started = self.clock()
        self.attempt_started = self.call_started

    def start_attempt(self) -> None:
        self.attempt_started = self.clock()

    def call_elapsed(self) -> float:
        return self.clock() - self.call_started

    def check(self) -> None:
        """
        Raise if either timer has run out.

        The per-call timer wins when both have expired, so an exhausted
        call never turns into yet another retry.
        """
        now = self.clock()
        if now - self.call_started > self.failure_timeout:
            raise GenerationTimeoutError(
                f"Took too long to generate dungeon ({now - self.call_started:.2f}s)"
            )
        if now - self.attempt_started > self.retry_timeout:
            raise RetryGeneration("attempt timed out")


def run_with_retries(
    grid: "Grid",
    attempt: Callable[[Deadline], T],
    label: str,
) -> T:
    """
    Run attempt() until it succeeds, clearing the grid before each try.

    Returns whatever the successful attempt returned. Raises
    GenerationTimeoutError when the call's time budget or attempt cap is
    exhausted; any other exception from attempt() propagates unchanged.
    """
    config = grid.config
    deadline = Deadline(config.retry_timeout, config.failure_timeout, grid.clock)

    for attempt_number in range(1, config.max_attempts + 1):
        grid.clear()
        deadline.start_attempt()
        try:
            deadline.check()
            return attempt(deadline)
        except RetryGeneration as reason:
            logger.info("%s: %s, retrying gen (attempt %d)", label, reason, attempt_number)
        except GenerationTimeoutError:
            logger.warning(
                "%s: gave up after %d attempts in %.2fs",
                label,
                attempt_number,
                deadline.call_elapsed(),
            )
            raise

    logger.warning("%s: gave up after %d attempts", label, config.max_attempts)
    raise GenerationTimeoutError(
        f"Took too long to generate dungeon ({config.max_attempts} attempts)"
    )
