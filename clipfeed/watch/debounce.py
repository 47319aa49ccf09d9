"""Trailing-edge debounce driven by the watch loop."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import Enum

logger = logging.getLogger(__name__)


class DebounceState(str, Enum):
    IDLE = "idle"
    ARMED = "armed"
    RUNNING = "running"


class DebounceCoordinator:
    """Collapses a burst of arm() calls into a single run of ``action``.

    The deadline is always ``quiet_period`` after the most recent arm().
    The coordinator does not own a thread: whoever calls arm() must also
    poll time_until_due() and call fire_if_due(), and the action runs
    synchronously inside that call. Because a single loop does all of this,
    two runs can never overlap.
    """

    def __init__(
        self,
        quiet_period: float,
        action: Callable[[], object],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if quiet_period <= 0:
            raise ValueError("quiet_period must be positive")
        self.quiet_period = quiet_period
        self._action = action
        self._clock = clock
        self._deadline: float | None = None
        self._state = DebounceState.IDLE
        self.runs = 0

    @property
    def state(self) -> DebounceState:
        return self._state

    @property
    def deadline(self) -> float | None:
        return self._deadline

    def arm(self) -> None:
        """Schedule a run quiet_period from now, replacing any pending one."""
        self._deadline = self._clock() + self.quiet_period
        if self._state is DebounceState.IDLE:
            self._state = DebounceState.ARMED

    def cancel(self) -> None:
        self._deadline = None
        if self._state is DebounceState.ARMED:
            self._state = DebounceState.IDLE

    def time_until_due(self) -> float | None:
        """Seconds until the pending run, 0 if overdue, None if nothing is armed."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - self._clock())

    def fire_if_due(self) -> bool:
        """Run the action if the deadline has passed. Returns True if it ran."""
        if self._deadline is None or self._clock() < self._deadline:
            return False

        self._deadline = None
        self._state = DebounceState.RUNNING
        self.runs += 1
        try:
            self._action()
        except Exception:
            logger.exception("Error during feed regeneration")
        finally:
            # arm() may have been called from inside the action
            self._state = (
                DebounceState.IDLE if self._deadline is None else DebounceState.ARMED
            )
        return True
