"""Fixed-cadence loop timing."""

import time
from typing import Callable


class Rate:
    """
    Keeps a loop running at a fixed frequency.

    Each call to ``sleep()`` blocks for whatever remains of the current
    period. If the loop has fallen more than a full period behind, the
    schedule restarts from now instead of trying to catch up.
    """

    def __init__(
        self,
        hz: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize rate keeper.

        Args:
            hz: Loop frequency in Hz (must be positive)
            clock: Monotonic time source in seconds
            sleep: Blocking sleep function
        """
        if hz <= 0:
            raise ValueError(f"Rate must be positive, got {hz}")
        self.period = 1.0 / hz
        self._clock = clock
        self._sleep = sleep
        self._next_time = clock() + self.period

    def remaining(self) -> float:
        """Seconds left in the current period (negative when late)."""
        return self._next_time - self._clock()

    def sleep(self) -> None:
        """Block until the end of the current period."""
        remaining = self.remaining()
        if remaining > 0:
            self._sleep(remaining)
            self._next_time += self.period
        elif remaining < -self.period:
            self._next_time = self._clock() + self.period
        else:
            self._next_time += self.period

    def reset(self) -> None:
        """Restart the schedule from the current time."""
        self._next_time = self._clock() + self.period
