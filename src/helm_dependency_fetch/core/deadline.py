"""Run-wide deadline and cancellation token.

Every network call and every backoff wait consults the same Deadline, so
retries cumulatively respect the ``--timeout`` given on the command line.
The clock and sleep are injectable; tests drive a virtual clock and never
wait in real time.
"""

from __future__ import annotations

import threading
import time
from typing import Callable


class DeadlineExceeded(Exception):
    """Raised from Deadline.wait() once the deadline has passed or was cancelled."""


class Deadline:
    """A point in time after which fetches must give up.

    ``timeout=None`` means no time limit; the token can still be cancelled.
    """

    def __init__(
        self,
        timeout: float | None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self._clock = clock
        self._sleep = sleep
        self._cancelled = threading.Event()
        self._expires_at = None if timeout is None else clock() + timeout

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> float | None:
        """Seconds left before expiry, None when unbounded."""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - self._clock())

    @property
    def expired(self) -> bool:
        if self.cancelled:
            return True
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def check(self) -> None:
        if self.expired:
            raise DeadlineExceeded("deadline exceeded" if not self.cancelled else "cancelled")

    def wait(self, seconds: float) -> None:
        """Sleep for ``seconds`` unless the deadline fires first.

        Never sleeps past the deadline: if it would, waits only for what is
        left and raises DeadlineExceeded. Cancellation interrupts the wait.
        """
        self.check()
        remaining = self.remaining()
        budget = seconds if remaining is None else min(seconds, remaining)
        if self._sleep is not None:
            self._sleep(budget)
        else:
            self._cancelled.wait(budget)
        if remaining is not None and seconds >= remaining:
            raise DeadlineExceeded("deadline exceeded")
        self.check()
