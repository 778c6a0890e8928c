from __future__ import annotations

from typing import Callable, Optional, Protocol, runtime_checkable


TickCallback = Callable[[], None]


@runtime_checkable
class DropScheduler(Protocol):
    """Repeating timer that drives automatic drops.

    `schedule` replaces any previous schedule; `cancel` stops further ticks.
    """

    def schedule(self, interval_ms: int, callback: TickCallback) -> None:
        raise NotImplementedError

    def cancel(self) -> None:
        raise NotImplementedError


class ManualDropTimer:
    """Drop timer driven by simulated time.

    Nothing fires until `advance` is called, which makes tick sequences
    reproducible in tests and in the gymnasium environment.
    """

    def __init__(self) -> None:
        self.interval_ms: Optional[int] = None
        self.now_ms = 0
        self._callback: Optional[TickCallback] = None
        self._elapsed_ms = 0

    @property
    def active(self) -> bool:
        return self._callback is not None

    def schedule(self, interval_ms: int, callback: TickCallback) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.interval_ms = int(interval_ms)
        self._callback = callback
        self._elapsed_ms = 0

    def cancel(self) -> None:
        self._callback = None
        self.interval_ms = None
        self._elapsed_ms = 0

    def advance(self, ms: int) -> int:
        """Move simulated time forward by `ms`, firing every tick that falls due.

        A callback may reschedule or cancel the timer; the remaining time is
        then measured against the new schedule. Returns the number of ticks fired.
        """
        if ms < 0:
            raise ValueError(f"ms must be non-negative, got {ms}")
        fired = 0
        remaining = int(ms)
        while self._callback is not None and self.interval_ms is not None:
            due = self.interval_ms - self._elapsed_ms
            if remaining < due:
                self._elapsed_ms += remaining
                self.now_ms += remaining
                return fired
            remaining -= due
            self.now_ms += due
            self._elapsed_ms = 0
            self._callback()
            fired += 1
        self.now_ms += remaining
        return fired
