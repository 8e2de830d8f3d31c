"""Deterministic random sources and clocks shared by the tests."""

from datetime import datetime, timedelta, timezone
from itertools import cycle


class FixedRandom:
    """Random source replaying a fixed sequence of draws."""

    def __init__(self, *values: float):
        self._values = cycle(values or (0.5,))

    def random(self) -> float:
        return next(self._values)


class FailingRandom:
    """Random source whose draws always fail."""

    def random(self) -> float:
        raise OSError("entropy source unavailable")


class FakeClock:
    """Settable clock for timestamps (datetime) or monotonic time (float)."""

    def __init__(self, start=None):
        self.now = start if start is not None else datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, seconds: float) -> None:
        if isinstance(self.now, datetime):
            self.now = self.now + timedelta(seconds=seconds)
        else:
            self.now += seconds
