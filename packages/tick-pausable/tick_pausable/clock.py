"""Millisecond clock sources."""

import time


class ManualClock:
    """Deterministic clock that only moves when told to.

    With ``tps`` set, ``tick()`` advances one fixed step of
    ``1000 / tps`` milliseconds.
    """

    def __init__(self, start: float = 0.0, tps: int | None = None) -> None:
        if tps is not None and tps <= 0:
            raise ValueError("tps must be positive")
        self._now = float(start)
        self._tps = tps
        self._dt = 1000.0 / tps if tps else None

    @property
    def tps(self) -> int | None:
        return self._tps

    @property
    def dt(self) -> float | None:
        return self._dt

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> float:
        if ms < 0:
            raise ValueError("clock cannot move backwards")
        self._now += ms
        return self._now

    def set(self, ms: float) -> float:
        if ms < self._now:
            raise ValueError(
                f"clock cannot move backwards ({ms} < {self._now})"
            )
        self._now = float(ms)
        return self._now

    def tick(self) -> float:
        if self._dt is None:
            raise ValueError("tick() requires a clock created with tps")
        return self.advance(self._dt)


class MonotonicClock:
    """Wall clock in milliseconds since construction."""

    def __init__(self) -> None:
        self._origin = time.monotonic()

    def now(self) -> float:
        return (time.monotonic() - self._origin) * 1000.0
