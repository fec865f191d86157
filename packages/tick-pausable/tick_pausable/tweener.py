"""Tweener - interpolates object properties toward targets over time."""
from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any, Callable

from tick_pausable.easing import EasingFn, resolve_easing
from tick_pausable.types import Booking, ClockSource


def read_property(obj: Any, key: str) -> Any:
    """Mapping item for mutable mappings, attribute otherwise."""
    if isinstance(obj, MutableMapping):
        return obj.get(key)
    return getattr(obj, key, None)


def write_property(obj: Any, key: str, value: Any) -> None:
    if isinstance(obj, MutableMapping):
        obj[key] = value
    else:
        setattr(obj, key, value)


@dataclass
class _Tween:
    booking: Booking
    obj: Any
    start_vals: dict[str, Any]
    end_vals: dict[str, Any]
    duration: float
    started: float
    easing: EasingFn
    on_complete: Callable[[Any], None] | None


class Tweener:
    """Runs property tweens; ``update()`` writes the eased values."""

    def __init__(self, clock: ClockSource) -> None:
        self._clock = clock
        self._tweens: dict[int, _Tween] = {}
        self._next_seq = 0
        self._dispatch_time: float | None = None

    @property
    def clock(self) -> ClockSource:
        return self._clock

    @property
    def pending(self) -> int:
        return len(self._tweens)

    def now(self) -> float:
        """Clock reading, or the finish time of the tween being completed."""
        if self._dispatch_time is not None:
            return self._dispatch_time
        return self._clock.now()

    def animate(
        self,
        obj: Any,
        targets: Mapping[str, Any],
        duration_ms: float,
        on_complete: Callable[[Any], None] | None = None,
        easing: str | EasingFn = "linear",
    ) -> Booking:
        easing_fn = resolve_easing(easing)
        booking = Booking(self._next_seq)
        self._next_seq += 1
        end_vals = dict(targets)
        self._tweens[booking.seq] = _Tween(
            booking=booking,
            obj=obj,
            start_vals={k: read_property(obj, k) for k in end_vals},
            end_vals=end_vals,
            duration=float(duration_ms),
            started=self.now(),
            easing=easing_fn,
            on_complete=on_complete,
        )
        return booking

    def cancel(self, booking: Booking | None) -> None:
        if booking is None:
            return
        booking.active = False
        self._tweens.pop(booking.seq, None)

    def is_active(self, booking: Booking | None) -> bool:
        return booking is not None and booking.active

    def update(self) -> int:
        """Step every running tween. Returns the number that completed.

        A tween started from a completion callback begins at the moment
        the previous one finished and is stepped in the same update, so
        a late update catches up across several chained tweens.
        Zero-length tweens started that way wait for the next update.
        """
        now = self._clock.now()
        fresh_from = self._next_seq
        stepped: set[int] = set()
        completed = 0
        while True:
            batch = [
                tween
                for seq, tween in self._tweens.items()
                if seq not in stepped
                and not (seq >= fresh_from and tween.duration <= 0)
            ]
            if not batch:
                break
            for tween in batch:
                stepped.add(tween.booking.seq)
                if tween.booking.active and self._step(tween, now):
                    completed += 1
        return completed

    def _step(self, tween: _Tween, now: float) -> bool:
        if tween.duration <= 0:
            t = 1.0
        else:
            t = min((now - tween.started) / tween.duration, 1.0)

        if t >= 1.0:
            for key, end in tween.end_vals.items():
                if end is not None:
                    write_property(tween.obj, key, end)
            self.cancel(tween.booking)
            if tween.on_complete is not None:
                self._dispatch_time = tween.started + max(tween.duration, 0.0)
                try:
                    tween.on_complete(tween.obj)
                finally:
                    self._dispatch_time = None
            return True

        eased = tween.easing(t)
        for key, end in tween.end_vals.items():
            if end is None:
                continue
            start = tween.start_vals[key]
            if start is None:
                start = end
            write_property(tween.obj, key, start + (end - start) * eased)
        return False
