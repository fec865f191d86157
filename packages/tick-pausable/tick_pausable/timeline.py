"""Timeline - owns the clock, primitives, handles and playback speed."""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Mapping

from tick_pausable.clock import ManualClock, MonotonicClock
from tick_pausable.easing import EasingFn
from tick_pausable.registry import Registry
from tick_pausable.scheduler import DelayScheduler
from tick_pausable.timers import TimerHandle
from tick_pausable.transitions import TransitionHandle, TransitionOptions
from tick_pausable.tweener import Tweener
from tick_pausable.types import ClockSource, HandleState

logger = logging.getLogger(__name__)

# Speed presets: the scalar multiplies durations, so lower is faster.
NORMAL = 1
FAST = 0.5
SLOW = 2


class Timeline:
    NORMAL = NORMAL
    FAST = FAST
    SLOW = SLOW

    def __init__(
        self,
        clock: ClockSource | None = None,
        speed: float = NORMAL,
        scheduler: DelayScheduler | None = None,
        tweener: Tweener | None = None,
    ) -> None:
        self._clock = clock if clock is not None else MonotonicClock()
        self._scheduler = scheduler or DelayScheduler(self._clock)
        self._tweener = tweener or Tweener(self._clock)
        self._registry = Registry()
        self._speed = NORMAL
        self.speed = speed
        self._stop_requested = False

    @property
    def clock(self) -> ClockSource:
        return self._clock

    @property
    def scheduler(self) -> DelayScheduler:
        return self._scheduler

    @property
    def tweener(self) -> Tweener:
        return self._tweener

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def timers(self) -> tuple[TimerHandle, ...]:
        return self._registry.timers

    @property
    def transitions(self) -> tuple[TransitionHandle, ...]:
        return self._registry.transitions

    @property
    def speed(self) -> float:
        """Duration multiplier applied whenever a handle (re)schedules.

        Changing it only affects handles scheduled afterwards; pause
        first and resume after (or use ``change_speed``).
        """
        return self._speed

    @speed.setter
    def speed(self, value: float) -> None:
        if value <= 0:
            raise ValueError("speed must be positive")
        self._speed = value

    def now(self) -> float:
        return self._clock.now()

    # -- Creation --

    def new_timer(
        self,
        duration: float,
        callback: Any = None,
        count: int = 1,
        *,
        name: str | None = None,
        user_data: Any = None,
        on_end: Any = None,
    ) -> TimerHandle:
        handle = TimerHandle(
            self,
            duration,
            callback,
            count,
            name=name,
            user_data=user_data,
            on_end=on_end,
        )
        self._registry.add_timer(handle)
        return handle

    def new_transition(
        self,
        obj: Any,
        targets: Mapping[str, Any] | None = None,
        *,
        time: float,
        cycle: int = 1,
        back_and_forth: bool = False,
        easing: str | EasingFn = "linear",
        name: str | None = None,
        user_data: Any = None,
        on_complete: Any = None,
        on_end: Any = None,
        **more_targets: Any,
    ) -> TransitionHandle:
        merged = dict(targets or {})
        merged.update(more_targets)
        options = TransitionOptions(
            time=time,
            targets=merged,
            cycle=cycle,
            back_and_forth=back_and_forth,
            easing=easing,
            name=name,
            user_data=user_data,
            on_complete=on_complete,
            on_end=on_end,
        )
        handle = TransitionHandle(self, obj, options)
        self._registry.add_transition(handle)
        return handle

    # -- Bulk operations --

    def pause_all_timers(self) -> None:
        self._registry.pause_all_timers()

    def resume_all_timers(self) -> None:
        self._registry.resume_all_timers()

    def cancel_all_timers(self) -> None:
        self._registry.cancel_all_timers()

    def pause_all_transitions(self) -> None:
        self._registry.pause_all_transitions()

    def resume_all_transitions(self) -> None:
        self._registry.resume_all_transitions()

    def cancel_all_transitions(self) -> None:
        self._registry.cancel_all_transitions()

    def pause_all(self) -> None:
        self.pause_all_timers()
        self.pause_all_transitions()

    def resume_all(self) -> None:
        self.resume_all_timers()
        self.resume_all_transitions()

    def cancel_all(self) -> None:
        self.cancel_all_timers()
        self.cancel_all_transitions()

    def cleanup(self) -> int:
        return self._registry.cleanup()

    def change_speed(self, speed: float) -> None:
        """Switch speed safely: pause what is running, set, resume it.

        Handles that were already paused stay paused.
        """
        if speed <= 0:
            raise ValueError("speed must be positive")
        running = [
            h
            for h in (*self._registry.timers, *self._registry.transitions)
            if h.state is HandleState.SCHEDULED
        ]
        for handle in running:
            handle.pause()
        self._speed = speed
        for handle in running:
            handle.resume()
        logger.debug(
            "speed changed to %s (%d handles rescheduled)", speed, len(running)
        )

    # -- Host loop --

    def update(self) -> None:
        """Fire due timers, then step tweens, at the current clock reading."""
        self._scheduler.update()
        self._tweener.update()

    def advance(self, ms: float, step: float | None = None) -> None:
        """Move a ManualClock forward, updating after every step."""
        if not isinstance(self._clock, ManualClock):
            raise TypeError("advance() requires a ManualClock")
        if step is not None and step <= 0:
            raise ValueError("step must be positive")
        left = ms
        while left > 0:
            delta = left if step is None else min(step, left)
            self._clock.advance(delta)
            self.update()
            left -= delta

    def stop(self) -> None:
        self._stop_requested = True

    def run(self, ms: float, tps: int = 60) -> None:
        """Run for ``ms`` of clock time at ``tps`` updates per second.

        A ManualClock is stepped without sleeping.
        """
        if tps <= 0:
            raise ValueError("tps must be positive")
        if isinstance(self._clock, ManualClock):
            self.advance(ms, step=1000.0 / tps)
            return
        deadline = self.now() + ms
        self._paced(tps, lambda: self.now() >= deadline)

    def run_forever(
        self, tps: int = 60, until: Callable[[], bool] | None = None
    ) -> None:
        if tps <= 0:
            raise ValueError("tps must be positive")
        self._paced(tps, until or (lambda: False))

    def _paced(self, tps: int, done: Callable[[], bool]) -> None:
        self._stop_requested = False
        dt = 1.0 / tps
        manual = isinstance(self._clock, ManualClock)
        logger.debug("host loop started at %d tps", tps)
        while not self._stop_requested and not done():
            start = time.monotonic()
            if manual:
                self._clock.advance(dt * 1000.0)
            self.update()
            elapsed = time.monotonic() - start
            sleep_time = dt - elapsed
            if sleep_time > 0:
                time.sleep(sleep_time)
        logger.debug("host loop stopped")
