"""TimerHandle - a repeating callback that survives pause/resume."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from tick_pausable.types import (
    Booking,
    HandleState,
    SchedulerEvent,
    TimerEvent,
    as_callback,
)

if TYPE_CHECKING:
    from tick_pausable.timeline import Timeline

logger = logging.getLogger(__name__)

# Listener objects receive both ticks and the final end through this method.
TIMER_LISTENER_METHOD = "timer_end"


class TimerHandle:
    """Fires ``callback`` every ``duration`` ms, ``count`` times (0 = forever).

    States: SCHEDULED (a live booking exists), PAUSED, REMOVED. Pausing
    records how much of the current interval is left, in nominal
    (unscaled) milliseconds; resuming books that remainder first and
    then goes back to full intervals for whatever ticks are left.
    """

    def __init__(
        self,
        timeline: Timeline,
        duration: float,
        callback: Any = None,
        count: int = 1,
        *,
        name: str | None = None,
        user_data: Any = None,
        on_end: Any = None,
    ) -> None:
        self._timeline = timeline
        self.duration = duration
        self.count = count
        self.counter = 0
        self.ticks = 0
        self.is_infinite = count == 0
        self.name = name
        self.user_data = user_data
        self._callback = as_callback(callback, TIMER_LISTENER_METHOD)
        self._on_end = as_callback(on_end, TIMER_LISTENER_METHOD)
        self._state = HandleState.SCHEDULED
        self._booking: Booking | None = None

        self.remaining_time = duration
        self.interval_start_time = timeline.scheduler.now()
        self.speed_at_schedule = timeline.speed
        self._book(duration, count, self._fire)
        logger.debug(
            "timer %r created: duration=%s count=%s", name, duration, count
        )

    def __repr__(self) -> str:
        return (
            f"TimerHandle(name={self.name!r}, state={self._state.value}, "
            f"counter={self.counter}/{self.count})"
        )

    @property
    def state(self) -> HandleState:
        return self._state

    @property
    def paused(self) -> bool:
        return self._state is HandleState.PAUSED

    @property
    def should_remove(self) -> bool:
        return self._state is HandleState.REMOVED

    @property
    def exhausted(self) -> bool:
        return not self.is_infinite and self.counter >= self.count

    # -- Public operations --

    def pause(self) -> None:
        if self._state is not HandleState.SCHEDULED:
            return
        self._timeline.scheduler.cancel(self._booking)
        self._booking = None
        ran = max(self._timeline.scheduler.now() - self.interval_start_time, 0)
        consumed = ran / self.speed_at_schedule
        self.remaining_time = max(self.remaining_time - consumed, 0)
        self._state = HandleState.PAUSED
        logger.debug(
            "timer %r paused with %.3f ms left", self.name, self.remaining_time
        )

    def resume(self) -> None:
        if self._state is not HandleState.PAUSED:
            return
        self._state = HandleState.SCHEDULED
        if self.exhausted:
            self.cancel()
            return
        self.interval_start_time = self._timeline.scheduler.now()
        self._book(self.remaining_time, 1, self._fire_remainder)
        logger.debug(
            "timer %r resumed, next tick in %.3f ms",
            self.name,
            self.remaining_time * self.speed_at_schedule,
        )

    def cancel(self) -> None:
        self._timeline.scheduler.cancel(self._booking)
        self._booking = None
        self._callback = None
        if self._state is not HandleState.REMOVED:
            self._state = HandleState.REMOVED
            logger.debug("timer %r cancelled", self.name)

    # -- Internals --

    def _book(
        self,
        nominal_ms: float,
        count: int,
        fire: Callable[[SchedulerEvent], None],
    ) -> None:
        speed = self._timeline.speed
        self._booking = self._timeline.scheduler.schedule(
            nominal_ms * speed, fire, count
        )
        self.speed_at_schedule = speed

    def _fire(self, event: SchedulerEvent) -> None:
        callback = self._callback
        if callback is None:
            self.cancel()
            return
        self.ticks += 1
        timer_event = TimerEvent(
            handle=self,
            name=self.name,
            user_data=self.user_data,
            count=self.ticks,
            time=event.time,
        )
        callback.invoke(timer_event)
        if self._state is HandleState.REMOVED:
            # Cancelled from inside its own callback.
            return
        if not self.is_infinite:
            self.counter += 1
            if self.counter >= self.count:
                self.cancel()
                if self._on_end is not None:
                    self._on_end.invoke(timer_event)
        self.remaining_time = self.duration
        self.interval_start_time = event.time

    def _fire_remainder(self, event: SchedulerEvent) -> None:
        self._fire(event)
        if self._state is not HandleState.SCHEDULED:
            return
        if self.is_infinite:
            self._book(self.duration, 0, self._fire)
            return
        ticks_left = self.count - self.counter
        if ticks_left > 0:
            self._book(self.duration, ticks_left, self._fire)
        else:
            self.cancel()
