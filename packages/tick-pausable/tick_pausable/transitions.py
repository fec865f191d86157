"""TransitionHandle - cyclic property tweens that survive pause/resume."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping

from tick_pausable.easing import EasingFn
from tick_pausable.tweener import read_property, write_property
from tick_pausable.types import (
    Booking,
    HandleState,
    TransitionEvent,
    as_callback,
)

if TYPE_CHECKING:
    from tick_pausable.timeline import Timeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransitionOptions:
    """Everything a transition was created with. Never mutated."""

    time: float
    targets: Mapping[str, Any] = field(default_factory=dict)
    cycle: int = 1  # 0 = forever
    back_and_forth: bool = False
    easing: str | EasingFn = "linear"
    name: str | None = None
    user_data: Any = None
    on_complete: Any = None
    on_end: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "targets", MappingProxyType(dict(self.targets))
        )


class TransitionHandle:
    """Tweens ``obj`` toward ``options.targets``, ``options.cycle`` times.

    Without back-and-forth every cycle starts from the values captured
    at creation. With it, each cycle heads back to where the previous
    one started, so consecutive cycles alternate direction.

    Resuming restarts the easing curve over the remaining time rather
    than continuing mid-curve.
    """

    def __init__(
        self, timeline: Timeline, obj: Any, options: TransitionOptions
    ) -> None:
        self._timeline = timeline
        self.target = obj
        self.options = options
        self.original_time = options.time
        self.cycle_target = options.cycle
        self.cycle_count = 0
        self.cycles_run = 0
        self.back_and_forth = options.back_and_forth
        self._on_complete = as_callback(options.on_complete, "transition")
        self._on_end = as_callback(options.on_end, "transition_end")

        self._initial_values = {
            key: read_property(obj, key) for key in options.targets
        }
        self._current_targets = dict(options.targets)
        self.elapsed: float | None = None
        self._removed = False
        self._booking: Booking | None = None

        self.start = timeline.tweener.now()
        self.speed_at_schedule = timeline.speed
        self._animate(self.original_time)
        logger.debug(
            "transition %r created: time=%s cycle=%s back_and_forth=%s",
            options.name,
            options.time,
            options.cycle,
            options.back_and_forth,
        )

    def __repr__(self) -> str:
        return (
            f"TransitionHandle(name={self.name!r}, state={self.state.value}, "
            f"cycle={self.cycle_count}/{self.cycle_target})"
        )

    @property
    def name(self) -> str | None:
        return self.options.name

    @property
    def user_data(self) -> Any:
        return self.options.user_data

    @property
    def state(self) -> HandleState:
        if self._removed:
            return HandleState.REMOVED
        if self.elapsed is not None:
            return HandleState.PAUSED
        return HandleState.SCHEDULED

    @property
    def paused(self) -> bool:
        return self.state is HandleState.PAUSED

    @property
    def should_remove(self) -> bool:
        return self._removed

    @property
    def initial_values(self) -> dict[str, Any]:
        return dict(self._initial_values)

    @property
    def current_targets(self) -> dict[str, Any]:
        return dict(self._current_targets)

    # -- Public operations --

    def pause(self) -> None:
        if self._removed or self.elapsed is not None:
            return
        tweener = self._timeline.tweener
        if not tweener.is_active(self._booking):
            self.cancel()
            return
        ran = max(tweener.now() - self.start, 0)
        self.elapsed = min(ran / self.speed_at_schedule, self.original_time)
        tweener.cancel(self._booking)
        self._booking = None
        logger.debug(
            "transition %r paused at %.3f/%s ms",
            self.name,
            self.elapsed,
            self.original_time,
        )

    def resume(self) -> None:
        if self._removed or self.elapsed is None:
            return
        elapsed = self.elapsed
        self._animate(self.original_time - elapsed)
        now = self._timeline.tweener.now()
        self.start = now - elapsed * self.speed_at_schedule
        self.elapsed = None
        logger.debug("transition %r resumed", self.name)

    def cancel(self) -> None:
        self._timeline.tweener.cancel(self._booking)
        self._booking = None
        if not self._removed:
            self._removed = True
            logger.debug("transition %r cancelled", self.name)

    # -- Internals --

    def _animate(self, nominal_ms: float) -> None:
        speed = self._timeline.speed
        self._booking = self._timeline.tweener.animate(
            self.target,
            self._current_targets,
            nominal_ms * speed,
            self._complete,
            self.options.easing,
        )
        self.speed_at_schedule = speed

    def _complete(self, obj: Any) -> None:
        self.cycles_run += 1
        event = TransitionEvent(
            handle=self,
            name=self.name,
            user_data=self.user_data,
            cycle=self.cycles_run,
        )
        if self._on_complete is not None:
            self._on_complete.invoke(obj, event)
        if self._removed:
            return

        if self.cycle_target > 0:
            self.cycle_count += 1
            if self.cycle_count >= self.cycle_target:
                self.cancel()
                if self._on_end is not None:
                    self._on_end.invoke(obj, event)
                return
        self._repeat()

    def _repeat(self) -> None:
        self._timeline.tweener.cancel(self._booking)
        self.elapsed = None
        for key, initial in self._initial_values.items():
            if initial is None:
                # Property the object never had; leave it alone.
                continue
            if self.back_and_forth:
                self._current_targets[key] = initial
                self._initial_values[key] = read_property(self.target, key)
            else:
                write_property(self.target, key, initial)
        self.start = self._timeline.tweener.now()
        self._animate(self.original_time)
        logger.debug(
            "transition %r starting cycle %d", self.name, self.cycles_run + 1
        )
