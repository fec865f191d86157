"""tick-pausable - Pausable, speed-scalable timers and transitions."""

from tick_pausable.clock import ManualClock, MonotonicClock
from tick_pausable.easing import EASINGS
from tick_pausable.registry import Registry
from tick_pausable.scheduler import DelayScheduler
from tick_pausable.timeline import FAST, NORMAL, SLOW, Timeline
from tick_pausable.timers import TimerHandle
from tick_pausable.transitions import TransitionHandle, TransitionOptions
from tick_pausable.tweener import Tweener
from tick_pausable.types import (
    Direct,
    HandleState,
    NamedMethod,
    TimerEvent,
    TransitionEvent,
    as_callback,
)

__all__ = [
    "Timeline",
    "TimerHandle",
    "TransitionHandle",
    "TransitionOptions",
    "Registry",
    "DelayScheduler",
    "Tweener",
    "ManualClock",
    "MonotonicClock",
    "EASINGS",
    "HandleState",
    "Direct",
    "NamedMethod",
    "TimerEvent",
    "TransitionEvent",
    "as_callback",
    "NORMAL",
    "FAST",
    "SLOW",
]
