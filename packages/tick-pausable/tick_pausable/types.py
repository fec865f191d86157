"""Shared types, callback capabilities and collaborator protocols."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Protocol

if TYPE_CHECKING:
    from tick_pausable.timers import TimerHandle
    from tick_pausable.transitions import TransitionHandle


class ClockSource(Protocol):
    def now(self) -> float: ...


class HandleState(enum.Enum):
    SCHEDULED = "scheduled"
    PAUSED = "paused"
    REMOVED = "removed"


class Booking:
    """Opaque ticket returned by a primitive; compared by identity."""

    __slots__ = ("seq", "active")

    def __init__(self, seq: int) -> None:
        self.seq = seq
        self.active = True

    def __repr__(self) -> str:
        return f"Booking({self.seq}, active={self.active})"


# -- Callback capabilities --


@dataclass(frozen=True, slots=True)
class Direct:
    """Plain callable."""

    fn: Callable[..., Any]

    def invoke(self, *args: Any) -> None:
        self.fn(*args)


@dataclass(frozen=True, slots=True)
class NamedMethod:
    """Listener object; ``method`` is looked up at dispatch time.

    A listener without the method (or with a non-callable attribute of
    that name) is skipped.
    """

    target: Any
    method: str

    def invoke(self, *args: Any) -> None:
        fn = getattr(self.target, self.method, None)
        if callable(fn):
            fn(*args)


Callback = Direct | NamedMethod


def as_callback(value: Any, method: str) -> Callback | None:
    """Wrap a user-supplied callback into a capability variant.

    Callables become ``Direct``, any other object becomes a listener
    dispatched through ``method``. ``None`` stays ``None``.
    """
    if value is None or isinstance(value, (Direct, NamedMethod)):
        return value
    if callable(value):
        return Direct(value)
    return NamedMethod(value, method)


# -- Event payloads --


@dataclass(frozen=True, slots=True)
class SchedulerEvent:
    booking: Booking
    time: float
    count: int


@dataclass(frozen=True, slots=True)
class TimerEvent:
    handle: TimerHandle
    name: str | None
    user_data: Any
    count: int
    time: float


@dataclass(frozen=True, slots=True)
class TransitionEvent:
    handle: TransitionHandle
    name: str | None
    user_data: Any
    cycle: int
