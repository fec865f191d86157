"""Registry - owns every live timer and transition handle."""
from __future__ import annotations

import logging
from typing import Callable, Protocol, TypeVar

from tick_pausable.timers import TimerHandle
from tick_pausable.transitions import TransitionHandle

logger = logging.getLogger(__name__)


class Handle(Protocol):
    @property
    def should_remove(self) -> bool: ...

    def pause(self) -> None: ...

    def resume(self) -> None: ...

    def cancel(self) -> None: ...


H = TypeVar("H", bound=Handle)


class Registry:
    """Two insertion-ordered collections: timers and transitions.

    Bulk operations walk each collection from the newest handle to the
    oldest, so entries can be dropped in place while iterating.
    """

    def __init__(self) -> None:
        self._timers: list[TimerHandle] = []
        self._transitions: list[TransitionHandle] = []

    @property
    def timers(self) -> tuple[TimerHandle, ...]:
        return tuple(self._timers)

    @property
    def transitions(self) -> tuple[TransitionHandle, ...]:
        return tuple(self._transitions)

    def __len__(self) -> int:
        return len(self._timers) + len(self._transitions)

    def add_timer(self, handle: TimerHandle) -> None:
        self._timers.append(handle)

    def add_transition(self, handle: TransitionHandle) -> None:
        self._transitions.append(handle)

    # -- Bulk operations --

    def pause_all_timers(self) -> None:
        _apply_live(self._timers, lambda h: h.pause())

    def resume_all_timers(self) -> None:
        _apply_live(self._timers, lambda h: h.resume())

    def cancel_all_timers(self) -> None:
        _cancel_all(self._timers)
        logger.debug("cancelled all timers")

    def pause_all_transitions(self) -> None:
        _apply_live(self._transitions, lambda h: h.pause())

    def resume_all_transitions(self) -> None:
        _apply_live(self._transitions, lambda h: h.resume())

    def cancel_all_transitions(self) -> None:
        _cancel_all(self._transitions)
        logger.debug("cancelled all transitions")

    def cleanup(self) -> int:
        """Drop handles marked for removal. Returns how many were dropped."""
        removed = _sweep(self._timers) + _sweep(self._transitions)
        if removed:
            logger.debug("cleanup removed %d handles", removed)
        return removed


def _apply_live(handles: list[H], action: Callable[[H], None]) -> None:
    for i in range(len(handles) - 1, -1, -1):
        handle = handles[i]
        if handle.should_remove:
            del handles[i]
        else:
            action(handle)


def _cancel_all(handles: list[H]) -> None:
    for i in range(len(handles) - 1, -1, -1):
        handles[i].cancel()
        del handles[i]


def _sweep(handles: list[H]) -> int:
    before = len(handles)
    handles[:] = [h for h in handles if not h.should_remove]
    return before - len(handles)
