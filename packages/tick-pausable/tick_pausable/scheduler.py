"""DelayScheduler - fire-after-N-ms callbacks, optionally repeating."""
from __future__ import annotations

import heapq
from dataclasses import dataclass
from typing import Callable

from tick_pausable.types import Booking, ClockSource, SchedulerEvent

_Callback = Callable[[SchedulerEvent], None]


@dataclass
class _Entry:
    booking: Booking
    delay: float
    callback: _Callback
    count: int  # 0 = forever
    due: float
    fired: int = 0


class DelayScheduler:
    """Books callbacks against a clock and fires them from ``update()``.

    Occurrences are dispatched at their due time: while a callback runs,
    ``now()`` reports that due time and new bookings are anchored to it,
    so a late update never shifts the schedule.
    """

    def __init__(self, clock: ClockSource) -> None:
        self._clock = clock
        self._entries: dict[int, _Entry] = {}
        # (due, seq); stale pairs for cancelled or re-queued entries are skipped.
        self._queue: list[tuple[float, int]] = []
        self._next_seq = 0
        self._dispatch_time: float | None = None
        self._updating = False

    @property
    def clock(self) -> ClockSource:
        return self._clock

    @property
    def pending(self) -> int:
        return len(self._entries)

    def now(self) -> float:
        if self._dispatch_time is not None:
            return self._dispatch_time
        return self._clock.now()

    def schedule(
        self, delay_ms: float, callback: _Callback, count: int = 1
    ) -> Booking:
        delay = max(float(delay_ms), 0.0)
        booking = Booking(self._next_seq)
        self._next_seq += 1
        entry = _Entry(
            booking=booking,
            delay=delay,
            callback=callback,
            count=max(count, 0),
            due=self.now() + delay,
        )
        self._entries[booking.seq] = entry
        heapq.heappush(self._queue, (entry.due, booking.seq))
        return booking

    def cancel(self, booking: Booking | None) -> None:
        if booking is None:
            return
        booking.active = False
        self._entries.pop(booking.seq, None)
        if self._updating:
            return
        if len(self._queue) > 2 * len(self._entries) + 64:
            self._compact()

    def is_active(self, booking: Booking | None) -> bool:
        return booking is not None and booking.active

    def update(self) -> int:
        """Fire everything due at the current clock reading, in due order.

        Returns the number of callbacks dispatched.
        """
        now = self._clock.now()
        # Repeating zero-period bookings fire once per update.
        deferred: list[_Entry] = []
        fired = 0
        self._updating = True
        try:
            while self._queue and self._queue[0][0] <= now:
                due, seq = heapq.heappop(self._queue)
                entry = self._entries.get(seq)
                if entry is None or entry.due != due:
                    continue
                entry.fired += 1
                if entry.count and entry.fired >= entry.count:
                    self.cancel(entry.booking)
                elif entry.delay == 0:
                    deferred.append(entry)
                else:
                    entry.due += entry.delay
                    heapq.heappush(self._queue, (entry.due, seq))
                fired += 1
                self._dispatch_time = due
                entry.callback(SchedulerEvent(entry.booking, due, entry.fired))
        finally:
            self._dispatch_time = None
            self._updating = False
            for entry in deferred:
                if entry.booking.active:
                    heapq.heappush(self._queue, (entry.due, entry.booking.seq))
        return fired

    def _compact(self) -> None:
        self._queue = [(e.due, seq) for seq, e in self._entries.items()]
        heapq.heapify(self._queue)
