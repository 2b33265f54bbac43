"""Deferred and repeating callbacks driven by game time.

Timers only move forward when the game loop calls :meth:`Scheduler.advance`,
so pausing the loop freezes every pending action.  Whoever schedules an
action keeps the returned :class:`Timer` and cancels it when the state it
was meant for goes away.
"""

import heapq
import itertools
import logging


LOGGER = logging.getLogger(__name__)


class Timer:
    __slots__ = ("deadline", "callback", "interval", "cancelled", "fired")

    def __init__(self, deadline, callback, interval=None):
        self.deadline = deadline
        self.callback = callback
        self.interval = interval
        self.cancelled = False
        self.fired = False

    @property
    def active(self):
        return not self.cancelled and (self.interval is not None or not self.fired)

    def cancel(self):
        self.cancelled = True


class Scheduler:
    def __init__(self):
        self.time = 0.0
        self._queue = []
        self._counter = itertools.count()

    @property
    def pending(self):
        return sum(1 for _, _, timer in self._queue if timer.active)

    def _push(self, timer):
        heapq.heappush(self._queue, (timer.deadline, next(self._counter), timer))
        return timer

    def call_later(self, delay, callback):
        return self._push(Timer(self.time + max(0.0, delay), callback))

    def call_every(self, interval, callback):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        return self._push(Timer(self.time + interval, callback, interval))

    def advance(self, dt):
        target = self.time + dt
        while self._queue and self._queue[0][0] <= target:
            deadline, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self.time = deadline
            timer.fired = True
            if timer.interval is not None:
                timer.deadline = deadline + timer.interval
                self._push(timer)
            timer.callback()
        self.time = target

    def cancel_all(self):
        for _, _, timer in self._queue:
            timer.cancel()
        self._queue.clear()
