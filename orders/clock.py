# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# clock.py
# -----------------------------------------------------------------------------
# Purpose:
#   Minimal discrete‑event primitives: Event and Env. Everything in the order
#   system (spawn ticks, order countdowns, plate submissions) runs as events
#   on a single future event list, one at a time.
#
# Design notes:
#   - Ties on time are broken by scheduling order, so two events due at the
#     same instant fire in the order they were scheduled.
#   - Events can be cancelled; a cancelled event stays in the heap but is
#     skipped when popped.
#   - Dispatch is delegated to env.router (the OrderCoordinator).
#
# Usage:
#   from orders.clock import Env, Event
# -----------------------------------------------------------------------------

from __future__ import annotations
import heapq, itertools
from typing import List, Optional

class Event:
    """Minimal event object for the Future Event List (FEL)."""
    __slots__ = ("t", "kind", "data", "seq", "cancelled")
    _counter = itertools.count()

    def __init__(self, t: float, kind: str, data: dict):
        self.t = t; self.kind = kind; self.data = data
        self.seq = next(Event._counter)
        self.cancelled = False

    def cancel(self):
        self.cancelled = True

    def __lt__(self, other: "Event"):
        return (self.t, self.seq) < (other.t, other.seq)

class Env:
    """Simulation environment holding the clock, FEL, and a router hook.

    Attributes
    ----------
    t : float
        Simulation time (seconds).
    FEL : list[Event]
        Min‑heap of scheduled events.
    router : object
        Object with on_timer/on_arrival methods (the OrderCoordinator).
    """
    def __init__(self, router=None):
        self.t: float = 0.0
        self.FEL: List[Event] = []
        self.router = router

    def schedule(self, ev: Event) -> Event:
        if ev.t < self.t:
            raise ValueError(f"cannot schedule event in the past (t={ev.t}, now={self.t})")
        heapq.heappush(self.FEL, ev)
        return ev

    def call_at(self, t: float, target, kind: str) -> Event:
        """Schedule a timer that calls target.handle_timer(env, kind) at time t."""
        return self.schedule(Event(t, "timer", {"target": target, "kind": kind}))

    def peek(self) -> Optional[Event]:
        while self.FEL and self.FEL[0].cancelled:
            heapq.heappop(self.FEL)
        return self.FEL[0] if self.FEL else None

    def step(self) -> bool:
        """Pop and dispatch the next live event. Returns False when the FEL is empty."""
        ev = self.peek()
        if ev is None:
            return False
        heapq.heappop(self.FEL)
        self.t = ev.t
        kind, data = ev.kind, ev.data
        if kind == "timer":
            self.router.on_timer(self, **data)
        elif kind == "arrival":
            self.router.on_arrival(self, **data)
        return True

    def run_until(self, T_end: float):
        while True:
            ev = self.peek()
            if ev is None or ev.t > T_end:
                break
            self.step()
        # Clock reads T_end even when the FEL drained early
        self.t = max(self.t, T_end)
