# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# signals.py
# -----------------------------------------------------------------------------
# Purpose:
#   Notification plumbing: per-instance Signals with revocable Subscription
#   tokens, the OrderEventSink the coordinator reports to, and the layout
#   collaborator hook.
#
# Design notes:
#   - A Subscription is owned by whoever subscribed; revoking it is the only
#     way to detach a handler, so pooled orders never keep stale handlers.
#   - Handlers fire synchronously, in subscription order, on the caller's
#     thread of control.
#
# Usage:
#   sub = order.on_expired.subscribe(handler); sub.revoke()
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import Callable, List, Optional

class Subscription:
    """Token returned by Signal.subscribe; revoke() detaches the handler."""
    __slots__ = ("_signal", "handler")

    def __init__(self, signal: "Signal", handler: Callable):
        self._signal: Optional[Signal] = signal
        self.handler = handler

    @property
    def active(self) -> bool:
        return self._signal is not None

    def revoke(self):
        if self._signal is None:
            return
        self._signal._remove(self)
        self._signal = None

class Signal:
    def __init__(self, name: str):
        self.name = name
        self._subs: List[Subscription] = []

    def subscribe(self, handler: Callable) -> Subscription:
        sub = Subscription(self, handler)
        self._subs.append(sub)
        return sub

    def _remove(self, sub: Subscription):
        self._subs = [s for s in self._subs if s is not sub]

    def emit(self, *args):
        # Iterate over a snapshot: handlers may revoke themselves
        for sub in list(self._subs):
            if sub.active:
                sub.handler(*args)

    def __len__(self):
        return len(self._subs)

class OrderEventSink:
    """Receiver of order lifecycle notifications. Default methods do nothing."""

    def spawned(self, order):
        pass

    def expired(self, order):
        pass

    def delivered(self, order, tip: int):
        pass

    def cleared(self, orders):
        """Live orders dropped by stop_and_clear() or a re-init, without a terminal notification."""
        pass

class FanoutSink(OrderEventSink):
    """Forward every notification to several sinks, in order."""

    def __init__(self, *sinks: OrderEventSink):
        self.sinks = list(sinks)

    def spawned(self, order):
        for s in self.sinks:
            s.spawned(order)

    def expired(self, order):
        for s in self.sinks:
            s.expired(order)

    def delivered(self, order, tip: int):
        for s in self.sinks:
            s.delivered(order, tip)

    def cleared(self, orders):
        for s in self.sinks:
            s.cleared(orders)

class NullLayout:
    """Layout collaborator for headless runs."""

    def request_regroup(self):
        pass
