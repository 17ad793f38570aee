# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# pool.py
# -----------------------------------------------------------------------------
# Purpose:
#   OrderPool: reservoir of inactive Order instances so the scheduler reuses
#   objects instead of building a new one per spawn.
#
# Design notes:
#   - FIFO reuse (deque); unbounded, never evicts.
#   - Callers revoke an order's subscriptions before release().
#
# Usage:
#   pool = OrderPool(); order = pool.acquire(); pool.release(order)
# -----------------------------------------------------------------------------

from __future__ import annotations
from collections import deque
from typing import Callable, Deque, Optional
from .entities import Order

class OrderPool:
    def __init__(self, factory: Optional[Callable[[], Order]] = None):
        self.factory = factory or Order
        self._free: Deque[Order] = deque()
        self.created: int = 0

    def acquire(self) -> Order:
        if self._free:
            return self._free.popleft()
        order = self.factory()
        if order is not None:
            self.created += 1
        return order

    def release(self, order: Order):
        self._free.append(order)

    def __len__(self):
        return len(self._free)

    def __contains__(self, order) -> bool:
        return any(o is order for o in self._free)
