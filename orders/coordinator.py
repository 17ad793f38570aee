# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# coordinator.py
# -----------------------------------------------------------------------------
# Purpose:
#   OrderCoordinator: owns the live order list and the pool, wires the spawn
#   scheduler and the matching engine, and routes Env events to them.
#
# Design notes:
#   - Every spawned order gets two Subscriptions (delivered, expired) held in
#     self._subs; they are revoked before the order goes back to the pool.
#   - Notifications go to the injected OrderEventSink only.
#   - Outside callers use init(), stop_and_clear() and submit_plate(); pause
#     and resume live on self.scheduler.
#
# Usage:
#   coord = OrderCoordinator(settings, sink=metrics)
#   coord.init(level); coord.env.run_until(300)
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging, random
from typing import Dict, Iterable, List, Optional, Tuple

from .clock import Env
from .config import OrderSettings, validate_level
from .entities import LevelData, Order
from .matching import MatchingEngine
from .pool import OrderPool
from .scheduler import SpawnScheduler
from .signals import NullLayout, OrderEventSink, Subscription

logger = logging.getLogger(__name__)

class OrderCoordinator:
    def __init__(self, settings: Optional[OrderSettings] = None, sink: Optional[OrderEventSink] = None,
                 layout=None, rng: Optional[random.Random] = None, pool: Optional[OrderPool] = None,
                 env: Optional[Env] = None):
        self.settings = settings if settings is not None else OrderSettings()
        self.sink = sink if sink is not None else OrderEventSink()
        self.layout = layout if layout is not None else NullLayout()
        self.env = env if env is not None else Env()
        if self.env.router is None:
            self.env.router = self
        self.pool = pool if pool is not None else OrderPool()
        self.live: List[Order] = []
        self._subs: Dict[int, List[Subscription]] = {}
        self.scheduler = SpawnScheduler(self.env, self.pool, self.live, self.settings,
                                        rng=rng, on_spawned=self._on_spawned)
        self.matcher = MatchingEngine(self.live, self._deactivate_send_back_to_pool,
                                      sink=self.sink, layout=self.layout)

    # -------------------- lifecycle --------------------

    def init(self, level: LevelData):
        self.settings.validate()
        validate_level(level)
        self._detach_all()
        self.scheduler.start(level)
        logger.info(f"[OrderCoordinator] init level={level.name!r} recipes={len(level.orders)} "
                    f"interval={self.settings.interval_between_drops}s cap={self.settings.max_concurrent_orders}")

    def stop_and_clear(self):
        self._detach_all()
        self.scheduler.stop()
        logger.info("[OrderCoordinator] StopAndClear")

    def submit_plate(self, ingredients: Optional[Iterable]) -> Optional[Tuple[Order, int]]:
        for order in self.live:
            order.update(self.env.t)
        return self.matcher.submit_plate(ingredients)

    # -------------------- Env routing --------------------

    def on_timer(self, env, target, kind: str):
        if target is not None and hasattr(target, "handle_timer"):
            target.handle_timer(env, kind=kind)

    def on_arrival(self, env, plate, source=None):
        result = self.submit_plate(plate)
        if source is not None and hasattr(source, "on_plate_result"):
            source.on_plate_result(env, plate, result)
        return result

    # -------------------- order notifications --------------------

    def _on_spawned(self, order: Order):
        self._subs[order.uid] = [
            order.on_delivered.subscribe(self._handle_order_delivered),
            order.on_expired.subscribe(self._handle_order_expired),
        ]
        self.sink.spawned(order)

    def _handle_order_delivered(self, order: Order):
        # Delivered through the order itself rather than a plate
        order.update(self.env.t)
        self.matcher.deliver(order)

    def _handle_order_expired(self, order: Order):
        self._unsubscribe(order)
        self.live[:] = [o for o in self.live if o is not order]
        self.pool.release(order)
        logger.debug(f"[OrderCoordinator] t={self.env.t:.1f} {order!r} expired")
        self.sink.expired(order)

    def _deactivate_send_back_to_pool(self, order: Order):
        self._unsubscribe(order)
        order.mark_delivered()
        self.live[:] = [o for o in self.live if not o.is_delivered]
        self.pool.release(order)

    def _unsubscribe(self, order: Order):
        for sub in self._subs.pop(order.uid, []):
            sub.revoke()

    def _detach_all(self):
        dropped = list(self.live)
        for order in dropped:
            self._unsubscribe(order)
            order.cancel_timer()
        if dropped:
            self.sink.cleared(dropped)
