# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# scheduler.py
# -----------------------------------------------------------------------------
# Purpose:
#   SpawnScheduler: fires a "spawn" timer every interval_between_drops and
#   activates a new order from a random recipe while under the cap.
#
# Design notes:
#   - At most one spawn timer is pending at a time; pause()/stop() cancel it
#     and handle_timer() re-checks the state, so a tick can never spawn after
#     a pause or stop request.
#   - stop() clears the live list without returning members to the pool.
#
# Usage:
#   sched = SpawnScheduler(env, pool, live, settings, rng, on_spawned)
#   sched.start(level)
# -----------------------------------------------------------------------------

from __future__ import annotations
import copy, logging, random
from enum import Enum
from typing import Callable, List, Optional

from .entities import LevelData, Order, Recipe

logger = logging.getLogger(__name__)

class SchedulerState(Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"
    PAUSED = "paused"
    STOPPED = "stopped"

class SpawnScheduler:
    def __init__(self, env, pool, live: List[Order], settings, rng: Optional[random.Random] = None,
                 on_spawned: Optional[Callable[[Order], None]] = None):
        self.env = env
        self.pool = pool
        self.live = live
        self.settings = settings
        self.rng = rng if rng is not None else random.Random()
        self.on_spawned = on_spawned
        self.level: Optional[LevelData] = None
        self.state = SchedulerState.INACTIVE
        self.last_tick: Optional[float] = None
        self.skipped_ticks = 0
        self._pending = None

    def start(self, level: LevelData):
        self._cancel_pending()
        self.level = level
        self.live.clear()
        self.last_tick = None
        self.state = SchedulerState.ACTIVE
        self._schedule(self.env.t)

    def pause(self):
        if self.state is not SchedulerState.ACTIVE:
            return
        self._cancel_pending()
        self.state = SchedulerState.PAUSED

    def resume(self):
        if self.state is not SchedulerState.PAUSED:
            return
        self.state = SchedulerState.ACTIVE
        due = self.env.t
        if self.last_tick is not None:
            due = max(due, self.last_tick + self.settings.interval_between_drops)
        self._schedule(due)

    def stop(self):
        self._cancel_pending()
        self.state = SchedulerState.STOPPED
        self.live.clear()

    def handle_timer(self, env, kind: str):
        """Callback invoked by the router when the spawn timer fires."""
        if kind != "spawn" or self.state is not SchedulerState.ACTIVE:
            return
        self._pending = None
        self.last_tick = env.t
        self.try_spawn()
        self._schedule(env.t + self.settings.interval_between_drops)

    def try_spawn(self) -> Optional[Order]:
        if len(self.live) >= self.settings.max_concurrent_orders:
            self.skipped_ticks += 1
            return None
        try:
            order = self.pool.acquire()
        except Exception:
            logger.warning("[SpawnScheduler] pool failed to provide an order, skipping tick", exc_info=True)
            return None
        if order is None:
            logger.warning("[SpawnScheduler] couldn't pick an order from pool")
            return None
        try:
            recipe = self.sample_recipe()
        except (IndexError, ValueError, TypeError, AttributeError):
            logger.warning("[SpawnScheduler] recipe catalog unusable, skipping tick", exc_info=True)
            self.pool.release(order)
            return None
        order.setup(recipe, self.env)
        self.live.append(order)
        logger.debug(f"[SpawnScheduler] t={self.env.t:.1f} spawned {recipe.name} ({len(self.live)}/{self.settings.max_concurrent_orders})")
        if self.on_spawned is not None:
            self.on_spawned(order)
        return order

    def sample_recipe(self) -> Recipe:
        idx = self.rng.randrange(len(self.level.orders))
        return copy.deepcopy(self.level.orders[idx])

    def _schedule(self, t: float):
        self._pending = self.env.call_at(t, self, "spawn")

    def _cancel_pending(self):
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
