# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# metrics.py
# -----------------------------------------------------------------------------
# Purpose:
#   Collect and summarize shift KPIs: spawned/delivered/expired orders,
#   plates, tips, and a cumulative tip time series.
#
# Design notes:
#   - Metrics is an OrderEventSink, so the coordinator reports to it directly.
#   - Plate outcomes come from the cooks via note_plate().
#   - Summaries return JSON‑serializable dicts for easy tabulation.
#
# Usage:
#   M = Metrics(cfg); M.attach_env(env); ...; M.summary()
# -----------------------------------------------------------------------------

from __future__ import annotations
from collections import defaultdict
from typing import Dict, List

from .signals import OrderEventSink

class Metrics(OrderEventSink):
    def __init__(self, cfg: dict):
        self.shift_minutes = float(cfg.get("sim", {}).get("shift_minutes", 5) or 0)
        self.env = None
        self.spawned_orders = 0
        self.delivered_orders = 0
        self.expired_orders = 0
        self.dropped_orders = 0                   # cleared by stop or re-init
        self.plates = 0
        self.rejected_plates = 0
        self.tip_total = 0
        self.tip_counts = defaultdict(int)        # tip value -> deliveries
        self.delivered_by_recipe = defaultdict(int)
        self.expired_by_recipe = defaultdict(int)
        self.ratio_total = 0.0                    # sum of remaining/initial at delivery
        self.peak_live = 0
        self._live = 0
        self.time_series: List[Dict[str, float]] = []

    def attach_env(self, env):
        self.env = env

    def _now(self) -> float:
        return self.env.t if self.env is not None else 0.0

    def spawned(self, order):
        self.spawned_orders += 1
        self._live += 1
        self.peak_live = max(self.peak_live, self._live)

    def expired(self, order):
        self.expired_orders += 1
        self._live -= 1
        self.expired_by_recipe[order.recipe.name] += 1

    def delivered(self, order, tip: int):
        self.delivered_orders += 1
        self._live -= 1
        self.tip_total += tip
        self.tip_counts[tip] += 1
        self.delivered_by_recipe[order.recipe.name] += 1
        if order.initial_remaining_time > 0:
            self.ratio_total += order.remaining_time / order.initial_remaining_time
        self.time_series.append({
            "time_minutes": self._now() / 60.0,
            "tips_total": self.tip_total,
            "delivered_total": self.delivered_orders,
        })

    def cleared(self, orders):
        self.dropped_orders += len(orders)
        self._live -= len(orders)

    def note_plate(self, matched: bool):
        self.plates += 1
        if not matched:
            self.rejected_plates += 1

    def summary(self) -> Dict:
        closed = self.delivered_orders + self.expired_orders
        return {
            "spawned": self.spawned_orders,
            "delivered": self.delivered_orders,
            "expired": self.expired_orders,
            "dropped": self.dropped_orders,
            "open_at_close": self.spawned_orders - closed - self.dropped_orders,
            "delivery_rate": self.delivered_orders / closed if closed else 0.0,
            "plates": self.plates,
            "rejected_plates": self.rejected_plates,
            "tips_total": self.tip_total,
            "tips_per_minute": self.tip_total / self.shift_minutes if self.shift_minutes > 0 else 0.0,
            "avg_tip": self.tip_total / self.delivered_orders if self.delivered_orders else 0.0,
            "avg_time_left_ratio": self.ratio_total / self.delivered_orders if self.delivered_orders else 0.0,
            "tip_counts": dict(self.tip_counts),
            "delivered_by_recipe": dict(self.delivered_by_recipe),
            "expired_by_recipe": dict(self.expired_by_recipe),
            "peak_live": self.peak_live,
            "time_series": list(self.time_series),
        }
