# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# arrivals.py
# -----------------------------------------------------------------------------
# Purpose:
#   Generate exogenous plate submissions: simulated cooks that finish a plate
#   every so often and put it on the pass.
#
# Design notes:
#   - Plate contents depend on which orders are live when the plate is done,
#     so cooks schedule themselves one plate at a time instead of generating
#     all arrivals up front.
#   - A cook aims at a random live order and, with mistake_prob, forgets one
#     ingredient. With no live orders it idles for another plate time.
#
# Usage:
#   cooks = schedule_cooks(env, coordinator, cfg, rng, metrics)
# -----------------------------------------------------------------------------

from __future__ import annotations
import random
from typing import Dict, List
from .clock import Event

class Cook:
    def __init__(self, name: str, coordinator, mean_plate_seconds: float, mistake_prob: float,
                 rng: random.Random, metrics=None):
        if mean_plate_seconds <= 0:
            raise ValueError(f"cook {name}: mean_plate_seconds must be positive")
        self.name = name
        self.coordinator = coordinator
        self.mean_plate_seconds = mean_plate_seconds
        self.mistake_prob = mistake_prob
        self.rng = rng
        self.metrics = metrics

    def start(self, env):
        self._schedule_next(env)

    def _schedule_next(self, env):
        dt = self.rng.expovariate(1.0 / self.mean_plate_seconds)
        env.call_at(env.t + dt, self, "plate_ready")

    def handle_timer(self, env, kind: str):
        """Callback invoked by the router when the current plate is done."""
        if kind != "plate_ready":
            return
        plate = self.make_plate()
        if plate:
            env.schedule(Event(env.t, "arrival", {"plate": plate, "source": self}))
        self._schedule_next(env)

    def make_plate(self) -> List:
        live = self.coordinator.live
        if not live:
            return []
        target = live[self.rng.randrange(len(live))]
        plate = target.required_ingredients
        if len(plate) > 1 and self.rng.random() < self.mistake_prob:
            plate.pop(self.rng.randrange(len(plate)))
        self.rng.shuffle(plate)
        return plate

    def on_plate_result(self, env, plate, result):
        if self.metrics is not None:
            self.metrics.note_plate(result is not None)

def schedule_cooks(env, coordinator, cfg: Dict, rng: random.Random, metrics=None) -> List[Cook]:
    cook_cfg = cfg.get("cook", {})
    n = max(0, int(cook_cfg.get("cooks", 1)))
    mean_s = float(cook_cfg.get("mean_plate_seconds", 12.0))
    mistake = float(cook_cfg.get("mistake_prob", 0.0))
    cooks = [Cook(f"cook{i+1}", coordinator, mean_s, mistake, rng, metrics) for i in range(n)]
    for cook in cooks:
        cook.start(env)
    return cooks
