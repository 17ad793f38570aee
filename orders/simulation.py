# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# simulation.py
# -----------------------------------------------------------------------------
# Purpose:
#   Simulate a single replication ("one shift"): build the coordinator and
#   metrics, start the level, schedule cooks, run the event loop, and return
#   metrics.
#
# Usage:
#   from orders.simulation import run_one_shift
#   results = run_one_shift(cfg)
# -----------------------------------------------------------------------------

from __future__ import annotations
import random
from typing import Dict
from .clock import Env
from .config import level_from_cfg, settings_from_cfg
from .coordinator import OrderCoordinator
from .metrics import Metrics
from .arrivals import schedule_cooks

def run_one_shift(cfg: Dict) -> Dict:
    rng = random.Random(cfg.get("sim", {}).get("seed", 0))

    settings = settings_from_cfg(cfg)
    level = level_from_cfg(cfg)
    M = Metrics(cfg)
    env = Env()
    coord = OrderCoordinator(settings, sink=M, rng=rng, env=env)
    M.attach_env(env)

    coord.init(level)
    schedule_cooks(env, coord, cfg, rng, metrics=M)
    T_end = cfg.get("sim", {}).get("shift_minutes", 5) * 60.0
    env.run_until(T_end)
    coord.stop_and_clear()

    summary = M.summary()
    summary["pool_size"] = len(coord.pool)
    summary["orders_created"] = coord.pool.created
    return summary
