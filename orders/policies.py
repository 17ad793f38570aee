# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# policies.py
# -----------------------------------------------------------------------------
# Purpose:
#   Reward and ordering policies used by the matching engine.
#
# Design notes:
#   - Keep pure functions to ease testing (policy -> decision).
#
# Usage:
#   from orders.policies import calculate_tip, by_arrival
# -----------------------------------------------------------------------------

from __future__ import annotations

# (exclusive lower bound on remaining/initial ratio, tip), checked top-down
TIP_BANDS = ((0.75, 6), (0.5, 4), (0.25, 2))

def calculate_tip(order) -> int:
    """Tip earned by delivering `order` now, from its fraction of time left."""
    if order.initial_remaining_time <= 0:
        return 0
    ratio = order.remaining_time / order.initial_remaining_time
    for bound, tip in TIP_BANDS:
        if ratio > bound:
            return tip
    return 0

def by_arrival(orders):
    """Pending (undelivered) orders, earliest arrival first; ties keep list order."""
    return sorted((o for o in orders if not o.is_delivered), key=lambda o: o.arrival_time)
