"""
experiments/scenarios.py

Holds scenario definitions (decision variables) to sweep during experiments.
Add spawn cadence, order caps, and kitchen staffing here.
"""

from __future__ import annotations

BASELINE = {
    "name": "baseline",
    "overrides": {},  # override config keys here per scenario
}

RUSH_HOUR = {
    "name": "rush_hour",
    "overrides": {
        "orders": {
            "interval_between_drops": 3.0,
            "max_concurrent_orders": 6,
        },
    },
}

TWO_COOKS = {
    "name": "two_cooks",
    "overrides": {
        "orders": {
            "interval_between_drops": 3.0,
            "max_concurrent_orders": 6,
        },
        "cook": {
            "cooks": 2,
            "mean_plate_seconds": 12.0,
            "mistake_prob": 0.1,
        },
    },
}

CARELESS_COOK = {
    "name": "careless_cook",
    "overrides": {
        "cook": {
            "mistake_prob": 0.4,
        },
    },
}

SCENARIOS = [BASELINE, RUSH_HOUR, TWO_COOKS, CARELESS_COOK]
