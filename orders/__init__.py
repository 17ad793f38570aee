"""
orders package initializer.

This package contains the order lifecycle and matching engine for the
kitchen game: the discrete-event clock, order entities and pool, the spawn
scheduler, plate matching and tip policy, the coordinator that ties them
together, plus the shift simulation and metrics used by experiments/.
"""
__all__ = [
    "clock", "signals", "entities", "pool", "policies", "config",
    "scheduler", "matching", "coordinator", "metrics", "arrivals", "simulation",
]
