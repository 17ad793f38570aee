# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# entities.py
# -----------------------------------------------------------------------------
# Purpose:
#   Entity definitions for the order system: IngredientType, Recipe,
#   LevelData and Order (the timed customer request).
#
# Design notes:
#   - Recipes are templates; the scheduler hands each order a deep copy so
#     mutating an active order never touches the level's catalog.
#   - An Order owns its countdown as an "expire" timer on the Env. It is
#     reused through the pool, so setup() resets every field.
#
# Usage:
#   from orders.entities import IngredientType, Recipe, LevelData, Order
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .signals import Signal

class IngredientType(Enum):
    ONION = "Onion"
    TOMATO = "Tomato"
    MUSHROOM = "Mushroom"
    LETTUCE = "Lettuce"

    @classmethod
    def coerce(cls, value) -> "IngredientType":
        """Accept an IngredientType, its value/name, or an object with a .type."""
        if isinstance(value, cls):
            return value
        inner = getattr(value, "type", None)
        if inner is not None:
            return cls.coerce(inner)
        if isinstance(value, str):
            for member in cls:
                if value.lower() in (member.value.lower(), member.name.lower()):
                    return member
        raise ValueError(f"unknown ingredient: {value!r}")

@dataclass
class Recipe:
    name: str
    ingredients: List[IngredientType]
    time_limit: float                # seconds the customer is willing to wait

@dataclass
class LevelData:
    name: str
    orders: List[Recipe] = field(default_factory=list)   # recipe catalog

class Order:
    """One customer order with its own countdown.

    Attributes
    ----------
    recipe : Recipe | None
        Private copy of the recipe this activation was built from.
    arrival_time : float
        Env time of the last setup().
    remaining_time, initial_remaining_time : float
        Countdown state; remaining_time is refreshed by update(now).
    is_delivered : bool
        Set by mark_delivered(); cleared by setup().
    is_expired : bool
        Set when the countdown fires; an expired order can no longer be delivered.
    on_delivered, on_expired : Signal
        Per-instance notifications carrying the order.
    """
    _ids = 0

    def __init__(self):
        Order._ids += 1
        self.uid = Order._ids
        self.recipe: Optional[Recipe] = None
        self.arrival_time: float = 0.0
        self.remaining_time: float = 0.0
        self.initial_remaining_time: float = 0.0
        self.is_delivered: bool = False
        self.is_expired: bool = False
        self.activations: int = 0
        self.on_delivered = Signal("delivered")
        self.on_expired = Signal("expired")
        self._expiry = None

    def __repr__(self):
        name = self.recipe.name if self.recipe else None
        return f"Order(uid={self.uid}, recipe={name!r}, arrival={self.arrival_time:.1f})"

    @property
    def required_ingredients(self) -> List[IngredientType]:
        return list(self.recipe.ingredients) if self.recipe else []

    def setup(self, recipe: Recipe, env):
        self.cancel_timer()
        self.recipe = recipe
        self.arrival_time = env.t
        self.initial_remaining_time = float(recipe.time_limit)
        self.remaining_time = self.initial_remaining_time
        self.is_delivered = False
        self.is_expired = False
        self.activations += 1
        self._expiry = env.call_at(env.t + self.initial_remaining_time, self, "expire")

    def update(self, now: float):
        elapsed = now - self.arrival_time
        self.remaining_time = min(self.initial_remaining_time, max(self.initial_remaining_time - elapsed, 0.0))

    def cancel_timer(self):
        if self._expiry is not None:
            self._expiry.cancel()
            self._expiry = None

    def mark_delivered(self):
        if self.is_delivered or self.is_expired:
            return
        self.cancel_timer()
        self.is_delivered = True
        self.on_delivered.emit(self)

    def handle_timer(self, env, kind: str):
        """Callback invoked by the router when the countdown reaches zero."""
        if kind != "expire" or self.is_delivered:
            return
        self._expiry = None
        self.remaining_time = 0.0
        self.is_expired = True
        self.on_expired.emit(self)
