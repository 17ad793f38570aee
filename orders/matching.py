# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# matching.py
# -----------------------------------------------------------------------------
# Purpose:
#   MatchingEngine: match a submitted plate against the live orders, oldest
#   arrival first, and deliver at most one order per plate.
#
# Design notes:
#   - A candidate matches when it needs the same number of ingredients and
#     every submitted ingredient type appears in the recipe (plain set
#     difference). Duplicate counts are not compared beyond the length check.
#   - Delivery itself (revoke, mark delivered, drop from live, release) is the
#     coordinator's retire callback; the engine only decides and reports.
#
# Usage:
#   engine = MatchingEngine(live, retire, sink, layout)
#   result = engine.submit_plate([IngredientType.TOMATO, IngredientType.LETTUCE])
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
from typing import Callable, Iterable, List, Optional, Tuple

from .entities import IngredientType, Order
from .policies import by_arrival, calculate_tip
from .signals import NullLayout, OrderEventSink

logger = logging.getLogger(__name__)

class MatchingEngine:
    def __init__(self, live: List[Order], retire: Callable[[Order], None],
                 sink: Optional[OrderEventSink] = None, layout=None):
        self.live = live
        self.retire = retire
        self.sink = sink if sink is not None else OrderEventSink()
        self.layout = layout if layout is not None else NullLayout()

    @staticmethod
    def matches(plate: List[IngredientType], order: Order) -> bool:
        required = order.required_ingredients
        if len(plate) != len(required):
            return False
        return not (set(plate) - set(required))

    def find_match(self, plate: List[IngredientType]) -> Optional[Order]:
        for i, order in enumerate(by_arrival(self.live)):
            if self.matches(plate, order):
                logger.debug(f"[MatchingEngine] order#{i} {order!r} MATCH the plate")
                return order
            logger.debug(f"[MatchingEngine] order#{i} {order!r} doesn't match plate")
        return None

    def submit_plate(self, ingredients: Optional[Iterable]) -> Optional[Tuple[Order, int]]:
        if not ingredients:
            return None
        try:
            plate = [IngredientType.coerce(x) for x in ingredients]
        except ValueError as e:
            logger.warning(f"[MatchingEngine] rejecting plate: {e}")
            return None
        order = self.find_match(plate)
        if order is None:
            return None
        return order, self.deliver(order)

    def deliver(self, order: Order) -> int:
        tip = calculate_tip(order)
        self.retire(order)
        self.sink.delivered(order, tip)
        self.layout.request_regroup()
        return tip
