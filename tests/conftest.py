import random

import pytest

from orders.config import OrderSettings
from orders.coordinator import OrderCoordinator
from orders.entities import IngredientType as I, LevelData, Recipe
from orders.signals import OrderEventSink


class RecordingSink(OrderEventSink):
    def __init__(self):
        self.events = []

    def spawned(self, order):
        self.events.append(("spawned", order))

    def expired(self, order):
        self.events.append(("expired", order))

    def delivered(self, order, tip):
        self.events.append(("delivered", order, tip))

    def cleared(self, orders):
        self.events.append(("cleared", list(orders)))

    def of(self, kind):
        return [e for e in self.events if e[0] == kind]


class CountingLayout:
    def __init__(self):
        self.regroups = 0

    def request_regroup(self):
        self.regroups += 1


@pytest.fixture
def salad_level():
    return LevelData("salad_bar", [Recipe("salad", [I.LETTUCE, I.TOMATO], 100.0)])


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def layout():
    return CountingLayout()


@pytest.fixture
def make_coordinator(sink, layout):
    def _make(interval=5.0, cap=1, seed=7):
        settings = OrderSettings(interval_between_drops=interval, max_concurrent_orders=cap)
        return OrderCoordinator(settings, sink=sink, layout=layout, rng=random.Random(seed))
    return _make
