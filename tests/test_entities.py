import pytest

from orders.clock import Env
from orders.entities import IngredientType as I, Order, Recipe
from orders.signals import FanoutSink, OrderEventSink, Signal


class Router:
    def on_timer(self, env, target, kind):
        target.handle_timer(env, kind=kind)


def test_ingredient_coercion():
    assert I.coerce("Tomato") is I.TOMATO
    assert I.coerce("LETTUCE") is I.LETTUCE
    assert I.coerce(I.ONION) is I.ONION
    with pytest.raises(ValueError):
        I.coerce("Cheese")


def test_setup_resets_countdown_and_flags():
    env = Env(Router())
    order = Order()
    order.setup(Recipe("s", [I.LETTUCE, I.TOMATO], 40.0), env)
    env.run_until(30)
    order.update(env.t)
    assert order.remaining_time == 10.0
    order.mark_delivered()
    assert order.is_delivered

    order.setup(Recipe("soup", [I.ONION] * 3, 60.0), env)
    assert not order.is_delivered
    assert order.arrival_time == 30.0
    assert order.remaining_time == order.initial_remaining_time == 60.0
    assert order.required_ingredients == [I.ONION] * 3
    assert order.activations == 2


def test_countdown_expires_once_and_not_after_delivery():
    env = Env(Router())
    expired = []
    order = Order()
    order.on_expired.subscribe(expired.append)
    order.setup(Recipe("s", [I.LETTUCE], 10.0), env)
    env.run_until(20)
    assert expired == [order] and order.remaining_time == 0.0
    assert order.is_expired
    delivered = []
    order.on_delivered.subscribe(delivered.append)
    order.mark_delivered()
    assert delivered == [] and not order.is_delivered

    order.setup(Recipe("s", [I.LETTUCE], 10.0), env)
    assert not order.is_expired
    order.mark_delivered()
    env.run_until(100)
    assert expired == [order]


def test_subscription_revoke_detaches_handler():
    sig = Signal("x")
    got = []
    sub = sig.subscribe(got.append)
    sig.emit(1)
    sub.revoke()
    sub.revoke()
    sig.emit(2)
    assert got == [1] and not sub.active and len(sig) == 0


def test_fanout_sink_forwards_to_all():
    class Count(OrderEventSink):
        def __init__(self):
            self.n = 0

        def delivered(self, order, tip):
            self.n += tip

    a, b = Count(), Count()
    sink = FanoutSink(a, b)
    sink.delivered(None, 4)
    sink.spawned(None)
    assert a.n == b.n == 4


def test_fanout_sink_forwards_cleared_batches():
    class Dropped(OrderEventSink):
        def __init__(self):
            self.batches = []

        def cleared(self, orders):
            self.batches.append(list(orders))

    a, b = Dropped(), Dropped()
    orders = [Order(), Order()]
    FanoutSink(a, b, OrderEventSink()).cleared(orders)
    assert a.batches == b.batches == [orders]
