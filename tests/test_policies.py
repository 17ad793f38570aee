from types import SimpleNamespace

import pytest

from orders.policies import by_arrival, calculate_tip


def _order(remaining, initial=100.0, arrival=0.0, delivered=False):
    return SimpleNamespace(remaining_time=remaining, initial_remaining_time=initial,
                           arrival_time=arrival, is_delivered=delivered)


@pytest.mark.parametrize("remaining, tip", [
    (100.0, 6),
    (90.0, 6),
    (75.1, 6),
    (75.0, 4),
    (60.0, 4),
    (50.0, 2),
    (30.0, 2),
    (25.0, 0),
    (10.0, 0),
    (0.0, 0),
])
def test_tip_bands(remaining, tip):
    assert calculate_tip(_order(remaining)) == tip


def test_tip_without_time_budget_is_zero():
    assert calculate_tip(_order(0.0, initial=0.0)) == 0


def test_by_arrival_skips_delivered_and_keeps_ties_stable():
    a = _order(50, arrival=3.0)
    b = _order(50, arrival=1.0)
    c = _order(50, arrival=1.0)
    d = _order(50, arrival=0.0, delivered=True)
    assert [id(o) for o in by_arrival([a, b, c, d])] == [id(b), id(c), id(a)]
