import pytest

from orders.clock import Env, Event


class Recorder:
    def __init__(self):
        self.calls = []

    def on_timer(self, env, target, kind):
        self.calls.append((env.t, kind))

    def on_arrival(self, env, **data):
        self.calls.append((env.t, "arrival"))


def test_events_fire_in_time_then_schedule_order():
    rec = Recorder()
    env = Env(rec)
    env.call_at(2.0, None, "b")
    env.call_at(1.0, None, "a")
    env.call_at(2.0, None, "c")
    env.schedule(Event(1.5, "arrival", {}))
    env.run_until(10)
    assert rec.calls == [(1.0, "a"), (1.5, "arrival"), (2.0, "b"), (2.0, "c")]
    assert env.t == 10


def test_cancelled_events_are_skipped():
    rec = Recorder()
    env = Env(rec)
    ev = env.call_at(1.0, None, "x")
    env.call_at(2.0, None, "y")
    ev.cancel()
    env.run_until(5)
    assert rec.calls == [(2.0, "y")]


def test_run_until_leaves_later_events_pending():
    rec = Recorder()
    env = Env(rec)
    env.call_at(3.0, None, "late")
    env.run_until(2.0)
    assert rec.calls == []
    assert env.peek().t == 3.0
    env.run_until(3.0)
    assert rec.calls == [(3.0, "late")]


def test_cannot_schedule_in_the_past():
    env = Env(Recorder())
    env.run_until(5)
    with pytest.raises(ValueError):
        env.call_at(1.0, None, "x")
