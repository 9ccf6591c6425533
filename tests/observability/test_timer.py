#!filepath: tests/observability/test_timer.py

import time

from censored.observability.timer import Timer


def test_timer_basic():
    t = Timer(enabled=True)
    t.start("task")
    time.sleep(0.01)
    elapsed = t.end("task")

    assert elapsed > 0
    assert isinstance(elapsed, float)


def test_timer_measure():
    t = Timer()
    with t.measure("fit"):
        time.sleep(0.01)

    assert t.last("fit") > 0
    assert t.last("other") == 0.0


def test_timer_disabled():
    t = Timer(enabled=False)
    t.start("task")
    elapsed = t.end("task")

    assert elapsed == 0.0
