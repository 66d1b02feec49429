import asyncio

import pytest

from pinexgw.expirator import Expirator


def make():
    fired = []
    exp = Expirator(1.0, lambda key, info: fired.append((key, info)))
    return exp, fired


def test_key_expires_after_its_periods():
    exp, fired = make()
    assert exp.add(7, 3.0, "payload") is True
    for _ in range(3):
        exp.tick()
    assert fired == []
    exp.tick()
    assert fired == [(7, "payload")]
    assert 7 not in exp
    assert len(exp) == 0


def test_zero_expiration_fires_on_next_tick():
    exp, fired = make()
    exp.add("k", 0.0, 1)
    exp.tick()
    assert fired == [("k", 1)]


def test_remove_prevents_expiry():
    exp, fired = make()
    exp.add(1, 2.0, "a")
    assert exp.remove(1) is True
    assert exp.remove(1) is False
    for _ in range(5):
        exp.tick()
    assert fired == []


def test_get_info():
    exp, _ = make()
    exp.add(5, 10.0, {"body": "x"})
    assert exp.get_info(5) == {"body": "x"}
    assert exp.get_info(6) is None


def test_duplicate_key_is_ignored():
    exp, fired = make()
    assert exp.add(1, 1.0, "first") is True
    assert exp.add(1, 0.0, "second") is False
    assert exp.get_info(1) == "first"
    exp.tick()
    exp.tick()
    assert fired == [(1, "first")]


def test_several_keys_same_slot():
    exp, fired = make()
    exp.add(1, 1.0, "a")
    exp.add(2, 1.0, "b")
    exp.tick()
    exp.tick()
    assert sorted(fired) == [(1, "a"), (2, "b")]


def test_slot_is_relative_to_current_index():
    exp, fired = make()
    exp.tick()
    exp.tick()
    exp.add("late", 1.0)
    exp.tick()
    assert fired == []
    exp.tick()
    assert fired == [("late", None)]


def test_non_positive_period_rejected():
    with pytest.raises(ValueError):
        Expirator(0.0, lambda k, i: None)


@pytest.mark.asyncio
async def test_start_runs_ticks():
    fired = []
    exp = Expirator(0.001, lambda key, info: fired.append(key))
    exp.start()
    exp.add(42, 0.005, None)
    for _ in range(200):
        if fired:
            break
        await asyncio.sleep(0.005)
    exp.stop()
    assert fired == [42]