"""Value utilities registered on Mix."""

from __future__ import annotations

import asyncio
import logging
import time

import pytest

from promix import CheckError, Mix
from fakes import later


class TestCheck:
    def test_failed_check(self):
        with pytest.raises(CheckError, match="Unmet check condition."):
            asyncio.run(Mix.start(5).check(lambda n: n > 6).run())

    def test_passed_check(self):
        assert asyncio.run(Mix.start(7).check(lambda n: n > 6).run()) == 7

    def test_custom_error(self):
        with pytest.raises(LookupError):
            asyncio.run(Mix.start(5).check(lambda n: n > 6, LookupError("too small")).run())

    def test_exists(self):
        with pytest.raises(CheckError, match="Downstream is undefined."):
            asyncio.run(Mix.start(None).exists().run())
        assert asyncio.run(Mix.start("here").exists().run()) == "here"


class TestRevive:
    def test_revive_with_value(self):
        assert asyncio.run(Mix.fail(ValueError(5)).revive(7).run()) == 7

    def test_revive_with_error(self):
        error = ValueError("kept")
        assert asyncio.run(Mix.fail(error).revive().run()) is error

    def test_check_or_revive(self):
        assert asyncio.run(Mix.start(5).check_or_revive(lambda n: n > 6, 7).run()) == 7
        assert asyncio.run(Mix.start(8).check_or_revive(lambda n: n > 6, 7).run()) == 8


class TestClean:
    def test_clean_mapping(self):
        flow = Mix.start(
            {"peter": {}, "pluto": None, "paul": "", "stacy": [], "gwen": "cool", "zero": 0}
        ).clean()
        assert asyncio.run(flow.run()) == {"gwen": "cool", "zero": 0}

    def test_clean_list(self):
        assert asyncio.run(Mix.start([None, "a", [], (), "b"]).clean().run()) == ["a", "b"]

    def test_clean_passes_scalars_through(self):
        assert asyncio.run(Mix.start("String").clean().run()) == "String"


def test_map_items():
    flow = Mix.start(["Annie", "Lawrence", "Silvio"]).map_items(lambda name: later(len(name)))
    assert asyncio.run(flow.run()) == [5, 8, 6]


def test_map_items_on_mapping():
    flow = Mix.start({"a": 1, "b": 2}).map_items(lambda n: n + 1)
    assert asyncio.run(flow.run()) == {"a": 2, "b": 3}


def test_sleep_delays_and_keeps_value():
    start = time.perf_counter()
    assert asyncio.run(Mix.start("Jake").sleep(0.05).run()) == "Jake"
    assert time.perf_counter() - start >= 0.05


def test_log(caplog):
    caplog.set_level(logging.INFO, logger="promix")
    assert asyncio.run(Mix.start([1, 2]).log("Lengths:").run()) == [1, 2]
    assert "Lengths: [1, 2]" in caplog.text


def test_loop():
    flow = Mix.start(1).loop(lambda value, index: later(value * 2), lambda value, index: value > 20)
    assert asyncio.run(flow.run()) == 32


def test_loop_receives_index():
    seen = []

    def iteration(value, index):
        seen.append(index)
        return value

    asyncio.run(Mix.start("x").loop(iteration, lambda value, index: index == 2).run())
    assert seen == [0, 1, 2]


def test_when():
    assert asyncio.run(Mix.start(3).when(lambda n: n > 2, lambda n: n * 10).run()) == 30
    assert asyncio.run(Mix.start(1).when(lambda n: n > 2, lambda n: n * 10).run()) == 1


def test_if_else():
    flow = Mix.start(1).if_else(lambda n: n > 2, lambda n: "big", lambda n: later("small"))
    assert asyncio.run(flow.run()) == "small"


class TestPick:
    def test_pick_mapping(self):
        flow = Mix.start({"a": 1, "b": 2, "c": 3}).pick(["a", "c", "z"])
        assert asyncio.run(flow.run()) == {"a": 1, "c": 3, "z": None}

    def test_pick_single_key(self):
        assert asyncio.run(Mix.start({"a": 1, "b": 2}).just("b").run()) == {"b": 2}

    def test_pick_list(self):
        assert asyncio.run(Mix.start(["x", "y", "z"]).pick([2, 0, 5]).run()) == ["z", "x", None]

    def test_pick_scalar_fails(self):
        with pytest.raises(CheckError, match="Cannot read properties"):
            asyncio.run(Mix.start(42).pick("a").run())

    def test_pick_list_with_non_index_key_fails(self):
        with pytest.raises(CheckError, match="Cannot read index 'a'"):
            asyncio.run(Mix.start([1, 2]).pick("a").run())


class TestAside:
    def test_aside_keeps_value(self):
        side = []
        flow = Mix.start("Jake").aside(lambda value: later(side.append(value)))
        assert asyncio.run(flow.run()) == "Jake"
        assert side == ["Jake"]

    def test_aside_error_propagates(self):
        async def broken(value):
            raise RuntimeError("Wolly")

        with pytest.raises(RuntimeError, match="Wolly"):
            asyncio.run(Mix.start("Jake").aside(broken).run())

    def test_aside_ignores_errors_when_asked(self, caplog):
        async def broken(value):
            raise RuntimeError("Wolly")

        flow = Mix.start("Jake").aside(broken, ignore_errors=True)
        assert asyncio.run(flow.run()) == "Jake"
        assert "Wolly" in caplog.text
