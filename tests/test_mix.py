import asyncio

import pytest

from promix import Mix, OperationError, QuorumError, Result
from fakes import later


def test_then_chains_sync_and_async_steps() -> None:
    async def run_flow():
        return await Mix.start(2).then(lambda v: v + 1).then(lambda v: later(v * 10))

    assert asyncio.run(run_flow()) == 30


def test_then_failure_short_circuit() -> None:
    calls = []

    def failing(_):
        raise RuntimeError("error")

    flow = Mix.start("start").then(failing).then(lambda v: calls.append(v))
    with pytest.raises(RuntimeError, match="error"):
        asyncio.run(flow.run())
    assert calls == []


def test_map() -> None:
    assert asyncio.run(Mix.start(2).map(lambda v: v * 2).run()) == 4


def test_recover() -> None:
    flow = Mix.fail(ValueError("boom")).recover(lambda exc: f"recovered from {exc}")
    assert asyncio.run(flow.run()) == "recovered from boom"


def test_fail_wraps_non_exception_payload() -> None:
    with pytest.raises(OperationError) as excinfo:
        asyncio.run(Mix.fail("nope").run())
    assert excinfo.value.payload == "nope"


def test_of_adopts_awaitables() -> None:
    assert asyncio.run(Mix.of(later("adopted")).run()) == "adopted"
    mix = Mix.start(1)
    assert Mix.of(mix) is mix


def test_chain_runs_once_when_awaited_twice() -> None:
    calls = 0

    async def expensive():
        nonlocal calls
        calls += 1
        return calls

    async def run_flow():
        mix = Mix(expensive)
        return await mix, await mix

    assert asyncio.run(run_flow()) == (1, 1)
    assert calls == 1


def test_settle_never_raises() -> None:
    async def run_flow():
        return await Mix.start("ok").settle(), await Mix.fail(KeyError("k")).settle()

    ok, failed = asyncio.run(run_flow())
    assert isinstance(ok, Result)
    assert ok.control.kind == "resolved"
    assert ok.unwrap() == "ok"
    assert failed.failed
    assert failed.control.kind == "rejected"
    with pytest.raises(KeyError):
        failed.unwrap()


def test_unknown_attribute() -> None:
    with pytest.raises(AttributeError):
        Mix.start(1).does_not_exist


class TestChainedAccumulators:
    def test_combine_uses_value_as_init(self) -> None:
        flow = Mix.start({"user": {"id": "dumbass"}}).combine(
            {"greeting": lambda acc: f"hello {acc['user']['id']}"}
        )
        assert asyncio.run(flow.run()) == {"user": {"id": "dumbass"}, "greeting": "hello dumbass"}

    def test_aggregate_and_merge(self) -> None:
        async def run_flow():
            aggregated = await Mix.start({"a": 1}).aggregate({"b": later(2)})
            merged = await Mix.start([1]).merge([[2, 3], 4])
            return aggregated, merged

        assert asyncio.run(run_flow()) == ({"a": 1, "b": 2}, [1, 2, 3, 4])

    def test_reduce_and_f_reduce(self) -> None:
        async def run_flow():
            reduced = await Mix.start(3).reduce([lambda n: n + 1, lambda n: later(n * 2)])
            callback = await Mix.start(3).f_reduce([lambda n, done: done(None, n - 1)])
            return reduced, callback

        assert asyncio.run(run_flow()) == (8, 2)

    def test_f_combine(self) -> None:
        flow = Mix.start(None).f_combine({"a": lambda acc, done: done(None, 1)})
        assert asyncio.run(flow.run()) == {"a": 1}


class TestChainedLogical:
    def test_or_keeps_truthy_value(self) -> None:
        flow = Mix.start("Andy").or_([lambda: later("Sandy"), lambda: later("Wendy")])
        assert asyncio.run(flow.run()) == "Andy"

    def test_or_falls_through_empty_value(self) -> None:
        flow = Mix.start(None).or_([lambda: later(None), lambda: later("Wendy")])
        assert asyncio.run(flow.run()) == "Wendy"

    def test_or_chains(self) -> None:
        async def run_flow():
            first = await Mix(lambda: later("Andy")).or_(
                [lambda: later("Wendy")], lambda res: len(res) > 4
            )
            second = await Mix(lambda: later("Andy")).or_(
                [lambda: later("Wendy")], lambda res: len(res) > 3
            )
            return first, second

        assert asyncio.run(run_flow()) == ("Wendy", "Andy")

    def test_and_prepends_value(self) -> None:
        flow = Mix.start("Andy").and_([lambda: "Sandy"])
        assert asyncio.run(flow.run()) == ["Andy", "Sandy"]

    def test_xor_rejects_two_qualifiers(self) -> None:
        with pytest.raises(QuorumError):
            asyncio.run(Mix.start("Andy").xor([lambda: "Sandy"]).run())
