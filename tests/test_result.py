import asyncio

from conveyor.kernel import Deferred, Immediate, classify, is_pending


def test_classify_none_is_no_result() -> None:
    assert classify(None) is None


def test_classify_plain_value() -> None:
    result = classify([1])
    assert isinstance(result, Immediate)
    assert result.value == [1]
    assert result.kind == "immediate"


def test_classify_falsy_values_are_results() -> None:
    assert classify(0) == Immediate(0)
    assert classify("") == Immediate("")
    assert classify(False) == Immediate(False)


def test_classify_awaitable() -> None:
    async def run():
        coro = asyncio.sleep(0, result="done")
        result = classify(coro)
        assert isinstance(result, Deferred)
        assert result.kind == "deferred"
        return await result

    assert asyncio.run(run()) == "done"


def test_classify_keeps_action_results() -> None:
    immediate = Immediate(3)
    assert classify(immediate) is immediate


def test_immediate_can_be_awaited_repeatedly() -> None:
    immediate = Immediate("x")

    async def run():
        return [await immediate, await immediate]

    assert asyncio.run(run()) == ["x", "x"]
    assert is_pending(immediate)
    assert not is_pending("x")
