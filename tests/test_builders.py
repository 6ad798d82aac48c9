import asyncio
import logging
import time

import pytest

import conveyor
from conveyor.kernel import Deferred, Immediate, InvalidActionError


def test_as_action_binds_arguments() -> None:
    greet = conveyor.as_action(lambda greeting, name: f"{greeting} {name}", "Hello", name="Peter")
    assert greet() == "Hello Peter"
    assert greet("ignored") == "Hello Peter"


def test_as_action_rejects_non_callable() -> None:
    with pytest.raises(InvalidActionError):
        conveyor.as_action("not callable")


def test_tap_passes_input_through() -> None:
    seen = []
    action = conveyor.tap(seen.append)
    assert action(3) == 3
    assert seen == [3]


def test_tap_without_input_calls_fn_with_none() -> None:
    seen = []
    assert conveyor.tap(lambda x: seen.append(x))() is None
    assert conveyor.tap(lambda x: x)() is None
    assert seen == [None]


def test_always_and_ident() -> None:
    assert conveyor.always([1])() == [1]
    assert conveyor.always([1])("anything") == [1]
    assert conveyor.ident()(7) == 7
    assert conveyor.ident()() is None


def test_log_and_say(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="conveyor.actions"):
        assert conveyor.log({"a": 1}) == {"a": 1}
        assert conveyor.say("step %s done", 2)("value") == "value"

    messages = [r.getMessage() for r in caplog.records if r.name == "conveyor.actions"]
    assert messages == ["{'a': 1}", "step 2 done"]


def test_sleep_settles_with_its_input() -> None:
    async def run():
        started = time.perf_counter()
        result = conveyor.sleep(20)("payload")
        assert isinstance(result, Deferred)
        value = await result
        return value, (time.perf_counter() - started) * 1000

    value, elapsed = asyncio.run(run())
    assert value == "payload"
    assert elapsed >= 15


def test_throw_raises_given_error() -> None:
    error = ValueError("boom")
    with pytest.raises(ValueError, match="boom"):
        conveyor.throw(error)()
    with pytest.raises(KeyError):
        conveyor.throw(KeyError)(1)
    with pytest.raises(RuntimeError, match="bad"):
        conveyor.throw("bad")()


def test_return_wraps_value() -> None:
    result = conveyor.return_(10)
    assert result == Immediate(10)
    assert asyncio.run(_await(result)) == 10
    assert conveyor.resolved is conveyor.return_


def test_do_nothing() -> None:
    assert conveyor.do_nothing() is None
    assert conveyor.none("x") is None


async def _await(awaitable):
    return await awaitable
