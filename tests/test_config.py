import pytest
from pydantic import ValidationError

import conveyor
from conveyor import ConfigurationError, ConveyorConfig


def test_defaults() -> None:
    config = ConveyorConfig()
    assert config.action_interval == 2
    assert config.buffer_interval == 1
    assert config.capacity == 6
    assert config.error is None
    assert config.trace is False


def test_factory_accepts_keyword_options() -> None:
    io = conveyor.conveyor(action_interval=5, buffer_interval=3, name="io")
    assert io.config.action_interval == 5
    assert io.config.buffer_interval == 3
    assert "io" in repr(io)


def test_factory_accepts_a_mapping() -> None:
    io = conveyor.conveyor({"action_interval": 1, "buffer_interval": 1})
    assert io.config.action_interval == 1


def test_factory_overrides_a_config() -> None:
    base = ConveyorConfig(action_interval=4)
    io = conveyor.conveyor(base, trace=True)
    assert io.config.action_interval == 4
    assert io.config.trace is True
    assert io.trace.enabled is True


@pytest.mark.parametrize(
    "options",
    [
        {"action_interval": 0},
        {"buffer_interval": -1},
        {"capacity": 0},
        {"error": "not callable"},
        {"actionInterval": 2},
    ],
)
def test_invalid_options(options: dict) -> None:
    with pytest.raises(ConfigurationError) as info:
        conveyor.conveyor(**options)
    assert isinstance(info.value.__cause__, ValidationError)
    assert info.value.options == options


def test_config_is_frozen() -> None:
    config = ConveyorConfig()
    with pytest.raises(ValidationError):
        config.capacity = 10
