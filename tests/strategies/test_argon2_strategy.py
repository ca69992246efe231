import base64

import pytest

from credstrategy.errors import ConfigurationError
from credstrategy.strategies.argon2 import Argon2Strategy


def _strategy(work_factor: int = 1, **kwargs) -> Argon2Strategy:
    return Argon2Strategy(
        work_factor=work_factor, memory_cost=1024, parallelism=1, **kwargs
    )


@pytest.fixture
def strategy() -> Argon2Strategy:
    return _strategy()


def test_encoded_value_is_phc_string(strategy: Argon2Strategy) -> None:
    encoded = strategy.encode("hunter2")
    assert encoded.startswith("$argon2id$v=19$m=1024,t=1,p=1$")
    assert strategy.compare("hunter2", encoded)


def test_salt_is_embedded(strategy: Argon2Strategy) -> None:
    salt = strategy.get_salt()
    assert len(base64.b64decode(salt)) == 16

    encoded = strategy.encode("hunter2")
    assert salt.rstrip("=") in encoded


def test_type_i() -> None:
    strategy = _strategy(type="i")
    encoded = strategy.encode("hunter2")
    assert encoded.startswith("$argon2i$")
    assert strategy.compare("hunter2", encoded)


@pytest.mark.parametrize("encoded", ["", "$argon2id$garbage", "5f4dcc3b5aa765d61d8327deb882cf99"])
def test_compare_malformed(strategy: Argon2Strategy, encoded: str) -> None:
    assert not strategy.compare("password", encoded)


def test_needs_update(strategy: Argon2Strategy) -> None:
    encoded = strategy.encode("hunter2")
    assert not strategy.needs_update(encoded)
    assert _strategy(work_factor=2).needs_update(encoded)
    assert strategy.needs_update("not a hash")


def test_rejects_work_factor() -> None:
    with pytest.raises(ConfigurationError, match="work_factor"):
        _strategy(work_factor=0)
