import hashlib

import pytest

from credstrategy.errors import ConfigurationError
from credstrategy.strategies.hash import IteratedHashStrategy


def _iterated(salt: str, secret: str, work_factor: int, name: str = "sha1") -> str:
    value = f"{salt}###{secret}"
    for _ in range(work_factor):
        value = hashlib.new(name, value.encode("utf-8")).hexdigest()
    return value


@pytest.mark.parametrize("work_factor", [1, 3, 100])
def test_encode_iterates_digest(work_factor: int) -> None:
    strategy = IteratedHashStrategy(work_factor=work_factor)
    strategy.set_salt("salt")
    assert strategy.encode("secret") == _iterated("salt", "secret", work_factor)


def test_hash_method_by_name() -> None:
    strategy = IteratedHashStrategy(work_factor=2, hash_method="sha256")
    strategy.set_salt("abc")
    assert strategy.encode("pw") == _iterated("abc", "pw", 2, "sha256")


def test_hash_method_constructor() -> None:
    strategy = IteratedHashStrategy(work_factor=2, hash_method=hashlib.sha512)
    strategy.set_salt("abc")
    encoded = strategy.encode("pw")
    assert encoded == _iterated("abc", "pw", 2, "sha512")
    assert len(encoded) == 128


def test_salt_matches_digest_size() -> None:
    assert len(IteratedHashStrategy().get_salt()) == 40
    assert len(IteratedHashStrategy(hash_method="sha256").get_salt()) == 64


def test_salt_is_hex() -> None:
    salt = IteratedHashStrategy().get_salt()
    int(salt, 16)


def test_encoding_depends_on_salt() -> None:
    strategy = IteratedHashStrategy(work_factor=2)
    strategy.set_salt("one")
    first = strategy.encode("pw")
    strategy.set_salt("two")
    assert strategy.encode("pw") != first


def test_default_work_factor() -> None:
    assert IteratedHashStrategy().work_factor == IteratedHashStrategy.DEFAULT_WORK_FACTOR


@pytest.mark.parametrize("work_factor", [0, -1])
def test_rejects_work_factor(work_factor: int) -> None:
    with pytest.raises(ConfigurationError, match="work_factor"):
        IteratedHashStrategy(work_factor=work_factor)


@pytest.mark.parametrize("hash_method", ["no-such-digest", "shake_128"])
def test_rejects_hash_method(hash_method: str) -> None:
    with pytest.raises(ConfigurationError):
        IteratedHashStrategy(hash_method=hash_method)
