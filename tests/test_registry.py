from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from credstrategy import registry as registry_module
from credstrategy.errors import ConfigurationError, NoStrategyAvailable
from credstrategy.policy import ComplexityPolicy
from credstrategy.registry import StrategyRegistry, build_strategy, register_implementation
from credstrategy.strategies.bcrypt import BcryptStrategy
from credstrategy.strategies.hash import IteratedHashStrategy
from credstrategy.strategies.legacy import LegacyMD5Strategy

if TYPE_CHECKING:
    from pathlib import Path


def test_requires_strategies() -> None:
    with pytest.raises(ConfigurationError, match="At least one strategy must be supplied"):
        StrategyRegistry({})


def test_rejects_unregistered_default() -> None:
    with pytest.raises(ConfigurationError, match="'argon2'"):
        StrategyRegistry({"legacy": LegacyMD5Strategy()}, default="argon2")


def test_lookup(registry: StrategyRegistry) -> None:
    assert len(registry) == 3
    assert list(registry) == ["legacy", "hash", "bcrypt"]
    assert "hash" in registry
    assert "argon2" not in registry
    assert registry.default_id == "bcrypt"

    strategy = registry.get("hash")
    assert isinstance(strategy, IteratedHashStrategy)
    assert strategy.name == "hash"
    assert registry.get("argon2") is None
    assert registry.get(None) is None


def test_default(registry: StrategyRegistry) -> None:
    default = registry.get_default()
    assert default is registry.get("bcrypt")
    assert default is registry.get_default()


def test_no_default() -> None:
    registry = StrategyRegistry({"legacy": LegacyMD5Strategy()})
    assert registry.default_id is None
    assert registry.get_default() is None


def test_registration_copies_strategy() -> None:
    original = BcryptStrategy(work_factor=4)
    registry = StrategyRegistry({"bcrypt": original, "bcrypt-old": original})

    assert original.name is None
    assert registry.get("bcrypt") is not original
    assert registry.get("bcrypt").name == "bcrypt"
    assert registry.get("bcrypt-old").name == "bcrypt-old"


def test_resolve_falls_back_to_default(
    registry: StrategyRegistry, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.DEBUG, logger="credstrategy"):
        assert registry.resolve("sha1-old") is registry.get_default()
    assert "'sha1-old'" in caplog.text

    assert registry.resolve(None) is registry.get_default()
    assert registry.resolve("legacy") is registry.get("legacy")


def test_resolve_without_default() -> None:
    registry = StrategyRegistry({"legacy": LegacyMD5Strategy()})
    assert registry.resolve("sha1-old") is None


def test_require(registry: StrategyRegistry) -> None:
    assert registry.require("legacy") is registry.get("legacy")
    with pytest.raises(NoStrategyAvailable) as excinfo:
        registry.require("sha1-old")
    assert excinfo.value.strategy_id == "sha1-old"


def test_create_returns_fresh_instances(registry: StrategyRegistry) -> None:
    first = registry.create("hash")
    second = registry.create("hash")

    assert first is not second
    assert first is not registry.get("hash")
    assert first.name == "hash"
    assert first.get_salt() != second.get_salt()
    assert registry.get("hash")._salt is None


def test_create_without_fallback() -> None:
    registry = StrategyRegistry({"legacy": LegacyMD5Strategy()})
    with pytest.raises(NoStrategyAvailable, match="'sha1-old'"):
        registry.create("sha1-old")


def test_from_config() -> None:
    registry = StrategyRegistry.from_config(
        {
            "legacy": {"implementation": "legacy-md5"},
            "hash": {"work_factor": 7, "hash_method": "sha256", "min_digits": 1},
            "custom": {
                "implementation": "credstrategy.strategies.legacy:LegacyMD5Strategy"
            },
            "bcrypt": BcryptStrategy(work_factor=4),
        },
        default="hash",
    )

    assert isinstance(registry.get("legacy"), LegacyMD5Strategy)
    assert isinstance(registry.get("custom"), LegacyMD5Strategy)
    assert registry.get("bcrypt").work_factor == 4

    hash = registry.get("hash")
    assert isinstance(hash, IteratedHashStrategy)
    assert hash.work_factor == 7
    assert hash.policy == ComplexityPolicy(min_digits=1)
    assert registry.get_default() is hash


def test_build_strategy_keeps_class_policy() -> None:
    strategy = build_strategy("legacy", {"implementation": "legacy-md5", "min_length": 4})
    assert strategy.policy == ComplexityPolicy(min_length=4)
    assert LegacyMD5Strategy.default_policy.min_length == 0


@pytest.mark.parametrize(
    "options",
    [
        {"implementation": "scrypt"},
        {"implementation": "credstrategy.missing:Strategy"},
        {"implementation": "collections:OrderedDict"},
        {"implementation": "bcrypt", "rounds": 12},
        {"implementation": "bcrypt", "work_factor": 2},
        {"implementation": "bcrypt", "min_length": -1},
    ],
)
def test_build_strategy_rejects(options: dict[str, object]) -> None:
    with pytest.raises(ConfigurationError):
        build_strategy("broken", options)


def test_register_implementation(monkeypatch: pytest.MonkeyPatch) -> None:
    class PlainStrategy(LegacyMD5Strategy):
        def encode(self, password: str) -> str:
            return password

    monkeypatch.setattr(
        registry_module, "_implementations", dict(registry_module._implementations)
    )
    register_implementation("plain", PlainStrategy)

    registry = StrategyRegistry.from_config({"plain": {}})
    assert isinstance(registry.get("plain"), PlainStrategy)


def test_register_implementation_rejects_non_strategy() -> None:
    with pytest.raises(ConfigurationError):
        register_implementation("dict", dict)  # type: ignore[arg-type]


CONFIG = """\
[credstrategy]
strategies = legacy, bcrypt
default = bcrypt

legacy__implementation = legacy-md5
bcrypt__work_factor = 5
bcrypt__min_length = 10
"""


def test_from_string() -> None:
    registry = StrategyRegistry.from_string(CONFIG)

    assert list(registry) == ["legacy", "bcrypt"]
    bcrypt = registry.get_default()
    assert isinstance(bcrypt, BcryptStrategy)
    assert bcrypt.work_factor == 5
    assert bcrypt.policy.min_length == 10


def test_from_path(tmp_path: Path) -> None:
    path = tmp_path / "auth.ini"
    path.write_text(CONFIG.replace("credstrategy", "auth"), encoding="utf-8")

    registry = StrategyRegistry.from_path(str(path), section="auth")
    assert registry.default_id == "bcrypt"


def test_from_string_special_characters_with_space() -> None:
    registry = StrategyRegistry.from_string(
        '[credstrategy]\nbcrypt__special_characters = " -"\nbcrypt__min_special_characters = 1\n'
    )
    policy = registry.get("bcrypt").policy
    assert policy.special_characters == " -"
    assert policy.validate("correct horse")
    assert not policy.validate("correcthorse")
