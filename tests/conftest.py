from __future__ import annotations

import pytest

from credstrategy.manager import CredentialManager
from credstrategy.registry import StrategyRegistry
from credstrategy.strategies.bcrypt import BcryptStrategy
from credstrategy.strategies.hash import IteratedHashStrategy
from credstrategy.strategies.legacy import LegacyMD5Strategy
from tests.utils import RecordFactory, UserRecord


@pytest.fixture
def registry() -> StrategyRegistry:
    return StrategyRegistry(
        {
            "legacy": LegacyMD5Strategy(),
            "hash": IteratedHashStrategy(work_factor=5),
            "bcrypt": BcryptStrategy(work_factor=4),
        },
        default="bcrypt",
    )


@pytest.fixture
def manager(registry: StrategyRegistry) -> CredentialManager:
    return CredentialManager(registry)


@pytest.fixture
def make_record(registry: StrategyRegistry) -> RecordFactory:
    """Build a record whose password was encoded with a registered strategy."""

    def factory(password: str, strategy_id: str, **kwargs: object) -> UserRecord:
        strategy = registry.create(strategy_id)
        salt = strategy.get_salt()
        return UserRecord(
            password=strategy.encode(password),
            salt=salt,
            password_strategy=strategy_id,
            **kwargs,  # type: ignore[arg-type]
        )

    return factory
