from __future__ import annotations

import dataclasses
import functools
import importlib
from typing import TYPE_CHECKING, Optional, Union

from credstrategy import config as _config
from credstrategy._logging import logger
from credstrategy.errors import ConfigurationError, NoStrategyAvailable
from credstrategy.policy import ComplexityPolicy
from credstrategy.strategies.abc import PasswordStrategy
from credstrategy.strategies.argon2 import Argon2Strategy
from credstrategy.strategies.bcrypt import BcryptStrategy
from credstrategy.strategies.hash import IteratedHashStrategy
from credstrategy.strategies.legacy import LegacyMD5Strategy

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from typing_extensions import Self

__all__ = [
    "StrategyRegistry",
    "build_strategy",
    "load_implementation",
    "register_implementation",
]

Implementation = Union[str, "type[PasswordStrategy]"]
StrategyConfig = Union[PasswordStrategy, "Mapping[str, object]"]

_POLICY_FIELDS = frozenset(field.name for field in dataclasses.fields(ComplexityPolicy))

_implementations: dict[str, type[PasswordStrategy]] = {
    "legacy-md5": LegacyMD5Strategy,
    "hash": IteratedHashStrategy,
    "bcrypt": BcryptStrategy,
    "argon2": Argon2Strategy,
}


def _check_strategy_class(value: object, source: object) -> type[PasswordStrategy]:
    if not (isinstance(value, type) and issubclass(value, PasswordStrategy)):
        msg = f"{source!r} is not a PasswordStrategy subclass"
        raise ConfigurationError(msg)
    return value


def register_implementation(name: str, cls: type[PasswordStrategy]) -> None:
    """Make ``cls`` available to configuration under ``name``."""
    _implementations[name] = _check_strategy_class(cls, cls)


def load_implementation(implementation: Implementation) -> type[PasswordStrategy]:
    """
    Resolve a strategy class from a class object, a registered name,
    or a ``"package.module:ClassName"`` path.
    """
    if isinstance(implementation, type):
        return _check_strategy_class(implementation, implementation)
    if implementation in _implementations:
        return _implementations[implementation]
    if ":" in implementation:
        module_name, _, attr = implementation.partition(":")
        try:
            value = getattr(importlib.import_module(module_name), attr)
        except (ImportError, AttributeError) as exc:
            msg = f"can't import strategy implementation {implementation!r}"
            raise ConfigurationError(msg) from exc
        return _check_strategy_class(value, implementation)

    msg = f"unknown strategy implementation: {implementation!r}"
    raise ConfigurationError(msg)


def build_strategy(strategy_id: str, options: Mapping[str, object]) -> PasswordStrategy:
    """
    Instantiate a strategy from configuration options.
    Complexity fields go into the strategy's policy,
    everything else is passed to its constructor.
    """
    kwargs = dict(options)
    cls = load_implementation(kwargs.pop("implementation", strategy_id))  # type: ignore[arg-type]
    policy_changes = {key: kwargs.pop(key) for key in list(kwargs) if key in _POLICY_FIELDS}
    try:
        policy = dataclasses.replace(cls.default_policy, **policy_changes)
        return cls(policy=policy, **kwargs)  # type: ignore[call-arg]
    except TypeError as exc:
        msg = f"invalid options for strategy {strategy_id!r}: {exc}"
        raise ConfigurationError(msg) from exc


class StrategyRegistry:
    """
    Maps strategy ids to configured strategies, with one optional default.

    Registered strategies act as prototypes: use :meth:`create` to get an
    instance that can safely be given a salt & username for a single credential.
    """

    def __init__(
        self,
        strategies: Mapping[str, PasswordStrategy],
        default: Optional[str] = None,
    ) -> None:
        self._strategies: dict[str, PasswordStrategy] = {}
        for name, strategy in strategies.items():
            strategy = strategy.clone()
            strategy.name = name
            self._strategies[name] = strategy
        self._default_id = default

        self._validate_init()

    @classmethod
    def from_config(
        cls,
        strategies: Mapping[str, StrategyConfig],
        default: Optional[str] = None,
    ) -> Self:
        built = {
            name: value
            if isinstance(value, PasswordStrategy)
            else build_strategy(name, value)
            for name, value in strategies.items()
        }
        return cls(built, default=default)

    @classmethod
    def from_string(cls, source: str, section: str = _config.DEFAULT_SECTION) -> Self:
        config = _config.load_string(source, section=section)
        return cls.from_config(config.strategies, default=config.default)

    @classmethod
    def from_path(
        cls,
        path: str,
        section: str = _config.DEFAULT_SECTION,
        encoding: str = "utf-8",
    ) -> Self:
        config = _config.load_path(path, section=section, encoding=encoding)
        return cls.from_config(config.strategies, default=config.default)

    def _validate_init(self) -> None:
        if not self._strategies:
            raise ConfigurationError("At least one strategy must be supplied")
        if self._default_id is not None and self._default_id not in self._strategies:
            msg = f"default strategy {self._default_id!r} is not registered"
            raise ConfigurationError(msg)

    def __contains__(self, strategy_id: object) -> bool:
        return strategy_id in self._strategies

    def __iter__(self) -> Iterator[str]:
        return iter(self._strategies)

    def __len__(self) -> int:
        return len(self._strategies)

    def __repr__(self) -> str:
        return f"<StrategyRegistry strategies={list(self._strategies)!r} default={self._default_id!r}>"

    @property
    def default_id(self) -> Optional[str]:
        return self._default_id

    def get(self, strategy_id: Optional[str]) -> Optional[PasswordStrategy]:
        if strategy_id is None:
            return None
        return self._strategies.get(strategy_id)

    def get_default(self) -> Optional[PasswordStrategy]:
        return self._default_strategy

    def resolve(self, strategy_id: Optional[str]) -> Optional[PasswordStrategy]:
        """
        Strategy for ``strategy_id``, falling back to the default strategy.
        An unknown id is therefore indistinguishable from an unset one,
        use :meth:`require` when that matters.
        """
        strategy = self.get(strategy_id)
        if strategy is None:
            logger.debug(
                "strategy %r not registered, falling back to default %r",
                strategy_id,
                self._default_id,
            )
            strategy = self.get_default()
        return strategy

    def require(self, strategy_id: str) -> PasswordStrategy:
        """Strategy registered under ``strategy_id``, without falling back."""
        strategy = self.get(strategy_id)
        if strategy is None:
            raise NoStrategyAvailable(strategy_id)
        return strategy

    def create(self, strategy_id: Optional[str]) -> PasswordStrategy:
        """Fresh, unsalted copy of the strategy :meth:`resolve` picks."""
        strategy = self.resolve(strategy_id)
        if strategy is None:
            raise NoStrategyAvailable(strategy_id)
        return strategy.clone()

    @functools.cached_property
    def _default_strategy(self) -> Optional[PasswordStrategy]:
        return self.get(self._default_id)
