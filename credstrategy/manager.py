"""
credstrategy.manager -- verification & transparent upgrades of stored credentials

:class:`CredentialManager` verifies a password against a record, and when the
record was encoded with a strategy other than the registry's default,
re-encodes it with the default strategy while the plain password is at hand.

If the old strategy's complexity policy doesn't cover the default one,
the password is validated first; when it fails, the record is left on its old
strategy and flagged as requiring a new password. The authentication itself
still succeeds, enforcing the flag is up to the caller.
"""

from __future__ import annotations

import dataclasses
import enum
import hashlib
import hmac
from typing import TYPE_CHECKING, Optional

from credstrategy import config as _config
from credstrategy._logging import logger
from credstrategy._utils.bytes import as_bytes
from credstrategy.errors import NoStrategyAvailable
from credstrategy.record import CredentialAttributes
from credstrategy.registry import StrategyRegistry

if TYPE_CHECKING:
    from collections.abc import Mapping

    from typing_extensions import Self

    from credstrategy.policy import ValidationResult, ValidationRule
    from credstrategy.record import CredentialRecord
    from credstrategy.registry import StrategyConfig
    from credstrategy.strategies.abc import PasswordStrategy

__all__ = ["AuthOutcome", "AuthResult", "ChangeResult", "CredentialManager"]


class AuthOutcome(str, enum.Enum):
    VALID = "valid"
    INVALID = "invalid"
    #: the record's strategy isn't registered and there is no default strategy
    NO_STRATEGY = "no_strategy"


@dataclasses.dataclass(frozen=True)
class AuthResult:
    outcome: AuthOutcome
    #: the record was re-encoded during this call
    upgraded: bool = False
    #: the record could not be upgraded and has been flagged for a new password
    requires_new_password: bool = False

    @property
    def valid(self) -> bool:
        return self.outcome is AuthOutcome.VALID

    def __bool__(self) -> bool:
        return self.valid


@dataclasses.dataclass(frozen=True)
class ChangeResult:
    failure: Optional[ValidationResult] = None

    @property
    def changed(self) -> bool:
        return self.failure is None

    @property
    def rule(self) -> Optional[ValidationRule]:
        return self.failure.rule if self.failure is not None else None

    def __bool__(self) -> bool:
        return self.changed


_CHANGED = ChangeResult()


class CredentialManager:
    RESET_CODE_NAMESPACE = "credstrategy.manager.CredentialManager.password_reset_code"

    def __init__(
        self,
        registry: StrategyRegistry,
        *,
        auto_upgrade: bool = True,
        attributes: Optional[CredentialAttributes] = None,
    ) -> None:
        self.registry = registry
        self.auto_upgrade = auto_upgrade
        self.attributes = attributes if attributes is not None else CredentialAttributes()

    @classmethod
    def from_config(
        cls,
        strategies: Mapping[str, StrategyConfig],
        default: Optional[str] = None,
        *,
        auto_upgrade: bool = True,
        attributes: Optional[CredentialAttributes] = None,
    ) -> Self:
        return cls(
            StrategyRegistry.from_config(strategies, default=default),
            auto_upgrade=auto_upgrade,
            attributes=attributes,
        )

    @classmethod
    def from_string(
        cls,
        source: str,
        section: str = _config.DEFAULT_SECTION,
        *,
        attributes: Optional[CredentialAttributes] = None,
    ) -> Self:
        config = _config.load_string(source, section=section)
        return cls.from_config(
            config.strategies,
            default=config.default,
            auto_upgrade=config.auto_upgrade,
            attributes=attributes,
        )

    @classmethod
    def from_path(
        cls,
        path: str,
        section: str = _config.DEFAULT_SECTION,
        encoding: str = "utf-8",
        *,
        attributes: Optional[CredentialAttributes] = None,
    ) -> Self:
        config = _config.load_path(path, section=section, encoding=encoding)
        return cls.from_config(
            config.strategies,
            default=config.default,
            auto_upgrade=config.auto_upgrade,
            attributes=attributes,
        )

    def authenticate(self, password: str, record: CredentialRecord) -> AuthResult:
        """
        Compares ``password`` to the one stored in ``record``,
        upgrading the record to the default strategy if needed.
        """
        attrs = self.attributes
        strategy_id = getattr(record, attrs.strategy)
        try:
            strategy = self._configured_strategy(strategy_id, record)
        except NoStrategyAvailable:
            logger.error(
                "no password strategy available for record %r (strategy %r)",
                self._identity(record),
                strategy_id,
            )
            return AuthResult(AuthOutcome.NO_STRATEGY)

        encoded = getattr(record, attrs.password)
        if not encoded or not strategy.compare(password, encoded):
            return AuthResult(AuthOutcome.INVALID)

        default = self.registry.get_default()
        if not self.auto_upgrade or default is None:
            return AuthResult(AuthOutcome.VALID)

        if strategy.name != default.name:
            return self._upgrade(password, record, strategy, default)

        if default.needs_update(encoded):
            self.change_password(password, record, run_validation=False)
            logger.info(
                "re-encoded record %r with current %r settings",
                self._identity(record),
                default.name,
            )
            return AuthResult(AuthOutcome.VALID, upgraded=True)

        return AuthResult(AuthOutcome.VALID)

    def change_password(
        self,
        new_password: str,
        record: CredentialRecord,
        run_validation: bool = True,
        persist: bool = True,
    ) -> ChangeResult:
        """
        Encodes ``new_password`` into ``record``.

        With ``run_validation`` the password is checked against the default
        strategy's policy first; a failure is returned and the record is left untouched.
        With ``persist`` only the password, salt & strategy fields are written.
        """
        attrs = self.attributes
        if self.auto_upgrade:
            strategy_id = self.registry.default_id
        else:
            strategy_id = getattr(record, attrs.strategy)
        strategy = self.registry.create(strategy_id)

        if run_validation:
            validator = self.registry.get_default() or strategy
            result = validator.validate(new_password)
            if not result:
                return ChangeResult(failure=result)

        if attrs.username is not None:
            strategy.username = getattr(record, attrs.username)
        salt = strategy.get_salt(force_refresh=True)
        encoded = strategy.encode(new_password)

        setattr(record, attrs.password, encoded)
        if attrs.salt is not None:
            setattr(record, attrs.salt, salt)
        setattr(record, attrs.strategy, strategy.name)
        if persist:
            record.update_fields(attrs.credential_fields)
        return _CHANGED

    def validate(
        self, password: str, strategy_id: Optional[str] = None
    ) -> ValidationResult:
        """Checks ``password`` against a strategy's policy, the default one unless given."""
        if strategy_id is not None:
            strategy = self.registry.require(strategy_id)
        else:
            strategy = self.registry.get_default()
            if strategy is None:
                raise NoStrategyAvailable(None)
        return strategy.validate(password)

    def password_reset_code(self, record: CredentialRecord) -> str:
        """
        One-way code derived from the record's identity, salt & encoded password.
        It changes whenever the password does, so it can only be used once.
        """
        attrs = self.attributes
        salt = getattr(record, attrs.salt) if attrs.salt is not None else None
        parts = (
            self.RESET_CODE_NAMESPACE,
            str(getattr(record, attrs.identity)),
            salt or "0",
            getattr(record, attrs.password) or "",
        )
        return hashlib.sha256(b"|".join(map(as_bytes, parts))).hexdigest()

    def verify_password_reset_code(self, record: CredentialRecord, code: str) -> bool:
        return hmac.compare_digest(
            self.password_reset_code(record).encode("ascii"), code.encode("utf-8")
        )

    def _configured_strategy(
        self, strategy_id: Optional[str], record: CredentialRecord
    ) -> PasswordStrategy:
        attrs = self.attributes
        strategy = self.registry.create(strategy_id)
        if attrs.salt is not None:
            strategy.set_salt(getattr(record, attrs.salt))
        if attrs.username is not None:
            strategy.username = getattr(record, attrs.username)
        return strategy

    def _upgrade(
        self,
        password: str,
        record: CredentialRecord,
        strategy: PasswordStrategy,
        default: PasswordStrategy,
    ) -> AuthResult:
        identity = self._identity(record)
        change = self.change_password(
            password, record, run_validation=not strategy.can_upgrade_to(default)
        )
        if not change:
            logger.warning(
                "can't upgrade record %r from %r to %r, new password required (%s)",
                identity,
                strategy.name,
                default.name,
                change.rule.value if change.rule is not None else None,
            )
            setattr(record, self.attributes.requires_new_password, True)
            record.update_fields((self.attributes.requires_new_password,))
            return AuthResult(AuthOutcome.VALID, requires_new_password=True)

        logger.info(
            "upgraded record %r from %r to %r", identity, strategy.name, default.name
        )
        return AuthResult(AuthOutcome.VALID, upgraded=True)

    def _identity(self, record: CredentialRecord) -> object:
        return getattr(record, self.attributes.identity, None)
