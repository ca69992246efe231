from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING, Literal, Optional

import bcrypt

from credstrategy._salt import get_random_bytes
from credstrategy._utils.binary import bcrypt64
from credstrategy._utils.bytes import as_bytes, as_str, truncate_bytes
from credstrategy._utils.validation import validate_work_factor
from credstrategy.errors import ConfigurationError
from credstrategy.inspect.bcrypt import inspect_bcrypt_hash
from credstrategy.strategies.abc import PasswordStrategy

if TYPE_CHECKING:
    from credstrategy._utils.bytes import StrOrBytes
    from credstrategy.policy import ComplexityPolicy

BcryptPrefix = Literal["2b", "2a"]
_bcrypt_prefixes = ("2b", "2a")

__all__ = ["BcryptStrategy"]


class BcryptStrategy(PasswordStrategy):
    """
    Adaptive bcrypt hashing, the preferred strategy.

    The salt is self-describing (``$2b$12$<22 chars>``) and is embedded in
    the encoded value, so stored hashes verify without the separate salt field.
    Passwords are truncated to bcrypt's 72 byte limit.
    """

    DEFAULT_WORK_FACTOR = 12
    MIN_WORK_FACTOR = 4
    MAX_WORK_FACTOR = 31
    MAX_PASSWORD_BYTES = 72
    SALT_BYTES = 16

    def __init__(
        self,
        work_factor: int = DEFAULT_WORK_FACTOR,
        prefix: BcryptPrefix = "2b",
        *,
        policy: Optional[ComplexityPolicy] = None,
        allow_degraded_entropy: bool = True,
    ) -> None:
        super().__init__(policy=policy)
        validate_work_factor(
            work_factor, min=self.MIN_WORK_FACTOR, max=self.MAX_WORK_FACTOR
        )
        if prefix not in _bcrypt_prefixes:
            msg = f"unsupported bcrypt prefix: {prefix!r}"
            raise ConfigurationError(msg)
        self.work_factor = work_factor
        self.prefix = prefix
        self.allow_degraded_entropy = allow_degraded_entropy

    def generate_salt(self) -> str:
        raw = get_random_bytes(
            self.SALT_BYTES, allow_degraded=self.allow_degraded_entropy
        )
        encoded = bcrypt64.encode_bytes(raw).decode("ascii")
        return f"${self.prefix}${self.work_factor:02}${encoded}"

    def encode(self, password: str) -> str:
        salt = self.get_salt()
        return as_str(bcrypt.hashpw(self._prepare_secret(password), salt.encode("ascii")))

    def compare(self, password: str, encoded: StrOrBytes) -> bool:
        # UnicodeDecodeError is a ValueError
        with contextlib.suppress(ValueError):
            if inspect_bcrypt_hash(as_str(encoded)) is None:
                return False
            return bcrypt.checkpw(
                password=self._prepare_secret(password),
                hashed_password=as_bytes(encoded),
            )
        return False

    def needs_update(self, encoded: StrOrBytes) -> bool:
        try:
            info = inspect_bcrypt_hash(as_str(encoded))
        except UnicodeDecodeError:
            return True
        if not info:
            return True
        return info.rounds != self.work_factor

    @classmethod
    def _prepare_secret(cls, password: str) -> bytes:
        return truncate_bytes(password, cls.MAX_PASSWORD_BYTES)
