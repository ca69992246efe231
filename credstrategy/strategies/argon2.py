from __future__ import annotations

import base64
import contextlib
from typing import TYPE_CHECKING, Literal, Optional

import argon2
from argon2.exceptions import VerificationError

from credstrategy._salt import get_random_bytes
from credstrategy._utils.bytes import as_str
from credstrategy._utils.validation import validate_work_factor
from credstrategy.strategies.abc import PasswordStrategy

if TYPE_CHECKING:
    from credstrategy._utils.bytes import StrOrBytes
    from credstrategy.policy import ComplexityPolicy

__all__ = ["Argon2Strategy"]


class Argon2Strategy(PasswordStrategy):
    """
    Argon2 hashing through argon2-cffi, ``work_factor`` is the argon2 time cost.

    Like bcrypt, encoded values are self-describing PHC strings.
    The salt field holds the raw salt, base64 encoded.
    """

    SALT_BYTES = 16

    def __init__(
        self,
        work_factor: int = argon2.DEFAULT_TIME_COST,
        memory_cost: int = argon2.DEFAULT_MEMORY_COST,
        parallelism: int = argon2.DEFAULT_PARALLELISM,
        hash_len: int = argon2.DEFAULT_HASH_LENGTH,
        type: Literal["d", "i", "id"] = "id",
        *,
        policy: Optional[ComplexityPolicy] = None,
        allow_degraded_entropy: bool = True,
    ) -> None:
        super().__init__(policy=policy)
        validate_work_factor(work_factor, min=1)
        self.work_factor = work_factor
        self.allow_degraded_entropy = allow_degraded_entropy
        self._hasher = argon2.PasswordHasher(
            time_cost=work_factor,
            memory_cost=memory_cost,
            parallelism=parallelism,
            hash_len=hash_len,
            salt_len=self.SALT_BYTES,
            type=argon2.Type[type.upper()],
        )

    def generate_salt(self) -> str:
        raw = get_random_bytes(
            self.SALT_BYTES, allow_degraded=self.allow_degraded_entropy
        )
        return base64.b64encode(raw).decode("ascii")

    def encode(self, password: str) -> str:
        salt = base64.b64decode(self.get_salt())
        return self._hasher.hash(password, salt=salt)

    def compare(self, password: str, encoded: StrOrBytes) -> bool:
        # InvalidHashError & UnicodeError are ValueErrors
        with contextlib.suppress(VerificationError, ValueError):
            return self._hasher.verify(hash=as_str(encoded), password=password)
        return False

    def needs_update(self, encoded: StrOrBytes) -> bool:
        with contextlib.suppress(ValueError):
            return self._hasher.check_needs_rehash(as_str(encoded))
        return True
