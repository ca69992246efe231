from __future__ import annotations

import functools
import hashlib
from typing import TYPE_CHECKING, Optional

from credstrategy._salt import get_random_bytes
from credstrategy._utils.bytes import as_bytes
from credstrategy._utils.validation import validate_work_factor
from credstrategy.errors import ConfigurationError
from credstrategy.strategies.abc import PasswordStrategy

if TYPE_CHECKING:
    from credstrategy._utils.protocols import DigestFunc, HashMethod
    from credstrategy.policy import ComplexityPolicy

__all__ = ["IteratedHashStrategy"]


def _resolve_hash_method(hash_method: HashMethod) -> DigestFunc:
    if callable(hash_method):
        return hash_method

    try:
        digest_size = hashlib.new(hash_method).digest_size
    except ValueError as exc:
        msg = f"unknown hash method: {hash_method!r}"
        raise ConfigurationError(msg) from exc
    if not digest_size:
        msg = f"variable length digests are not supported: {hash_method!r}"
        raise ConfigurationError(msg)
    return functools.partial(hashlib.new, hash_method)


class IteratedHashStrategy(PasswordStrategy):
    """
    Salted digest, re-applied ``work_factor`` times.

    The encoded value is the hex digest of::

        digest(... digest(salt + "###" + password) ...)

    Verification latency grows linearly with ``work_factor``,
    pick it to hit a wall-clock target on production hardware.
    """

    DEFAULT_WORK_FACTOR = 100
    SEPARATOR = "###"

    def __init__(
        self,
        work_factor: int = DEFAULT_WORK_FACTOR,
        hash_method: HashMethod = "sha1",
        *,
        policy: Optional[ComplexityPolicy] = None,
        allow_degraded_entropy: bool = True,
    ) -> None:
        super().__init__(policy=policy)
        validate_work_factor(work_factor, min=1)
        self.work_factor = work_factor
        self.allow_degraded_entropy = allow_degraded_entropy
        self._digest = _resolve_hash_method(hash_method)

    def generate_salt(self) -> str:
        size = self._digest(b"").digest_size
        return get_random_bytes(size, allow_degraded=self.allow_degraded_entropy).hex()

    def encode(self, password: str) -> str:
        value = f"{self.get_salt()}{self.SEPARATOR}{password}"
        for _ in range(self.work_factor):
            value = self._digest(as_bytes(value)).hexdigest()
        return value
