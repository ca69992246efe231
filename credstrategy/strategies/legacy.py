from __future__ import annotations

import hashlib

from credstrategy._utils.bytes import as_bytes
from credstrategy.policy import ComplexityPolicy
from credstrategy.strategies.abc import PasswordStrategy

__all__ = ["LegacyMD5Strategy"]


class LegacyMD5Strategy(PasswordStrategy):
    """
    Unsalted, single pass md5 hex digest.

    Only meant for verifying credentials created by older systems,
    nothing about their complexity is known, so the default policy is empty.
    """

    default_policy = ComplexityPolicy(min_length=0)

    def encode(self, password: str) -> str:
        return hashlib.md5(as_bytes(password)).hexdigest()
