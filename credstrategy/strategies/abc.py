from __future__ import annotations

import abc
import copy
import hmac
from typing import TYPE_CHECKING, ClassVar, Optional

from credstrategy._utils.bytes import as_bytes, as_str
from credstrategy.policy import ComplexityPolicy

if TYPE_CHECKING:
    from typing_extensions import Self

    from credstrategy._utils.bytes import StrOrBytes
    from credstrategy.policy import ValidationResult

__all__ = ["PasswordStrategy"]


class PasswordStrategy(abc.ABC):
    """
    Base class for password encoding strategies.

    A strategy encodes passwords, compares them against encoded values,
    validates their complexity and owns the salt used for encoding.
    Salt and username are per-credential state: configure a fresh
    instance (see :meth:`clone`) for every credential instead of sharing one
    between concurrent callers.
    """

    #: policy used when none is passed to the constructor
    default_policy: ClassVar[ComplexityPolicy] = ComplexityPolicy()

    def __init__(self, *, policy: Optional[ComplexityPolicy] = None) -> None:
        self.policy = policy if policy is not None else self.default_policy
        #: registry id, assigned when the strategy is registered
        self.name: Optional[str] = None
        self.username: Optional[str] = None
        self._salt: Optional[str] = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"

    @abc.abstractmethod
    def encode(self, password: str) -> str:
        """Encode a plain text password using the current salt & username."""
        raise NotImplementedError

    def compare(self, password: str, encoded: StrOrBytes) -> bool:
        return hmac.compare_digest(as_bytes(self.encode(password)), as_bytes(encoded))

    def validate(self, password: str) -> ValidationResult:
        return self.policy.validate(password)

    def can_upgrade_to(self, other: PasswordStrategy) -> bool:
        """
        Checks whether credentials can be silently re-encoded with ``other``.
        This holds when our complexity requirements are equal to or greater than
        ``other``'s, otherwise the user must be asked for a new password.
        """
        return self.policy.covers(other.policy)

    def needs_update(self, encoded: StrOrBytes) -> bool:
        """Checks if ``encoded`` was produced with settings other than ours."""
        return False

    def generate_salt(self) -> Optional[str]:
        """Generates a new salt, returns ``None`` if this strategy is unsalted."""
        return None

    def set_salt(self, salt: Optional[StrOrBytes]) -> None:
        self._salt = as_str(salt) if salt is not None else None

    def get_salt(self, force_refresh: bool = False) -> Optional[str]:
        if self._salt is None or force_refresh:
            self._salt = self.generate_salt()
        return self._salt

    def clone(self) -> Self:
        """Copy of this strategy sharing its configuration, without salt or username."""
        new = copy.copy(self)
        new._salt = None
        new.username = None
        return new
