"""
credstrategy.record -- how the manager talks to credential records

Records are owned by the application (ORM models, documents, plain objects).
:class:`~credstrategy.manager.CredentialManager` only reads and assigns the
attributes named by :class:`CredentialAttributes`, and persists changes through
:meth:`CredentialRecord.update_fields`, which must write just the named fields
without running the record's full save lifecycle.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from collections.abc import Collection

__all__ = ["CredentialAttributes", "CredentialRecord"]


class CredentialRecord(Protocol):
    def update_fields(self, fields: Collection[str]) -> None:
        """Persist only ``fields`` (attribute names) of this record, atomically."""
        ...


@dataclasses.dataclass(frozen=True)
class CredentialAttributes:
    """Names of the record attributes, ``salt`` & ``username`` may be ``None`` if absent."""

    password: str = "password"
    salt: Optional[str] = "salt"
    username: Optional[str] = "username"
    strategy: str = "password_strategy"
    requires_new_password: str = "requires_new_password"
    #: stable identifier, only used for password reset codes
    identity: str = "id"

    @property
    def credential_fields(self) -> tuple[str, ...]:
        """fields written together whenever a password is (re-)encoded"""
        if self.salt is None:
            return (self.password, self.strategy)
        return (self.password, self.salt, self.strategy)
