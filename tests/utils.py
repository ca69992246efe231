from __future__ import annotations

import dataclasses
from typing import Callable, List, Optional, Tuple


@dataclasses.dataclass
class UserRecord:
    """In-memory credential record, remembers which fields were persisted."""

    id: int = 1
    username: str = "alice"
    password: Optional[str] = None
    salt: Optional[str] = None
    password_strategy: Optional[str] = None
    requires_new_password: bool = False
    #: every update_fields() call, in order
    saved: List[Tuple[str, ...]] = dataclasses.field(default_factory=list)

    def update_fields(self, fields) -> None:
        self.saved.append(tuple(fields))


RecordFactory = Callable[..., UserRecord]
