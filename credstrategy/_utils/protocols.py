from __future__ import annotations

from typing import Callable, Protocol, Union

from typing_extensions import Buffer, Self


class HashLike(Protocol):
    """Lifted from hashlib.pyi"""

    @property
    def digest_size(self) -> int: ...

    @property
    def name(self) -> str: ...

    def copy(self) -> Self: ...

    def digest(self) -> bytes: ...

    def hexdigest(self) -> str: ...

    def update(self, data: Buffer, /) -> None: ...


DigestFunc = Callable[[bytes], HashLike]

#: either a :mod:`hashlib` algorithm name or a constructor such as ``hashlib.sha256``
HashMethod = Union[str, DigestFunc]
