from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from collections.abc import Iterator

BCRYPT_CHARS = "./ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"


def _encode_bytes_big(
    next_value: Callable[[], int], chunks: int, tail: int
) -> Iterator[int]:
    """helper used by encode_bytes() to handle big-endian encoding"""
    #
    # output bit layout:
    #
    # first byte:   v1 765432
    #
    # second byte:  v1 10....
    #              +v2 ..7654
    #
    # third byte:   v2 3210..
    #              +v3 ....76
    #
    # fourth byte:  v3 543210
    #
    idx = 0
    while idx < chunks:
        v1 = next_value()
        v2 = next_value()
        v3 = next_value()
        yield v1 >> 2
        yield ((v1 & 0x03) << 4) | (v2 >> 4)
        yield ((v2 & 0x0F) << 2) | (v3 >> 6)
        yield v3 & 0x3F
        idx += 1
    if tail:
        v1 = next_value()
        if tail == 1:
            # note: 4 lsb of last byte are padding
            yield v1 >> 2
            yield (v1 & 0x03) << 4
        else:
            assert tail == 2
            # note: 2 lsb of last byte are padding
            v2 = next_value()
            yield v1 >> 2
            yield ((v1 & 0x03) << 4) | (v2 >> 4)
            yield ((v2 & 0x0F) << 2)


class Base64Engine:
    """big-endian base64 codec over a custom 64 character alphabet, without padding"""

    def __init__(self, charmap: str) -> None:
        if len(charmap) != 64:
            raise ValueError("charmap must be 64 characters")

        self._charmap = charmap.encode("latin-1")

    def _encode64(self, i: int) -> int:
        return self._charmap[i]

    def encode_bytes(self, source: bytes) -> bytes:
        """encode bytes to base64 string.

        :arg source: byte string to encode.
        :returns: byte string containing encoded data.
        """
        chunks, tail = divmod(len(source), 3)
        next_value = iter(source).__next__
        gen = _encode_bytes_big(next_value, chunks, tail)
        return bytes(map(self._encode64, gen))


bcrypt64 = Base64Engine(BCRYPT_CHARS)
