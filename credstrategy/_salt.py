"""
Random bytes for salts.

Sources are tried in order:

1. ``os.urandom`` (through :func:`secrets.token_bytes`);
2. reading the OS random device directly;
3. an HMAC-SHA1 chain over high resolution timing, keyed with a process unique seed.

The third source is *degraded*: its output is unique per call but
far easier to predict than real entropy. Using it issues a
:exc:`~credstrategy.errors.DegradedEntropyWarning`, unless the caller
passes ``allow_degraded=False``, in which case
:exc:`~credstrategy.errors.InsufficientEntropyError` is raised instead.
"""

from __future__ import annotations

import hashlib
import hmac
import os
import secrets
import time
import warnings

from credstrategy._logging import logger
from credstrategy.errors import DegradedEntropyWarning, InsufficientEntropyError

URANDOM_DEVICE = "/dev/urandom"

#: number of hmac rounds mixed into each block of the timing fallback
_TIMING_ROUNDS = 12


def _system_random_bytes(count: int) -> bytes:
    return secrets.token_bytes(count)


def _device_random_bytes(count: int) -> bytes:
    with open(URANDOM_DEVICE, "rb") as stream:
        data = stream.read(count)
    if len(data) < count:
        msg = f"short read from {URANDOM_DEVICE}"
        raise OSError(msg)
    return data


def _process_seed() -> bytes:
    """generate a key unique to this process & call from cheap system resources"""
    text = "{} {} {:.15f} {}".format(
        os.getpid(),
        # id of a freshly created object
        id(object()),
        time.time(),
        time.perf_counter_ns(),
    )
    return hashlib.sha512(text.encode("utf-8")).digest()


def _timing_random_bytes(count: int) -> bytes:
    key = _process_seed()
    data = b""
    value = b""
    while len(data) < count:
        for _ in range(_TIMING_ROUNDS):
            tick = str(time.perf_counter_ns()).encode("ascii")
            value = hmac.new(key, tick + value, hashlib.sha1).digest()
        data += value
    return data[:count]


def get_random_bytes(count: int, *, allow_degraded: bool = True) -> bytes:
    for source in (_system_random_bytes, _device_random_bytes):
        try:
            return source(count)
        except (NotImplementedError, OSError) as exc:
            logger.debug("entropy source %s unavailable: %s", source.__name__, exc)

    if not allow_degraded:
        raise InsufficientEntropyError("no OS entropy source available")

    msg = (
        "no OS entropy source available, "
        "generating salt from timing based pseudo-random bytes"
    )
    logger.warning(msg)
    warnings.warn(msg, DegradedEntropyWarning, stacklevel=2)
    return _timing_random_bytes(count)
