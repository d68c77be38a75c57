"""Monotonic timestamps and the arithmetic done on them."""

from __future__ import annotations

import time
from dataclasses import dataclass

NS_PER_SECOND = 1_000_000_000
_U64_MASK = (1 << 64) - 1
# Carry threshold used when adding or subtracting timestamps and when
# building one from hours, minutes and a sub-second count.
_SUBSECOND_CARRY = 1_000_000


@dataclass(frozen=True, order=True)
class Timestamp:
    """A point on the monotonic clock, as seconds plus nanoseconds."""

    seconds: int
    nanoseconds: int

    @classmethod
    def now(cls) -> Timestamp:
        """The current monotonic time."""
        seconds, nanoseconds = divmod(time.monotonic_ns(), NS_PER_SECOND)
        return cls(seconds, nanoseconds)

    def to_ns(self) -> int:
        """The timestamp as an unsigned 64-bit nanosecond count."""
        return (self.seconds * NS_PER_SECOND + self.nanoseconds) & _U64_MASK

    def __add__(self, other: object) -> Timestamp:
        if not isinstance(other, Timestamp):
            return NotImplemented
        total = self.nanoseconds + other.nanoseconds
        if total > _SUBSECOND_CARRY:
            return Timestamp(self.seconds + other.seconds + 1, total - _SUBSECOND_CARRY)
        return Timestamp(self.seconds + other.seconds, total)

    def __sub__(self, other: object) -> Timestamp:
        if not isinstance(other, Timestamp):
            return NotImplemented
        diff = self.nanoseconds - other.nanoseconds
        if diff < 0:
            return Timestamp(self.seconds - other.seconds - 1, diff + _SUBSECOND_CARRY)
        return Timestamp(self.seconds - other.seconds, diff)


def difftime(t0: Timestamp, t1: Timestamp) -> float:
    """Seconds elapsed from ``t0`` to ``t1``."""
    secdiff = float(t1.seconds - t0.seconds)
    if t1.nanoseconds < t0.nanoseconds:
        secdiff += (NS_PER_SECOND - t0.nanoseconds + t1.nanoseconds) / 1e9 - 1.0
    else:
        secdiff += (t1.nanoseconds - t0.nanoseconds) / 1e9
    return secdiff


def difftime_ns(t0: Timestamp, t1: Timestamp) -> int:
    """Nanoseconds from ``t0`` to ``t1`` as an unsigned 64-bit value."""
    seconds = t1.seconds - t0.seconds
    return (seconds * NS_PER_SECOND + t1.nanoseconds - t0.nanoseconds) & _U64_MASK


def hmns_to_time(hours: int, minutes: int, nanoseconds: int) -> Timestamp:
    """Build a timestamp from hours, minutes and a sub-second count."""
    return Timestamp(
        hours * 60 * 60 + 60 * minutes + nanoseconds // _SUBSECOND_CARRY,
        nanoseconds % _SUBSECOND_CARRY,
    )