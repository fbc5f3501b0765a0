import calendar
import datetime
import math
import time
from typing import Union

TIMESTEP_SECONDS = 30

_NANOS_PER_SECOND = 1_000_000_000
_TIMESTEP_NANOS = TIMESTEP_SECONDS * _NANOS_PER_SECOND

Instant = Union[int, float, datetime.datetime]


def to_nanoseconds(instant: Instant) -> int:
    """
    Converts an instant to integer nanoseconds since the Unix epoch.

    Naive datetimes are read as local time, aware ones are converted to UTC.
    """
    if isinstance(instant, datetime.datetime):
        if instant.tzinfo is None:
            seconds = int(time.mktime(instant.timetuple()))
        else:
            seconds = calendar.timegm(instant.utctimetuple())
        return seconds * _NANOS_PER_SECOND + instant.microsecond * 1000
    if isinstance(instant, int):
        return instant * _NANOS_PER_SECOND
    return math.floor(instant * _NANOS_PER_SECOND)


def unix_seconds(instant: Instant) -> int:
    return to_nanoseconds(instant) // _NANOS_PER_SECOND


def remaining_seconds(instant: Instant) -> int:
    """
    Seconds left in the time step containing ``instant``, in [1, 30].

    A step boundary yields 30: the elapsed remainder is 0 there.
    """
    return TIMESTEP_SECONDS - unix_seconds(instant) % TIMESTEP_SECONDS


def progress(instant: Instant) -> float:
    """
    Fraction of the current time step already elapsed, in [0, 1).

    Computed from nanoseconds so a progress bar redrawn several times a
    second moves smoothly instead of once per second.
    """
    return (to_nanoseconds(instant) % _TIMESTEP_NANOS) / _TIMESTEP_NANOS
