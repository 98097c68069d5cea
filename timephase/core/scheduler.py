"""
Edge Scheduler - Sleep until the next round-number instant

If the granularity is 10ms, a wait aims for the top of the next 10ms
period of wall-clock time rather than 10ms after the previous call, so
successive frames do not drift. Durations are integer nanoseconds.
"""
import re
import time
from typing import Callable


NANOSECOND = 1
MICROSECOND = 1_000 * NANOSECOND
MILLISECOND = 1_000 * MICROSECOND
SECOND = 1_000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

UNITS = {
    'ns': NANOSECOND,
    'us': MICROSECOND,
    'µs': MICROSECOND,  # U+00B5 micro sign
    'μs': MICROSECOND,  # U+03BC greek mu
    'ms': MILLISECOND,
    's': SECOND,
    'm': MINUTE,
    'h': HOUR,
}

_FRAGMENT = re.compile(r'(\d*)(?:\.(\d*))?([^\d.]+)')


def parse_duration(text: str) -> int:
    """
    Parse a duration string such as '10ms', '-123us' or '1h2m3.5s'.

    A signed sequence of decimal numbers, each with a unit suffix. A bare
    '0' is accepted. Fractions below one nanosecond are truncated.

    Args:
        text: Duration string

    Returns:
        Duration in nanoseconds

    Raises:
        ValueError: If the string is not a valid duration
    """
    s = text.strip() if isinstance(text, str) else ''
    if not s:
        raise ValueError(f"invalid duration {text!r}")

    sign = 1
    if s[0] in '+-':
        sign = -1 if s[0] == '-' else 1
        s = s[1:]

    if s == '0':
        return 0
    if not s:
        raise ValueError(f"invalid duration {text!r}")

    total = 0
    pos = 0
    while pos < len(s):
        match = _FRAGMENT.match(s, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        whole, frac, unit = match.groups()
        frac = frac or ''
        if not whole and not frac:
            raise ValueError(f"invalid duration {text!r}")
        if unit not in UNITS:
            raise ValueError(f"unknown unit {unit!r} in duration {text!r}")

        scale = UNITS[unit]
        total += int(whole or 0) * scale
        if frac:
            total += int(frac) * scale // 10 ** len(frac)
        pos = match.end()

    return sign * total


def format_duration(ns: int) -> str:
    """Render nanoseconds with the largest unit that keeps it readable"""
    for suffix, scale in (('s', SECOND), ('ms', MILLISECOND), ('us', MICROSECOND)):
        if abs(ns) >= scale:
            value = ns / scale
            return f"{value:g}{suffix}"
    return f"{ns}ns"


def compute_delay(now_ns: int, granularity: int, offset: int = 0) -> int:
    """
    Nanoseconds to wait from now_ns until the next granularity edge.

    The offset is subtracted from the wait to account for predicted
    processing latency. A negative result wraps to the following period.

    Raises:
        ValueError: If granularity is not positive
    """
    if granularity <= 0:
        raise ValueError(f"granularity must be positive, got {granularity}ns")

    delay = granularity - now_ns % granularity
    delay -= offset
    if delay < 0:
        delay += granularity
    return delay


def wait_until_next_edge(
    granularity: int,
    threshold: int,
    offset: int,
    clock: Callable[[], int] = time.time_ns,
    sleep: Callable[[float], object] = time.sleep,
) -> int:
    """
    Sleep until the next multiple of granularity.

    If the predicted wait is not longer than threshold the sleep is skipped.

    Args:
        granularity: Period in nanoseconds
        threshold: Minimum wait worth sleeping for, nanoseconds
        offset: Signed latency compensation, nanoseconds
        clock: Epoch time source in nanoseconds
        sleep: Called with the wait in seconds

    Returns:
        The computed delay in nanoseconds, whether or not it was slept
    """
    delay = compute_delay(clock(), granularity, offset)
    if delay > threshold:
        sleep(delay / SECOND)
    return delay


class EdgeScheduler:
    """
    Bundles the timing settings of a render loop.
    """

    def __init__(
        self,
        granularity: int,
        threshold: int = 100 * MICROSECOND,
        offset: int = -123 * MICROSECOND,
        clock: Callable[[], int] = time.time_ns,
        sleep: Callable[[float], object] = time.sleep,
    ):
        if granularity <= 0:
            raise ValueError(f"granularity must be positive, got {granularity}ns")
        self.granularity = granularity
        self.threshold = threshold
        self.offset = offset
        self._clock = clock
        self._sleep = sleep

    def wait(self) -> int:
        """Block until the next edge, returns the computed delay"""
        return wait_until_next_edge(
            self.granularity, self.threshold, self.offset,
            clock=self._clock, sleep=self._sleep,
        )

    def __repr__(self) -> str:
        return (
            f"EdgeScheduler(granularity={format_duration(self.granularity)}, "
            f"threshold={format_duration(self.threshold)}, "
            f"offset={format_duration(self.offset)})"
        )
