"""Clock abstraction for the paste lifecycle

The lifecycle engine never reads the wall clock or the environment itself; a
`Clock` is resolved per request and injected.

Classes:
    Clock: protocol, `now_ms() -> int` (milliseconds since epoch).
    SystemClock: real UTC time.
    FixedClock: a pinned instant, used for the test-mode override.

Functions:
    resolve_clock(event) -> Clock
        Honor the `x-test-now-ms` header only when TEST_MODE=1.
    iso_timestamp(ms) -> str
        Format epoch milliseconds as ISO-8601 with millisecond precision.

Example:
    >>> os.environ['TEST_MODE'] = '1'
    >>> resolve_clock({'headers': {'x-test-now-ms': '5000'}}).now_ms()
    5000
    >>> iso_timestamp(5000)
    '1970-01-01T00:00:05.000Z'
"""

import logging
import re
from datetime import datetime, timedelta, UTC
from typing import Protocol

from pasteshare.constants import TEST_NOW_HEADER
from pasteshare.types import LambdaEvent
from pasteshare.utils.helpers import get_header
from pasteshare.utils.runtime import in_test_mode


logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
ONE_MILLISECOND = timedelta(milliseconds=1)
GREGORIAN_CYCLE = timedelta(days=146_097)  # 400 years
LEADING_INTEGER = re.compile(r'\s*([+-]?[0-9]+)')

_LATEST = datetime.max.replace(tzinfo=UTC) - EPOCH
_EARLIEST = datetime.min.replace(tzinfo=UTC) - EPOCH


class Clock(Protocol):
    def now_ms(self) -> int: ...


class SystemClock:
    """Real UTC wall clock."""

    def now_ms(self) -> int:
        # Integer timedelta division keeps full millisecond precision
        return (datetime.now(UTC) - EPOCH) // ONE_MILLISECOND


class FixedClock:
    """Clock pinned to a single instant."""

    def __init__(self, now_ms: int):
        self._now_ms = int(now_ms)

    def now_ms(self) -> int:
        return self._now_ms

    def __repr__(self) -> str:
        return f'FixedClock({self._now_ms})'


def resolve_clock(event: LambdaEvent) -> Clock:
    """Return the clock for one request

    The override header is ignored unless TEST_MODE=1. Its value is read like
    a leading integer: surrounding text after the digits is dropped
    ('5000abc' -> 5000), and a value without leading digits is ignored.
    """
    if not in_test_mode():
        return SystemClock()

    raw = get_header(event, TEST_NOW_HEADER)
    if raw is None:
        return SystemClock()

    match = LEADING_INTEGER.match(str(raw))
    if match is None:
        logger.warning('Ignoring unparseable %s header.', TEST_NOW_HEADER, extra={'header_value': raw})
        return SystemClock()
    return FixedClock(int(match.group(1)))


def iso_timestamp(ms: int) -> str:
    """Format epoch milliseconds as ISO-8601 UTC with millisecond precision

    Years outside 0000-9999 use the signed six-digit extended form
    (e.g. '+033658-09-27T01:46:40.000Z'). The Gregorian calendar repeats
    every 400 years, so such instants are formatted in a shifted year and
    the year is corrected afterwards.
    """
    delta = timedelta(milliseconds=ms)
    cycles = 0
    if delta > _LATEST:
        cycles = (delta - _LATEST) // GREGORIAN_CYCLE + 1
    elif delta < _EARLIEST:
        cycles = -((_EARLIEST - delta) // GREGORIAN_CYCLE + 1)

    moment = EPOCH + (delta - cycles * GREGORIAN_CYCLE)
    year = moment.year + 400 * cycles
    rest = moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')[4:]

    if 0 <= year <= 9999:
        return f'{year:04d}{rest}'
    return f'{"+" if year > 0 else "-"}{abs(year):06d}{rest}'
