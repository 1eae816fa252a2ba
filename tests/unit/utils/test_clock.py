"""Unit tests for the clock resolver in clock.py.

Test coverage includes:
    1. SystemClock follows the (frozen) wall clock in milliseconds
    2. resolve_clock() honors x-test-now-ms only with TEST_MODE=1
    3. iso_timestamp() formatting
"""

import logging

import pytest
from freezegun import freeze_time

from pasteshare.constants import ENV
from pasteshare.utils.clock import SystemClock, FixedClock, resolve_clock, iso_timestamp


# -------------------------------
# 1. Clocks
# -------------------------------


@freeze_time('2025-10-15 12:00:00.123')
def test_system_clock():
    assert SystemClock().now_ms() == 1_760_529_600_123


def test_fixed_clock():
    clock = FixedClock(5_000)
    assert clock.now_ms() == 5_000
    assert clock.now_ms() == 5_000
    assert repr(clock) == 'FixedClock(5000)'


# -------------------------------
# 2. resolve_clock()
# -------------------------------


@pytest.mark.parametrize(
    'headers, expected',
    [
        ({'x-test-now-ms': '5000'}, 5_000),
        ({'X-Test-Now-Ms': '0'}, 0),
        ({'x-test-now-ms': ' 42 '}, 42),
        ({'x-test-now-ms': '-1000'}, -1_000),
        ({'x-test-now-ms': '+7'}, 7),
        # Leading integer wins, trailing text is dropped
        ({'x-test-now-ms': '5000abc'}, 5_000),
        ({'x-test-now-ms': '12.5'}, 12),
        ({'x-test-now-ms': '1_000'}, 1),
    ],
)
def test_resolve_clock_in_test_mode(monkeypatch, headers, expected):
    monkeypatch.setenv(ENV.App.TEST_MODE, '1')

    clock = resolve_clock({'headers': headers})
    assert isinstance(clock, FixedClock)
    assert clock.now_ms() == expected


@pytest.mark.parametrize('event', [{}, {'headers': None}, {'headers': {'accept': 'text/html'}}])
def test_resolve_clock_in_test_mode_without_header(monkeypatch, event):
    monkeypatch.setenv(ENV.App.TEST_MODE, '1')
    assert isinstance(resolve_clock(event), SystemClock)


@pytest.mark.parametrize('value', ['soon', '', 'abc5000', '_1000', '-'])
def test_resolve_clock_ignores_unparseable_header(monkeypatch, caplog, value):
    monkeypatch.setenv(ENV.App.TEST_MODE, '1')

    with caplog.at_level(logging.WARNING, logger='pasteshare.utils.clock'):
        clock = resolve_clock({'headers': {'x-test-now-ms': value}})

    assert isinstance(clock, SystemClock)
    assert 'Ignoring unparseable x-test-now-ms header.' in caplog.text


@pytest.mark.parametrize('flag', [None, '0', 'true'])
def test_resolve_clock_ignores_header_outside_test_mode(monkeypatch, flag):
    if flag is None:
        monkeypatch.delenv(ENV.App.TEST_MODE, raising=False)
    else:
        monkeypatch.setenv(ENV.App.TEST_MODE, flag)

    assert isinstance(resolve_clock({'headers': {'x-test-now-ms': '5000'}}), SystemClock)


# -------------------------------
# 3. iso_timestamp()
# -------------------------------


@pytest.mark.parametrize(
    'ms, expected',
    [
        (0, '1970-01-01T00:00:00.000Z'),
        (5_000, '1970-01-01T00:00:05.000Z'),
        (1_760_529_600_123, '2025-10-15T12:00:00.123Z'),
        (-62_135_596_800_000, '0001-01-01T00:00:00.000Z'),
        (253_402_300_799_999, '9999-12-31T23:59:59.999Z'),
        # Extended years outside 0000-9999
        (253_402_300_800_000, '+010000-01-01T00:00:00.000Z'),
        (-62_135_596_800_001, '0000-12-31T23:59:59.999Z'),
        (8_640_000_000_000_000, '+275760-09-13T00:00:00.000Z'),
        (-8_640_000_000_000_000, '-271821-04-20T00:00:00.000Z'),
    ],
)
def test_iso_timestamp(ms, expected):
    assert iso_timestamp(ms) == expected
