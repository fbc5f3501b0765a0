import datetime

import pytest

from dotp import window


@pytest.mark.parametrize(
    "instant,expected",
    [(0, 30), (1, 29), (29, 1), (30, 30), (59, 1), (59.999, 1), (60, 30), (1111111109, 1), (45.5, 15)],
)
def test_remaining_seconds(instant, expected):
    assert window.remaining_seconds(instant) == expected


def test_remaining_seconds_range():
    for t in range(-90, 300):
        remaining = window.remaining_seconds(t)
        assert 1 <= remaining <= 30
        assert (remaining == 30) == (t % 30 == 0)


def test_progress_values():
    assert window.progress(60) == 0.0
    assert window.progress(45) == 0.5
    assert window.progress(52.5) == pytest.approx(0.75)


def test_progress_monotonic_within_window():
    values = [window.progress(30 + i / 10) for i in range(300)]
    assert values == sorted(values)
    assert all(0 <= v < 1 for v in values)
    assert window.progress(60) < values[-1]
    assert window.progress(60) == 0.0


def test_progress_sub_second():
    assert window.progress(30.25) > window.progress(30.0)


def test_datetime_instants():
    utc = datetime.datetime(1970, 1, 1, 0, 0, 45, 500000, tzinfo=datetime.timezone.utc)
    assert window.unix_seconds(utc) == 45
    assert window.remaining_seconds(utc) == 15
    assert window.progress(utc) == pytest.approx(15.5 / 30)

    local = datetime.datetime.fromtimestamp(1111111109)
    assert window.unix_seconds(local) == 1111111109


def test_to_nanoseconds():
    assert window.to_nanoseconds(2) == 2_000_000_000
    assert window.to_nanoseconds(2.5) == 2_500_000_000
