from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from data.errors import EsoLogsError, UnknownSelectorError
from data.time_ranges import UPDATE_DATE_RANGES, latest_update, resolve, supported_updates


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.mark.parametrize("selector", list(UPDATE_DATE_RANGES))
def test_every_selector_resolves_to_non_empty_window(selector):
    time_range = resolve(selector)
    assert time_range.start < time_range.end


def test_u43_window():
    time_range = resolve("U43")
    assert time_range.start == utc(2023, 6, 1)
    assert time_range.end == utc(2023, 8, 30)
    assert time_range.start_ms == 1685577600000
    assert time_range.end_ms == 1693353600000


def test_windows_are_chronological_and_contiguous():
    ranges = [resolve(s) for s in supported_updates()]
    for prev, nxt in zip(ranges, ranges[1:]):
        assert prev.end == nxt.start


def test_latest_update_ends_at_call_time():
    assert latest_update() == "U46"

    now = utc(2025, 1, 1)
    assert resolve("U46", now=now).end == now
    assert resolve("U46", now=now + timedelta(hours=1)).end == now + timedelta(hours=1)


def test_latest_update_defaults_to_wall_clock():
    before = datetime.now(timezone.utc)
    time_range = resolve("U46")
    assert before <= time_range.end <= datetime.now(timezone.utc)


def test_now_is_ignored_for_closed_windows():
    assert resolve("U42", now=utc(2030, 1, 1)).end == utc(2023, 6, 1)


@pytest.mark.parametrize("selector", ["U41", "u43", "", "U47"])
def test_unknown_selector(selector):
    with pytest.raises(UnknownSelectorError) as excinfo:
        resolve(selector)
    assert excinfo.value.selector == selector
    assert not isinstance(excinfo.value, EsoLogsError)


def test_supported_updates_order():
    assert supported_updates() == ["U42", "U43", "U44", "U45", "U46"]
