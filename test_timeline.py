import calendar
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest

from calendar_logic import CalendarConfig, ConfigurationError, DayCell
from timeline import CalendarTimelineProvider, RefreshPolicy

NOW = datetime(2023, 9, 20, 15, 30)


def _provider(config: CalendarConfig | None = None) -> CalendarTimelineProvider:
    config = config or CalendarConfig(first_weekday=calendar.SUNDAY)
    return CalendarTimelineProvider(config, clock=lambda: NOW)


def test_placeholder_and_snapshot_use_clock() -> None:
    provider = _provider()
    for entry in (provider.placeholder(), provider.snapshot()):
        assert entry.date == NOW
        assert entry.title == "WEDNESDAY SEP 20 2023"
        assert entry.row_count == 5
        assert len(entry.grid) == 35


def test_timeline_refreshes_at_next_midnight() -> None:
    timeline = _provider().timeline()

    assert len(timeline.entries) == 1
    assert timeline.policy == RefreshPolicy.after(datetime(2023, 9, 21))
    assert timeline.policy.kind == "after"

    highlighted = [c.day for c in timeline.entries[0].grid
                   if isinstance(c, DayCell) and c.is_today]
    assert highlighted == [20]


def test_each_call_reads_the_clock() -> None:
    times = iter([datetime(2023, 9, 30, 23, 59), datetime(2023, 10, 1, 0, 0)])
    provider = CalendarTimelineProvider(
        CalendarConfig(first_weekday=calendar.SUNDAY), clock=lambda: next(times))

    first = provider.snapshot()
    second = provider.snapshot()
    assert first.row_count == 5
    # October 2023 starts on a Sunday: no leading blanks
    assert isinstance(second.grid[0], DayCell)
    assert len(second.grid) == 31


def test_configuration_error_propagates() -> None:
    provider = _provider(CalendarConfig(first_weekday=9))
    with pytest.raises(ConfigurationError):
        provider.timeline()


def test_never_policy() -> None:
    policy = RefreshPolicy.never()
    assert policy.kind == "never"
    assert policy.refresh_at is None


def test_shared_provider_across_threads() -> None:
    provider = _provider()
    expected = provider.timeline()

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _i: provider.timeline(), range(64)))

    assert all(t == expected for t in results)


def test_delay_until_refresh() -> None:
    policy = RefreshPolicy.after(datetime(2023, 9, 21))
    assert policy.delay_ms(NOW) == 8 * 60 * 60 * 1000 + 30 * 60 * 1000
    assert policy.delay_ms(datetime(2023, 9, 21)) == 0


def test_delay_for_past_instant_is_zero() -> None:
    policy = RefreshPolicy.after(datetime(2023, 9, 21))
    assert policy.delay_ms(datetime(2023, 9, 21, 0, 0, 5)) == 0


def test_delay_keeps_timezone() -> None:
    tz = timezone(timedelta(hours=-5))
    policy = RefreshPolicy.after(datetime(2023, 9, 21, tzinfo=tz))
    now = datetime(2023, 9, 21, 4, 59, tzinfo=timezone.utc)
    assert policy.delay_ms(now) == 60 * 1000


def test_never_policy_has_no_delay() -> None:
    assert RefreshPolicy.never().delay_ms(NOW) is None
