"""Pure month-grid calculations — no UI dependencies."""

import calendar
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Sequence

DAYS_PER_WEEK = 7


class ConfigurationError(ValueError):
    """The calendar configuration cannot resolve a month for a date."""


@dataclass(frozen=True)
class CalendarConfig:
    """Week-start and month rules used to lay a month out as a grid.

    ``first_weekday`` follows the :mod:`calendar` numbering
    (0 = Monday … 6 = Sunday).
    """

    first_weekday: int = calendar.MONDAY
    days_per_week: int = DAYS_PER_WEEK

    @classmethod
    def current(cls) -> "CalendarConfig":
        """Config matching the process-wide :func:`calendar.firstweekday`."""
        return cls(first_weekday=calendar.firstweekday())

    def validate(self) -> None:
        if self.days_per_week != DAYS_PER_WEEK:
            raise ConfigurationError(
                f"unsupported week length: {self.days_per_week}")
        fw = self.first_weekday
        # bool is an int subclass; True/False are not weekdays
        if not isinstance(fw, int) or isinstance(fw, bool) or not 0 <= fw <= 6:
            raise ConfigurationError(
                f"first_weekday must be 0..6, got {self.first_weekday!r}")

    def month_range(self, year: int, month: int) -> tuple[date, int]:
        """Return (first day, day count) for the given month."""
        self.validate()
        try:
            _weekday, ndays = calendar.monthrange(year, month)
            first = date(year, month, 1)
        except (ValueError, OverflowError) as exc:
            raise ConfigurationError(
                f"cannot resolve month {year}-{month:02d}") from exc
        return first, ndays

    def column(self, d: date) -> int:
        """0-based weekday column of *d* relative to the week start."""
        return (d.weekday() - self.first_weekday) % self.days_per_week

    @staticmethod
    def same_day(a: date | datetime, b: date | datetime) -> bool:
        return _as_date(a) == _as_date(b)


@dataclass(frozen=True, slots=True)
class EmptyCell:
    """Leading placeholder before day 1."""


@dataclass(frozen=True, slots=True)
class DayCell:
    day: int
    date: date
    is_today: bool = False


Cell = EmptyCell | DayCell


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _resolve(reference: date | datetime,
             config: CalendarConfig | None) -> tuple[CalendarConfig, date, int]:
    config = config if config is not None else CalendarConfig.current()
    ref = _as_date(reference)
    first, ndays = config.month_range(ref.year, ref.month)
    return config, first, ndays


def lead_offset(reference: date | datetime,
                config: CalendarConfig | None = None) -> int:
    """Number of empty cells before day 1 of the reference month."""
    config, first, _ndays = _resolve(reference, config)
    return config.column(first)


def days_in_month(reference: date | datetime,
                  config: CalendarConfig | None = None) -> int:
    """Return 28–31 for the month containing *reference*."""
    return _resolve(reference, config)[2]


def compute_month_grid(
    reference: date | datetime,
    config: CalendarConfig | None = None,
    *,
    today: date | datetime | None = None,
) -> tuple[Cell, ...]:
    """Return the cells for the month containing *reference*.

    The grid starts with ``lead_offset`` :class:`EmptyCell` values so day 1
    lands in its weekday column, followed by one :class:`DayCell` per day.
    There is no trailing padding, so the last row may be partial.

    ``today`` is the date to highlight and defaults to *reference*; the
    comparison is by calendar day, never by instant.

    Raises :class:`ConfigurationError` if the month cannot be resolved.
    """
    config, first, ndays = _resolve(reference, config)
    highlight = today if today is not None else reference

    cells: list[Cell] = [EmptyCell()] * config.column(first)
    for day in range(1, ndays + 1):
        d = first + timedelta(days=day - 1)
        cells.append(DayCell(day, d, config.same_day(d, highlight)))
    return tuple(cells)


def compute_row_count(grid: Sequence[Cell],
                      days_per_week: int = DAYS_PER_WEEK) -> int:
    """Rows needed for *grid* in a ``days_per_week``-column layout."""
    return math.ceil(len(grid) / days_per_week)


def compute_cell_size(width: float, height: float, row_count: int,
                      title_rows: int = 1,
                      days_per_week: int = DAYS_PER_WEEK) -> float:
    """Return the side of the square cell that fits the grid and title.

    ``title_rows`` extra rows of the same height are reserved above the
    grid for the title strip.
    """
    if width < 0 or height < 0 or row_count < 0 or title_rows < 0:
        raise ValueError("layout dimensions must be non-negative")
    total_rows = row_count + title_rows
    if total_rows == 0:
        return 0.0
    return min(width / days_per_week, height / total_rows)


def format_title(reference: date | datetime) -> str:
    """Return e.g. ``'WEDNESDAY SEP 20 2023'``."""
    return reference.strftime("%A %b %d %Y").upper()


def next_refresh(now: datetime) -> datetime:
    """Start of the day after *now*, when the grid goes stale."""
    tomorrow = (now + timedelta(days=1)).date()
    return datetime.combine(tomorrow, time.min, tzinfo=now.tzinfo)
