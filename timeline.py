"""Timeline provider — placeholder, snapshot and scheduled entries for the view."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Protocol

from calendar_logic import (
    CalendarConfig,
    Cell,
    compute_month_grid,
    compute_row_count,
    format_title,
    next_refresh,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComplicationEntry:
    """Everything the render layer needs for one point in time."""

    date: datetime
    grid: tuple[Cell, ...]
    title: str
    row_count: int


@dataclass(frozen=True)
class RefreshPolicy:
    kind: str
    refresh_at: datetime | None = None

    @classmethod
    def after(cls, when: datetime) -> "RefreshPolicy":
        return cls("after", when)

    @classmethod
    def never(cls) -> "RefreshPolicy":
        return cls("never")

    def delay_ms(self, now: datetime | None = None) -> int | None:
        """Milliseconds from *now* until the reload; None if there is none.

        An instant already in the past gives 0.
        """
        if self.kind != "after" or self.refresh_at is None:
            return None
        if now is None:
            now = datetime.now(self.refresh_at.tzinfo)
        return max(0, int((self.refresh_at - now).total_seconds() * 1000))


@dataclass(frozen=True)
class Timeline:
    entries: tuple[ComplicationEntry, ...]
    policy: RefreshPolicy


class TimelineProvider(Protocol):
    def placeholder(self) -> ComplicationEntry: ...

    def snapshot(self) -> ComplicationEntry: ...

    def timeline(self) -> Timeline: ...


class CalendarTimelineProvider:
    """Builds month-grid entries from the current time.

    ``clock`` returns "now"; it is injectable so tests can pin the date.
    Nothing is cached between calls, so one provider may be shared across
    threads.
    """

    def __init__(self, config: CalendarConfig | None = None,
                 clock: Callable[[], datetime] = datetime.now) -> None:
        self.config = config if config is not None else CalendarConfig.current()
        self._clock = clock

    def entry_for(self, when: datetime) -> ComplicationEntry:
        grid = compute_month_grid(when, self.config)
        return ComplicationEntry(
            date=when,
            grid=grid,
            title=format_title(when),
            row_count=compute_row_count(grid, self.config.days_per_week),
        )

    def placeholder(self) -> ComplicationEntry:
        return self.entry_for(self._clock())

    def snapshot(self) -> ComplicationEntry:
        return self.entry_for(self._clock())

    def timeline(self) -> Timeline:
        now = self._clock()
        entry = self.entry_for(now)
        refresh_at = next_refresh(now)
        log.info("Timeline built for %s, next refresh at %s",
                 now.date().isoformat(), refresh_at.isoformat())
        return Timeline(entries=(entry,), policy=RefreshPolicy.after(refresh_at))
