"""Pure writing-streak logic - no I/O dependencies."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class StreakReport:
    """Streak statistics over an inclusive date range."""

    range_start: date
    range_end: date
    current_streak: int
    longest_streak: int
    missed_days: list[date] = field(default_factory=list)


def iter_days(start: date, end: date) -> Iterable[date]:
    """Yield every calendar day from start to end, inclusive."""
    d = start
    while d <= end:
        yield d
        d += ONE_DAY


def calculate_streaks(
    entry_dates: Iterable[date] | None,
    range_start: date,
    range_end: date,
) -> StreakReport:
    """
    Compute current streak, longest streak and missed days.

    Pure function - no I/O. A reversed range is swapped.
    """
    if range_start > range_end:
        range_start, range_end = range_end, range_start

    days = set(entry_dates or [])

    missed = [d for d in iter_days(range_start, range_end) if d not in days]

    return StreakReport(
        range_start=range_start,
        range_end=range_end,
        current_streak=current_streak(days, range_end),
        longest_streak=longest_streak(days, range_start, range_end),
        missed_days=missed,
    )


def current_streak(days: set[date], end: date) -> int:
    """Consecutive days with entries counting back from end. 0 if end has none."""
    count = 0
    d = end
    while d in days:
        count += 1
        d -= ONE_DAY
    return count


def longest_streak(days: set[date], start: date, end: date) -> int:
    """Longest run of consecutive entry days inside the range."""
    longest = 0
    run = 0
    for d in iter_days(start, end):
        if d in days:
            run += 1
            longest = max(longest, run)
        else:
            run = 0
    return longest
