"""Recency windows over a trade history.

Two cutoff policies exist. ``rolling`` counts days back from now and is
used for charts and statistics. ``calendar`` anchors the month window to
the same wall-clock time one calendar month earlier and is used for the
journal list. Both treat "today" as the local start of the current day.
"""

import calendar
from datetime import datetime, timedelta
from typing import Literal, Optional

from fxjournal.models import Trade

Window = Literal["today", "week", "month", "all"]
Policy = Literal["rolling", "calendar"]

WINDOWS = ("today", "week", "month", "all")
POLICIES = ("rolling", "calendar")


def to_local(timestamp: datetime) -> datetime:
    """Convert an aware timestamp to naive local time; naive ones pass through."""
    if timestamp.tzinfo is None:
        return timestamp
    return timestamp.astimezone().replace(tzinfo=None)


def _one_month_before(moment: datetime) -> datetime:
    if moment.month == 1:
        year, month = moment.year - 1, 12
    else:
        year, month = moment.year, moment.month - 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def window_cutoff(
    window: Window, now: datetime, policy: Policy = "rolling"
) -> Optional[datetime]:
    """Earliest entry time included by a window.

    Args:
        window: One of "today", "week", "month", "all".
        now: Reference time.
        policy: "rolling" or "calendar".

    Returns:
        Cutoff as naive local time, or None for "all".

    Raises:
        ValueError: If the window or policy is unknown.
    """
    if policy not in POLICIES:
        raise ValueError(f"Unknown window policy: {policy}")

    now = to_local(now)
    if window == "all":
        return None
    if window == "today":
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if window == "week":
        return now - timedelta(days=7)
    if window == "month":
        if policy == "calendar":
            return _one_month_before(now)
        return now - timedelta(days=30)
    raise ValueError(f"Unknown window: {window}")


def filter_by_window(
    trades: list[Trade],
    window: Window,
    now: Optional[datetime] = None,
    policy: Policy = "rolling",
) -> list[Trade]:
    """Keep trades whose entry time falls inside the window.

    The input list is not modified and the relative order of trades is
    preserved.

    Args:
        trades: Trades to filter.
        window: One of "today", "week", "month", "all".
        now: Reference time. Defaults to the current local time.
        policy: "rolling" (charts, statistics) or "calendar" (journal list).

    Returns:
        New list of trades inside the window.
    """
    cutoff = window_cutoff(window, now or datetime.now(), policy)
    if cutoff is None:
        return list(trades)
    return [t for t in trades if to_local(t.entry_time) >= cutoff]
