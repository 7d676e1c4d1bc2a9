"""Day-over-day login streak rules."""
from __future__ import annotations

import datetime as dt


def day_difference(today: dt.date, last_active: dt.date) -> int:
    """Whole calendar days between two already-normalized days."""

    return (today - last_active).days


def next_streak(current: int, today: dt.date, last_active: dt.date | None) -> int:
    """Return the streak after a login on ``today``.

    Yesterday continues the streak, a longer gap restarts it at 1, and the
    same day (or a last-active day in the future from clock skew) leaves it
    as is. A user with no recorded activity keeps their current value.
    """
    current = current or 0
    if last_active is None:
        return current

    gap = day_difference(today, last_active)
    if gap == 1:
        return current + 1
    if gap > 1:
        return 1
    return current
