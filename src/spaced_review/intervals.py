"""Base interval table and date helpers shared by activation and rescheduling."""
import math
from datetime import date, datetime, timedelta

from spaced_review.models import EASY, HARD, MEDIUM

# Days between consecutive reviews: +1, +2, +4, +8, +15 (day 1, 3, 7, 15, 30)
BASE_INTERVALS = (1, 2, 4, 8, 15)
MAX_INTERVAL = BASE_INTERVALS[-1]


def calculate_next_interval(step_index: int, difficulty: str = MEDIUM) -> int:
    """Return the number of days until the review at ``step_index``.

    Args:
        step_index: 0-based position of the review in the 5-review sequence.
            Positions outside the table saturate at the largest interval.
        difficulty: "easy", "medium" or "hard". Unknown values act as medium.

    Returns:
        Interval in days, never less than 1.
    """
    if 0 <= step_index < len(BASE_INTERVALS):
        base = BASE_INTERVALS[step_index]
    else:
        base = MAX_INTERVAL

    if difficulty == EASY:
        return math.ceil(base * 1.8)
    if difficulty == HARD:
        return max(1, math.floor(base * 0.7))
    return base


def resolve_now(now: datetime | None = None) -> datetime:
    return now if now is not None else datetime.now()


def day_string(moment: datetime | date) -> str:
    """Format a datetime or date as an ISO calendar day."""
    if isinstance(moment, datetime):
        moment = moment.date()
    return moment.isoformat()


def add_days(moment: datetime, days: int) -> datetime:
    return moment + timedelta(days=days)
