"""Daily agenda, upcoming reviews and progress views over the theme collection."""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from spaced_review.intervals import day_string, resolve_now
from spaced_review.models import ACTIVE, COMPLETED, PENDING, QUEUE, Review, Subtheme, Theme, iter_subthemes

INTRO = "intro"
REVIEW = "review"


@dataclass
class AgendaItem:
    theme_id: str
    theme_title: str
    subtheme_id: str
    subtheme_title: str
    kind: str
    review_number: int
    date: str
    status: str
    locked: bool = False


def _completed_on(review: Review, day: str) -> bool:
    return review.completed_at is not None and review.completed_at[:10] == day


def build_agenda(themes: list[Theme], day: str = None, now: datetime | None = None) -> list[AgendaItem]:
    """Items to show for ``day`` (default today), pending first.

    On the current day, overdue pending reviews are included as well; on any
    other day only reviews dated that day or completed that day are listed.
    """
    today = day_string(resolve_now(now))
    day = day or today
    is_today = day == today

    intros, reviews = [], []
    for theme, st in iter_subthemes(themes):
        if st.introduction_date == day:
            intros.append(AgendaItem(
                theme.id, theme.title, st.id, st.title, INTRO, 0, day,
                COMPLETED if st.status != QUEUE else PENDING,
            ))
        for r in st.reviews:
            if is_today:
                wanted = (r.status == PENDING and r.date <= day) or _completed_on(r, day)
            else:
                wanted = r.date == day or _completed_on(r, day)
            if wanted:
                reviews.append(AgendaItem(
                    theme.id, theme.title, st.id, st.title, REVIEW, r.number, r.date, r.status,
                    locked=r.date > today,
                ))

    items = intros + reviews
    # stable: keeps theme order within each group
    items.sort(key=lambda item: item.status == COMPLETED)
    return items


def next_pending_review(subtheme: Subtheme) -> Optional[Review]:
    return next((r for r in subtheme.reviews if r.status == PENDING), None)


def upcoming_reviews(themes: list[Theme], now: datetime | None = None, days: int = 7) -> list[AgendaItem]:
    """Pending reviews due after today and within the next ``days`` days."""
    today = resolve_now(now).date()
    horizon = day_string(today + timedelta(days=days))
    today_str = day_string(today)
    items = [
        AgendaItem(theme.id, theme.title, st.id, st.title, REVIEW, r.number, r.date, r.status, locked=True)
        for theme, st in iter_subthemes(themes)
        if st.status == ACTIVE
        for r in st.reviews
        if r.status == PENDING and today_str < r.date <= horizon
    ]
    items.sort(key=lambda item: (item.date, item.review_number))
    return items


def subtheme_progress(subtheme: Subtheme) -> dict:
    total = len(subtheme.reviews)
    completed = sum(1 for r in subtheme.reviews if r.status == COMPLETED)
    percent = round(completed / total * 100, 1) if total else 0.0
    return {"completed": completed, "total": total, "percent": percent}
