"""Daily activation gate: introduces at most one queued subtheme per day."""
import copy
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from spaced_review.intervals import BASE_INTERVALS, add_days, day_string, resolve_now
from spaced_review.models import ACTIVE, QUEUE, Review, Theme, iter_subthemes

logger = logging.getLogger(__name__)


@dataclass
class DailyUpdate:
    updated_themes: list[Theme]
    processed_date: str


def has_introduction_on(themes: list[Theme], day: str) -> bool:
    """True if any subtheme, in any theme, was introduced on ``day``."""
    return any(st.introduction_date == day for _, st in iter_subthemes(themes))


def build_initial_reviews(now: datetime) -> list[Review]:
    """Generate the standard medium-cadence schedule starting from ``now``."""
    reviews = []
    running = now
    for number, interval in enumerate(BASE_INTERVALS, 1):
        running = add_days(running, interval)
        reviews.append(Review(number=number, date=day_string(running)))
    return reviews


def process_daily_updates(
    themes: list[Theme],
    last_processed_date: Optional[str],
    now: datetime | None = None,
) -> Optional[DailyUpdate]:
    """Activate the first queued subtheme unless one was already introduced today.

    Only one subtheme is activated per call across the whole collection, so new
    material is staggered one per day. Returns None when nothing needs to be
    written back: an introduction already exists today and today is already
    stamped, or there was nothing to activate and the stamp is current.
    """
    now = resolve_now(now)
    today = day_string(now)
    intro_today = has_introduction_on(themes, today)

    if intro_today and last_processed_date == today:
        return None

    updated = copy.deepcopy(themes)
    activated = False
    if not intro_today:
        for theme, subtheme in iter_subthemes(updated):
            if subtheme.status != QUEUE:
                continue
            subtheme.status = ACTIVE
            subtheme.introduction_date = today
            subtheme.reviews = build_initial_reviews(now)
            activated = True
            logger.info("Activated subtheme %s (%s) in theme %s", subtheme.id, subtheme.title, theme.id)
            break

    if activated or last_processed_date != today:
        return DailyUpdate(updated_themes=updated, processed_date=today)

    logger.debug("No queued subtheme to activate on %s", today)
    return None
