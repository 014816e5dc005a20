"""Review completion with adaptive rescheduling of the following reviews."""
import copy
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from spaced_review.intervals import add_days, calculate_next_interval, day_string, resolve_now
from spaced_review.models import COMPLETED, MEDIUM, Theme, find_subtheme

logger = logging.getLogger(__name__)


@dataclass
class ReviewCompletion:
    updated_themes: list[Theme]
    awarded: bool


def complete_review(
    themes: list[Theme],
    subtheme_id: str,
    review_number: int,
    difficulty: str = MEDIUM,
    now: datetime | None = None,
    summary: Optional[str] = None,
) -> ReviewCompletion:
    """Mark a review completed and shift every later review of the subtheme.

    The review right after the completed one is spaced by the reported
    difficulty; the ones after it use the medium interval. All offsets are
    chained from the completion moment. A review dated after today cannot be
    completed yet, in which case ``awarded`` is False and nothing changes.
    """
    now = resolve_now(now)
    today = day_string(now)
    updated = copy.deepcopy(themes)

    subtheme = find_subtheme(updated, subtheme_id)
    if subtheme is None:
        logger.debug("Subtheme %s not found", subtheme_id)
        return ReviewCompletion(updated_themes=updated, awarded=False)

    index = next((i for i, r in enumerate(subtheme.reviews) if r.number == review_number), None)
    if index is None:
        logger.debug("Review %s not found in subtheme %s", review_number, subtheme_id)
        return ReviewCompletion(updated_themes=updated, awarded=False)

    review = subtheme.reviews[index]
    if review.date > today:
        logger.debug("Review %s of %s is due %s, not yet completable", review_number, subtheme_id, review.date)
        return ReviewCompletion(updated_themes=updated, awarded=False)

    review.status = COMPLETED
    review.completed_at = now.isoformat()
    review.difficulty = difficulty
    if summary is not None:
        review.summary = summary

    anchor = now
    for i in range(index + 1, len(subtheme.reviews)):
        step_difficulty = difficulty if i == index + 1 else MEDIUM
        anchor = add_days(anchor, calculate_next_interval(i, step_difficulty))
        subtheme.reviews[i].date = day_string(anchor)

    if all(r.is_completed for r in subtheme.reviews):
        subtheme.status = COMPLETED

    logger.info(
        "Completed review %s of subtheme %s (%s), status now %s",
        review_number, subtheme_id, difficulty, subtheme.status,
    )
    return ReviewCompletion(updated_themes=updated, awarded=True)
