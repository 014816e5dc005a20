"""Data classes for the scheduling domain model."""
from dataclasses import dataclass, field
from typing import Optional

QUEUE = "queue"
ACTIVE = "active"
COMPLETED = "completed"

PENDING = "pending"

EASY = "easy"
MEDIUM = "medium"
HARD = "hard"
DIFFICULTIES = (EASY, MEDIUM, HARD)


@dataclass
class Review:
    number: int
    date: str  # YYYY-MM-DD
    status: str = PENDING
    completed_at: Optional[str] = None
    difficulty: Optional[str] = None
    summary: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.status == COMPLETED


@dataclass
class Subtheme:
    id: str
    title: str
    status: str = QUEUE
    introduction_date: Optional[str] = None
    reviews: list[Review] = field(default_factory=list)


@dataclass
class Theme:
    id: str
    title: str
    subthemes: list[Subtheme] = field(default_factory=list)
    color: Optional[str] = None


def iter_subthemes(themes: list[Theme]):
    """Yield (theme, subtheme) pairs in theme order, then subtheme order."""
    for theme in themes:
        for subtheme in theme.subthemes:
            yield theme, subtheme


def find_subtheme(themes: list[Theme], subtheme_id: str) -> Optional[Subtheme]:
    for _, subtheme in iter_subthemes(themes):
        if subtheme.id == subtheme_id:
            return subtheme
    return None
