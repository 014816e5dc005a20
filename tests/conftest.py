from datetime import datetime

import pytest

from spaced_review.models import Subtheme, Theme


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_reviews.db")
    return db_path


@pytest.fixture
def jan_first():
    return datetime(2025, 1, 1, 9, 30)


def make_theme(theme_id: str, *subtheme_ids: str, status: str = "queue") -> Theme:
    return Theme(
        id=theme_id,
        title=f"Theme {theme_id}",
        subthemes=[Subtheme(id=sid, title=f"Subtheme {sid}", status=status) for sid in subtheme_ids],
    )
