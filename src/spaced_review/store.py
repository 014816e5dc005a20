"""Persistence of the theme collection and the daily processing stamp."""
import logging
import uuid
from datetime import datetime
from typing import Iterable, Optional

from spaced_review.activation import DailyUpdate, process_daily_updates
from spaced_review.db import get_connection
from spaced_review.models import MEDIUM, Review, Subtheme, Theme
from spaced_review.rescheduler import complete_review

logger = logging.getLogger(__name__)

LAST_PROCESSED_KEY = "last_processed_date"


def get_setting(db_path: str, key: str, default: str = None) -> str | None:
    conn = get_connection(db_path)
    row = conn.execute("SELECT value FROM user_settings WHERE key = ?", (key,)).fetchone()
    conn.close()
    return row["value"] if row else default


def set_setting(db_path: str, key: str, value: str) -> None:
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO user_settings (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=?",
        (key, value, value),
    )
    conn.commit()
    conn.close()


def get_last_processed_date(db_path: str) -> str | None:
    return get_setting(db_path, LAST_PROCESSED_KEY)


def set_last_processed_date(db_path: str, day: str) -> None:
    set_setting(db_path, LAST_PROCESSED_KEY, day)


def _new_id() -> str:
    return uuid.uuid4().hex


def add_theme(db_path: str, title: str, subtopics: Iterable[str] = (), color: str = None) -> Theme:
    """Create a theme whose subthemes all start in the queue, in the given order."""
    theme = Theme(id=_new_id(), title=title, color=color)
    conn = get_connection(db_path)
    position = conn.execute("SELECT COALESCE(MAX(position) + 1, 0) FROM themes").fetchone()[0]
    conn.execute(
        "INSERT INTO themes (id, title, color, position) VALUES (?, ?, ?, ?)",
        (theme.id, title, color, position),
    )
    for i, sub_title in enumerate(subtopics):
        subtheme = Subtheme(id=_new_id(), title=sub_title)
        conn.execute(
            "INSERT INTO subthemes (id, theme_id, title, status, position) VALUES (?, ?, ?, ?, ?)",
            (subtheme.id, theme.id, sub_title, subtheme.status, i),
        )
        theme.subthemes.append(subtheme)
    conn.commit()
    conn.close()
    return theme


def add_subtheme(db_path: str, theme_id: str, title: str) -> Subtheme:
    conn = get_connection(db_path)
    exists = conn.execute("SELECT 1 FROM themes WHERE id = ?", (theme_id,)).fetchone()
    if not exists:
        conn.close()
        raise KeyError(f"Unknown theme: {theme_id}")
    position = conn.execute(
        "SELECT COALESCE(MAX(position) + 1, 0) FROM subthemes WHERE theme_id = ?", (theme_id,)
    ).fetchone()[0]
    subtheme = Subtheme(id=_new_id(), title=title)
    conn.execute(
        "INSERT INTO subthemes (id, theme_id, title, status, position) VALUES (?, ?, ?, ?, ?)",
        (subtheme.id, theme_id, title, subtheme.status, position),
    )
    conn.commit()
    conn.close()
    return subtheme


def load_themes(db_path: str) -> list[Theme]:
    conn = get_connection(db_path)
    theme_rows = conn.execute("SELECT * FROM themes ORDER BY position").fetchall()
    sub_rows = conn.execute("SELECT * FROM subthemes ORDER BY theme_id, position").fetchall()
    review_rows = conn.execute("SELECT * FROM reviews ORDER BY subtheme_id, number").fetchall()
    conn.close()

    reviews_by_sub: dict[str, list[Review]] = {}
    for r in review_rows:
        reviews_by_sub.setdefault(r["subtheme_id"], []).append(Review(
            number=r["number"],
            date=r["date"],
            status=r["status"],
            completed_at=r["completed_at"],
            difficulty=r["difficulty"],
            summary=r["summary"],
        ))
    subs_by_theme: dict[str, list[Subtheme]] = {}
    for s in sub_rows:
        subs_by_theme.setdefault(s["theme_id"], []).append(Subtheme(
            id=s["id"],
            title=s["title"],
            status=s["status"],
            introduction_date=s["introduction_date"],
            reviews=reviews_by_sub.get(s["id"], []),
        ))
    return [
        Theme(id=t["id"], title=t["title"], color=t["color"], subthemes=subs_by_theme.get(t["id"], []))
        for t in theme_rows
    ]


def save_themes(db_path: str, themes: list[Theme]) -> None:
    """Write back subtheme state and replace their reviews in one transaction."""
    conn = get_connection(db_path)
    with conn:
        for theme in themes:
            for st in theme.subthemes:
                conn.execute(
                    "UPDATE subthemes SET status = ?, introduction_date = ? WHERE id = ?",
                    (st.status, st.introduction_date, st.id),
                )
                conn.execute("DELETE FROM reviews WHERE subtheme_id = ?", (st.id,))
                conn.executemany(
                    """INSERT INTO reviews
                    (subtheme_id, number, date, status, completed_at, difficulty, summary)
                    VALUES (?, ?, ?, ?, ?, ?, ?)""",
                    [
                        (st.id, r.number, r.date, r.status, r.completed_at, r.difficulty, r.summary)
                        for r in st.reviews
                    ],
                )
    conn.close()


def run_daily_update(db_path: str, now: datetime | None = None) -> Optional[DailyUpdate]:
    """Run the activation gate against the stored collection and persist the result."""
    result = process_daily_updates(load_themes(db_path), get_last_processed_date(db_path), now=now)
    if result is None:
        return None
    save_themes(db_path, result.updated_themes)
    set_last_processed_date(db_path, result.processed_date)
    logger.info("Daily update stamped %s", result.processed_date)
    return result


def record_review(
    db_path: str,
    subtheme_id: str,
    review_number: int,
    difficulty: str = MEDIUM,
    now: datetime | None = None,
    summary: str = None,
) -> bool:
    """Complete a stored review; returns False when it could not be applied."""
    result = complete_review(
        load_themes(db_path), subtheme_id, review_number, difficulty, now=now, summary=summary,
    )
    if result.awarded:
        save_themes(db_path, result.updated_themes)
    return result.awarded
