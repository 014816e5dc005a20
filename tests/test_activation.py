# tests/test_activation.py
from datetime import datetime

from conftest import make_theme
from spaced_review.activation import build_initial_reviews, has_introduction_on, process_daily_updates
from spaced_review.models import Review, Subtheme, Theme


def test_activates_first_queued_subtheme(jan_first):
    themes = [make_theme("t1", "s1", "s2")]
    result = process_daily_updates(themes, "2024-12-31", now=jan_first)

    assert result is not None
    assert result.processed_date == "2025-01-01"
    first, second = result.updated_themes[0].subthemes
    assert first.status == "active"
    assert first.introduction_date == "2025-01-01"
    assert len(first.reviews) == 5
    assert second.status == "queue"
    assert second.reviews == []


def test_medium_schedule_is_cumulative(jan_first):
    result = process_daily_updates([make_theme("t1", "s1")], "2024-12-31", now=jan_first)
    reviews = result.updated_themes[0].subthemes[0].reviews
    assert [r.date for r in reviews] == [
        "2025-01-02", "2025-01-04", "2025-01-08", "2025-01-16", "2025-01-31",
    ]
    assert [r.number for r in reviews] == [1, 2, 3, 4, 5]
    assert all(r.status == "pending" for r in reviews)


def test_leap_year_schedule():
    result = process_daily_updates([make_theme("t1", "s1")], "2024-02-27", now=datetime(2024, 2, 28))
    reviews = result.updated_themes[0].subthemes[0].reviews
    assert reviews[0].date == "2024-02-29"
    assert reviews[1].date == "2024-03-02"


def test_only_one_activation_across_themes(jan_first):
    themes = [make_theme("t1", "a"), make_theme("t2", "b"), make_theme("t3", "c")]
    result = process_daily_updates(themes, "2024-12-31", now=jan_first)

    statuses = [st.status for t in result.updated_themes for st in t.subthemes]
    assert statuses == ["active", "queue", "queue"]


def test_skips_themes_without_queue(jan_first):
    done = make_theme("t1", "a", status="completed")
    themes = [done, make_theme("t2", "b")]
    result = process_daily_updates(themes, "2024-12-31", now=jan_first)
    assert result.updated_themes[0].subthemes[0].status == "completed"
    assert result.updated_themes[1].subthemes[0].status == "active"


def test_noop_when_already_introduced_and_stamped(jan_first):
    themes = [make_theme("t1", "s1", "s2")]
    first = process_daily_updates(themes, "2024-12-31", now=jan_first)
    second = process_daily_updates(first.updated_themes, first.processed_date, now=jan_first)
    assert second is None
    third = process_daily_updates(first.updated_themes, first.processed_date, now=jan_first.replace(hour=22))
    assert third is None


def test_intro_today_with_stale_stamp_only_advances_date(jan_first):
    introduced = Subtheme(id="s1", title="S1", status="active", introduction_date="2025-01-01",
                          reviews=build_initial_reviews(jan_first))
    themes = [Theme(id="t1", title="T1", subthemes=[introduced, Subtheme(id="s2", title="S2")])]

    result = process_daily_updates(themes, "2024-12-31", now=jan_first)

    assert result is not None
    assert result.processed_date == "2025-01-01"
    assert result.updated_themes == themes
    assert result.updated_themes[0].subthemes[1].status == "queue"


def test_nothing_queued_with_stale_stamp_advances_date(jan_first):
    themes = [make_theme("t1", "a", status="completed")]
    result = process_daily_updates(themes, "2024-12-31", now=jan_first)
    assert result is not None
    assert result.processed_date == "2025-01-01"
    assert result.updated_themes == themes


def test_nothing_queued_and_stamped_is_noop(jan_first):
    themes = [make_theme("t1", "a", status="completed")]
    assert process_daily_updates(themes, "2025-01-01", now=jan_first) is None


def test_empty_collection(jan_first):
    assert process_daily_updates([], "2025-01-01", now=jan_first) is None
    result = process_daily_updates([], None, now=jan_first)
    assert result.updated_themes == []
    assert result.processed_date == "2025-01-01"


def test_next_day_activates_next_subtheme(jan_first):
    first = process_daily_updates([make_theme("t1", "s1", "s2")], None, now=jan_first)
    second = process_daily_updates(first.updated_themes, first.processed_date, now=datetime(2025, 1, 2, 8))
    subs = second.updated_themes[0].subthemes
    assert subs[0].introduction_date == "2025-01-01"
    assert subs[1].status == "active"
    assert subs[1].introduction_date == "2025-01-02"
    assert subs[1].reviews[0].date == "2025-01-03"


def test_input_is_not_mutated(jan_first):
    themes = [make_theme("t1", "s1")]
    result = process_daily_updates(themes, None, now=jan_first)
    assert themes[0].subthemes[0].status == "queue"
    assert themes[0].subthemes[0].reviews == []
    assert result.updated_themes[0] is not themes[0]


def test_has_introduction_on():
    themes = [make_theme("t1", "a"), Theme(id="t2", title="T2", subthemes=[
        Subtheme(id="b", title="B", status="active", introduction_date="2025-01-01",
                 reviews=[Review(number=1, date="2025-01-02")]),
    ])]
    assert has_introduction_on(themes, "2025-01-01")
    assert not has_introduction_on(themes, "2025-01-02")
