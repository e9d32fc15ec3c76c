"""Tests for the review scheduler."""

from datetime import date, datetime, timedelta

import pytest

from flagmaster.db.models import Item, ReviewCard
from flagmaster.review.scheduler import ReviewScheduler


class TestCards:
    """Tests for lazy card creation."""

    def test_get_or_create_defaults(self, scheduler):
        card = scheduler.get_or_create("FR")
        assert card == ReviewCard(code="FR")
        assert card.ease_factor == 2.5
        assert card.interval_days == 0
        assert card.repetitions == 0
        assert card.next_review is None
        assert card.lapses == 0

    def test_get_or_create_returns_same_card(self, scheduler):
        assert scheduler.get_or_create("FR") is scheduler.get_or_create("FR")

    def test_peek_does_not_create(self, scheduler):
        scheduler.peek("FR")
        scheduler.is_due("FR")
        assert "FR" not in scheduler.cards


class TestRecordCorrect:
    """Tests for record_correct."""

    def test_three_good_answers(self, scheduler, today):
        """A fresh item answered well three times reaches a 15 day interval."""
        for _ in range(3):
            card = scheduler.record_correct("FR", quality=4, today=today)

        assert card.repetitions == 3
        assert card.interval_days == round(6 * card.ease_factor) == 15
        assert card.next_review == datetime(2024, 3, 16)
        assert scheduler.is_due("FR", today) is False

    def test_last_reviewed_follows_injected_day(self, scheduler, today):
        card = scheduler.record_correct("FR", today=today)
        assert card.last_reviewed == datetime(2024, 3, 1)

        card = scheduler.record_incorrect("DE", today=datetime(2024, 3, 1, 18, 30))
        assert card.last_reviewed == datetime(2024, 3, 1, 18, 30)

    def test_last_reviewed_defaults_to_now(self, scheduler):
        before = datetime.now()
        card = scheduler.record_correct("FR")
        assert before <= card.last_reviewed <= datetime.now()

    @pytest.mark.parametrize("quality", [3, 4, 5])
    def test_ease_never_below_floor(self, quality, today):
        scheduler = ReviewScheduler(cards={"FR": ReviewCard(code="FR", ease_factor=1.3)})
        for _ in range(5):
            card = scheduler.record_correct("FR", quality=quality, today=today)
            assert card.ease_factor >= 1.3


class TestRecordIncorrect:
    """Tests for record_incorrect."""

    def test_resets_and_counts_lapse(self, scheduler, today):
        for _ in range(3):
            scheduler.record_correct("FR", today=today)

        card = scheduler.record_incorrect("FR", today=today)
        assert card.repetitions == 0
        assert card.interval_days == 1
        assert card.lapses == 1
        assert card.ease_factor == 2.3
        assert card.next_review == datetime(2024, 3, 2)

    def test_lapses_increment_by_one_each_time(self, scheduler, today):
        for expected in range(1, 6):
            card = scheduler.record_incorrect("FR", today=today)
            assert card.lapses == expected
            assert card.repetitions == 0
            assert card.interval_days == 1

    def test_repeated_misses_stop_at_floor(self, scheduler, today):
        for _ in range(10):
            card = scheduler.record_incorrect("FR", today=today)
        assert card.ease_factor == 1.3


class TestIsDue:
    """Tests for the due policy."""

    def test_new_item_not_due_by_default(self, scheduler, today):
        assert scheduler.is_new("FR")
        assert scheduler.is_due("FR", today) is False

    def test_new_item_due_with_policy(self, today):
        scheduler = ReviewScheduler(count_new_as_due=True)
        assert scheduler.is_due("FR", today) is True

    def test_reviewed_item_without_date_is_due(self, today):
        scheduler = ReviewScheduler(cards={"FR": ReviewCard(code="FR", repetitions=2, interval_days=6)})
        assert scheduler.is_due("FR", today) is True

    def test_due_on_review_day_regardless_of_time(self, scheduler, today):
        scheduler.record_correct("FR", today=today)  # Next review 2024-03-02
        assert scheduler.is_due("FR", datetime(2024, 3, 1, 23, 59)) is False
        assert scheduler.is_due("FR", datetime(2024, 3, 2, 0, 1)) is True
        assert scheduler.is_due("FR", date(2024, 3, 2)) is True
        assert scheduler.is_due("FR", date(2024, 3, 20)) is True

    def test_lapsed_item_due_tomorrow_not_new(self, scheduler, today):
        scheduler.record_incorrect("FR", today=today)
        assert scheduler.is_new("FR") is False
        assert scheduler.is_due("FR", today) is False
        assert scheduler.is_due("FR", today + timedelta(days=1)) is True

    def test_due_and_new_partitions(self, scheduler, small_catalog, today):
        scheduler.record_incorrect("A", today=today - timedelta(days=2))
        scheduler.record_correct("B", today=today)

        assert [item.code for item in scheduler.due_items(small_catalog, today)] == ["A"]
        assert [item.code for item in scheduler.new_items(small_catalog)] == ["C", "D"]


class TestSummary:
    """Tests for the dashboard summary."""

    def test_summary_counts(self, small_catalog, today):
        scheduler = ReviewScheduler(
            cards={
                "A": ReviewCard(code="A", repetitions=4, interval_days=30, next_review=datetime(2024, 3, 30)),
                "B": ReviewCard(code="B", repetitions=1, interval_days=1, next_review=datetime(2024, 3, 1)),
                "C": ReviewCard(code="C", repetitions=0, interval_days=1, lapses=3, next_review=datetime(2024, 3, 5)),
            }
        )
        summary = scheduler.summary(small_catalog, today)

        assert summary.total == 4
        assert summary.mastered == 1
        assert summary.learning == 1
        assert summary.new == 1
        assert summary.struggling == 1
        assert summary.due == 1
        assert summary.by_category == {"X": 2, "Y": 2}


class TestPersistence:
    """Tests for loading and saving through a card store."""

    def test_save_and_load_round_trip(self, temp_db, today):
        scheduler = ReviewScheduler(temp_db)
        scheduler.record_correct("FR", today=today)
        scheduler.record_incorrect("IT", today=today)
        scheduler.save()

        reloaded = ReviewScheduler(temp_db)
        assert reloaded.load() == 2
        assert reloaded.cards["FR"].repetitions == 1
        assert reloaded.cards["FR"].next_review == datetime(2024, 3, 2)
        assert reloaded.cards["IT"].lapses == 1

    def test_save_selected_codes(self, temp_db, today):
        scheduler = ReviewScheduler(temp_db)
        scheduler.record_correct("FR", today=today)
        scheduler.record_correct("IT", today=today)
        scheduler.save(["FR"])

        assert temp_db.get_card("FR") is not None
        assert temp_db.get_card("IT") is None

    def test_reset_forgets_everything(self, temp_db, today):
        scheduler = ReviewScheduler(temp_db)
        scheduler.record_correct("FR", today=today)
        scheduler.save()

        scheduler.reset()
        assert scheduler.cards == {}
        assert temp_db.count_cards() == 0

    def test_without_store_is_noop(self, scheduler, today):
        scheduler.record_correct("FR", today=today)
        scheduler.save()
        assert scheduler.load() == 0
        assert "FR" in scheduler.cards

    def test_items_are_plain_codes(self, scheduler, today):
        """Any hashable code works, the scheduler never needs the Item."""
        item = Item(code="PL", name="Poland")
        scheduler.record_correct(item.code, today=today)
        assert scheduler.cards["PL"].repetitions == 1
