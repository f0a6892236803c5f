"""Tests for the contribution grid and multi-habit heatmap."""

from __future__ import annotations

from datetime import date

import pytest

from habitpulse.models.enums import DayStatus
from habitpulse.models.habit import Habit
from habitpulse.services.heatmap import (
    ContributionTier,
    build_contribution_grid,
    build_heatmap,
    bucket_label,
    contribution_tier,
    engaged_habits_on,
    intensity_bucket,
)


def _habit(name: str, calendar: dict) -> Habit:
    return Habit(user_id=1, name=name, icon="*", calendar=calendar)


class TestBuckets:
    @pytest.mark.parametrize(
        "count, bucket",
        [(0, 0), (1, 1), (2, 1), (3, 2), (4, 2), (5, 3), (6, 3), (7, 4), (8, 4), (9, 5), (25, 5)],
    )
    def test_count_to_bucket(self, count, bucket):
        assert intensity_bucket(count) == bucket

    def test_labels(self):
        assert bucket_label(0) == "0"
        assert bucket_label(1) == "1-2"
        assert bucket_label(5) == "9+"


class TestContributionGrid:
    def test_tiers(self):
        assert contribution_tier(DayStatus.CHECK_IN) is ContributionTier.FULL
        assert contribution_tier(DayStatus.SPECIAL) is ContributionTier.SPECIAL
        assert contribution_tier(DayStatus.MISS) is ContributionTier.WARNING
        assert contribution_tier(DayStatus.DAY_OFF) is ContributionTier.NEUTRAL
        assert contribution_tier(None) is ContributionTier.NEUTRAL
        assert ContributionTier.SPECIAL.engaged and not ContributionTier.WARNING.engaged

    def test_grid_uses_year_rows(self):
        calendar = {"2024-01-01": "check-in", "2024-12-31": "miss", "2023-12-31": "check-in"}

        rows = build_contribution_grid(calendar, 2024)
        cells = [cell for row in rows for cell in row]

        assert len(rows) == 53
        assert len(cells) == 366
        assert cells[0].day == date(2024, 1, 1)
        assert cells[0].tier is ContributionTier.FULL
        assert cells[-1].status is DayStatus.MISS
        assert sum(1 for cell in cells if cell.status is not None) == 2


class TestHeatmap:
    def test_counts_engaged_habits_per_day(self):
        habits = [
            _habit("Read", {"2024-05-13": "check-in", "2024-05-14": "miss"}),
            _habit("Run", {"2024-05-13": "special", "2024-05-14": "check-in"}),
            _habit("Nap", {"2024-05-13": "day-off"}),
        ]

        rows = build_heatmap(habits, "week", date(2024, 5, 15))
        cells = {cell.day: cell for cell in rows[0]}

        assert len(rows) == 1
        assert cells[date(2024, 5, 13)].engaged_count == 2
        assert cells[date(2024, 5, 13)].engaged_habit_names == ("Read", "Run")
        assert cells[date(2024, 5, 14)].engaged_habit_names == ("Run",)
        assert cells[date(2024, 5, 12)].bucket == 0
        assert cells[date(2024, 5, 13)].label == "1-2"

    def test_nine_habits_hit_top_bucket(self):
        habits = [_habit(f"h{i}", {"2024-05-15": "check-in"}) for i in range(9)]

        rows = build_heatmap(habits, "month", date(2024, 5, 1))
        cell = next(c for row in rows for c in row if c.day == date(2024, 5, 15))

        assert cell.engaged_count == 9
        assert cell.bucket == 5

    def test_no_habits(self):
        rows = build_heatmap([], "month", date(2024, 5, 1))

        assert all(cell.engaged_count == 0 for row in rows for cell in row)

    def test_engaged_habits_on(self):
        read = _habit("Read", {"2024-05-15": "check-in"})
        run = _habit("Run", {"2024-05-15": "miss"})

        assert engaged_habits_on([read, run], date(2024, 5, 15)) == [read]
