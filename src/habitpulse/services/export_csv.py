"""CSV export helpers for HabitPulse."""

from __future__ import annotations

import csv
from pathlib import Path

from ..models.habit import Habit
from .day_status import recorded_days


def export_calendar_csv(*, habit: Habit, output_path: Path) -> Path:
    """Write a habit's calendar to CSV at `output_path`.

    Columns are deterministic: date, status. Rows are sorted by date and
    malformed or unrecorded entries are skipped. Returns the path written.
    """

    headers = ["date", "status"]
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=headers, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for day, status in recorded_days(habit.calendar):
            writer.writerow({"date": day.isoformat(), "status": status.value})

    return output_path
