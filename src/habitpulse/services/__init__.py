"""Service module exports."""

from . import (
    calendar_window,
    clock,
    day_status,
    emotions,
    export_csv,
    habits,
    heatmap,
    reports,
    tracker,
)

__all__ = [
    "calendar_window",
    "clock",
    "day_status",
    "emotions",
    "export_csv",
    "habits",
    "heatmap",
    "reports",
    "tracker",
]
