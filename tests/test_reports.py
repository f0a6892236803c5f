"""Tests for PNG chart rendering."""

from __future__ import annotations

from datetime import date

from habitpulse.models import Habit
from habitpulse.services import reports
from habitpulse.services.heatmap import HEATMAP_BUCKETS, build_contribution_grid, build_heatmap


def _habits() -> list[Habit]:
    return [
        Habit(user_id=1, name="Read", icon="📚", calendar={"2024-05-13": "check-in"}),
        Habit(user_id=1, name="Run", icon="🏃", calendar={"2024-05-13": "special", "2024-05-14": "miss"}),
    ]


def test_heatmap_png_written(tmp_path):
    rows = build_heatmap(_habits(), "year", date(2024, 5, 15))

    output = reports.export_heatmap_png(rows, output_path=tmp_path / "charts" / "heatmap.png")

    assert output.exists()
    assert output.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_contribution_png_written(tmp_path):
    rows = build_contribution_grid(_habits()[1].calendar, 2024)

    output = reports.export_contribution_png(rows, output_path=tmp_path / "run.png", title="Run")

    assert output.exists()
    assert output.stat().st_size > 0


def test_empty_heatmap_still_renders(tmp_path):
    output = reports.export_heatmap_png((), output_path=tmp_path / "empty.png")

    assert output.exists()


def test_custom_renderer_receives_figure(tmp_path):
    seen = {}

    class Recorder:
        def render(self, figure, *, output_path):
            seen["axes"] = len(figure.axes)
            seen["path"] = output_path

    rows = build_heatmap(_habits(), "month", date(2024, 5, 1))
    output = reports.export_heatmap_png(rows, output_path=tmp_path / "x.png", renderer=Recorder())

    assert seen == {"axes": 1, "path": output}
    assert not output.exists()


def test_bucket_colours_cover_every_bucket():
    assert len(reports.BUCKET_COLORS) == len(HEATMAP_BUCKETS)
