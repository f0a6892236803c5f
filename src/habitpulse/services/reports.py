"""Reporting utilities: render heatmap and contribution grids to images."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.patches import Patch, Rectangle

from .heatmap import HEATMAP_BUCKETS, ContributionCell, ContributionTier, HeatmapCell

WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

# Light grey for "nothing", then increasingly saturated greens
BUCKET_COLORS = ["#E5E6E6", "#DCFCE7", "#BBF7D0", "#86EFAC", "#4ADE80", "#22C55E"]
TIER_COLORS = {
    ContributionTier.NEUTRAL: "#E5E6E6",
    ContributionTier.WARNING: "#FCA5A5",
    ContributionTier.FULL: "#22C55E",
    ContributionTier.SPECIAL: "#16A34A",
}


class ReportRenderer(Protocol):
    """Protocol describing renderer behavior."""

    def render(self, figure: Figure, *, output_path: Path) -> None:  # pragma: no cover - interface
        ...


def _weekday_row(day) -> int:
    # Sunday on top
    return (day.weekday() + 1) % 7


def _draw_grid(ax, rows: Sequence[Sequence], color_for) -> None:
    for column, row in enumerate(rows):
        for cell in row:
            ax.add_patch(
                Rectangle(
                    (column, 6 - _weekday_row(cell.day)),
                    0.9,
                    0.9,
                    facecolor=color_for(cell),
                    edgecolor="none",
                )
            )

    ax.set_xlim(-0.2, max(len(rows), 1) + 0.1)
    ax.set_ylim(-0.2, 7.1)
    ax.set_aspect("equal")
    ax.set_yticks([6 - i + 0.45 for i in range(7)])
    ax.set_yticklabels(WEEKDAY_LABELS, fontsize=7, color="#6B7280")

    # Label a column with the month whenever a new month starts in it
    ticks, labels, seen = [], [], set()
    for column, row in enumerate(rows):
        for cell in row:
            if cell.day.month not in seen and cell.day.day <= 7:
                seen.add(cell.day.month)
                ticks.append(column + 0.45)
                labels.append(MONTH_LABELS[cell.day.month - 1])
                break
    ax.set_xticks(ticks)
    ax.set_xticklabels(labels, fontsize=7, color="#6B7280")
    ax.tick_params(length=0)
    for spine in ax.spines.values():
        spine.set_visible(False)


def build_heatmap_figure(
    rows: Sequence[Sequence[HeatmapCell]], *, title: str = "Habits completed per day"
) -> Figure:
    """Multi-habit heatmap: one column per week row, coloured by intensity bucket."""

    fig, ax = plt.subplots(figsize=(max(3, len(rows) * 0.22 + 1.5), 2.6))
    if not rows:
        ax.text(0.5, 0.5, "No days in range", ha="center", va="center", fontsize=12, color="#666")
        ax.axis("off")
        return fig

    _draw_grid(ax, rows, lambda cell: BUCKET_COLORS[cell.bucket])
    ax.set_title(title, fontsize=11, fontweight="bold")
    ax.legend(
        handles=[
            Patch(facecolor=color, label=f"{label} habits")
            for color, (_, _, label) in zip(BUCKET_COLORS, HEATMAP_BUCKETS)
        ],
        loc="upper center",
        bbox_to_anchor=(0.5, -0.12),
        ncol=len(HEATMAP_BUCKETS),
        fontsize=7,
        frameon=False,
    )
    fig.tight_layout()
    return fig


def build_contribution_figure(
    rows: Sequence[Sequence[ContributionCell]], *, title: str = "Contributions"
) -> Figure:
    """Single-habit year grid coloured by status tier."""

    fig, ax = plt.subplots(figsize=(max(3, len(rows) * 0.22 + 1.5), 2.6))
    _draw_grid(ax, rows, lambda cell: TIER_COLORS[cell.tier])
    ax.set_title(title, fontsize=11, fontweight="bold")
    ax.legend(
        handles=[
            Patch(facecolor=TIER_COLORS[ContributionTier.NEUTRAL], label="Not recorded"),
            Patch(facecolor=TIER_COLORS[ContributionTier.WARNING], label="Missed"),
            Patch(facecolor=TIER_COLORS[ContributionTier.FULL], label="Done"),
            Patch(facecolor=TIER_COLORS[ContributionTier.SPECIAL], label="Special"),
        ],
        loc="upper center",
        bbox_to_anchor=(0.5, -0.12),
        ncol=4,
        fontsize=7,
        frameon=False,
    )
    fig.tight_layout()
    return fig


def save_figure(
    fig: Figure, output_path: Path, renderer: ReportRenderer | None = None
) -> Path:
    """Write ``fig`` as PNG (or hand it to ``renderer``) and close it."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    if renderer is not None:
        renderer.render(fig, output_path=output_path)
    else:
        fig.savefig(output_path, bbox_inches="tight", dpi=120)
    plt.close(fig)
    return output_path


def export_heatmap_png(
    rows: Sequence[Sequence[HeatmapCell]],
    *,
    output_path: Path,
    renderer: ReportRenderer | None = None,
) -> Path:
    """Render the heatmap to PNG and return the path."""

    return save_figure(build_heatmap_figure(rows), output_path, renderer)


def export_contribution_png(
    rows: Sequence[Sequence[ContributionCell]],
    *,
    output_path: Path,
    title: str = "Contributions",
    renderer: ReportRenderer | None = None,
) -> Path:
    """Render a habit's contribution grid to PNG and return the path."""

    return save_figure(build_contribution_figure(rows, title=title), output_path, renderer)
