"""Command line interface for HabitPulse."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional

import click

from .config import BaseConfig
from .constants.emotions import MOOD_SCALE
from .context import AppContext, create_app_context
from .errors import PersistenceError
from .logging_config import setup_logging
from .models.enums import CalendarView, DayStatus, Mood
from .models.habit import Habit
from .services import emotions, export_csv, heatmap, reports
from .services.clock import FixedClock, SystemClock, to_local
from .services.tracker import Cycle, SetEngaged

DATE = click.DateTime(formats=["%Y-%m-%d"])
VIEW = click.Choice([v.value for v in CalendarView], case_sensitive=False)

STATUS_GLYPHS = {
    None: ".",
    DayStatus.CHECK_IN: "#",
    DayStatus.SPECIAL: "*",
    DayStatus.MISS: "x",
    DayStatus.DAY_OFF: "-",
}


def _as_date(value) -> Optional[date]:
    return value.date() if value is not None else None


def _load_habit(app: AppContext, habit_id: int) -> Habit:
    habit = app.habit_repo.get_habit(habit_id, user_id=app.require_user_id())
    if habit is None:
        raise click.ClickException(f"No habit with id {habit_id}")
    return habit


def _describe(habit: Habit) -> str:
    time = f" @ {habit.time}" if habit.time else ""
    return (
        f"[{habit.id}] {habit.icon} {habit.name}{time}  "
        f"streak {habit.streak} | {habit.consistency}% | {habit.check_ins} check-ins"
    )


class HabitPulseGroup(click.Group):
    """Command group that reports storage failures as ordinary CLI errors."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except PersistenceError as exc:
            raise click.ClickException(str(exc)) from exc


@click.group(cls=HabitPulseGroup)
@click.option("--user", "username", default="me", show_default=True, envvar="HABITPULSE_USER")
@click.option("--today", "pinned_today", type=DATE, default=None, help="Pretend today is this date")
@click.pass_context
def cli(ctx: click.Context, username: str, pinned_today) -> None:
    """Track daily habits, streaks and consistency."""

    config = BaseConfig()
    setup_logging(config)
    clock = FixedClock(pinned_today.date()) if pinned_today else SystemClock()
    app = create_app_context(config, clock=clock)
    app.current_user = app.user_repo.get_or_create(username)
    ctx.obj = app


@cli.command("init-db")
@click.pass_obj
def init_db(app: AppContext) -> None:
    """Create the database schema."""

    click.echo(f"Database ready: {app.config.DATABASE_URL}")


@cli.command("add")
@click.argument("name")
@click.argument("icon")
@click.option("--time", default=None, help="Scheduled time, HH:MM")
@click.pass_obj
def add_habit(app: AppContext, name: str, icon: str, time: Optional[str]) -> None:
    """Create a habit."""

    try:
        habit = app.tracker.add_habit(app.require_user_id(), name, icon, time)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    click.echo(_describe(habit))


@cli.command("list")
@click.pass_obj
def list_habits(app: AppContext) -> None:
    """Show habits with their cached stats."""

    habits = app.tracker.list_habits(app.require_user_id())
    click.echo(f"{len(habits)} HABITS")
    for habit in habits:
        click.echo(_describe(habit))


@cli.command("toggle")
@click.argument("habit_id", type=int)
@click.option("--date", "day", type=DATE, default=None, help="Day to change (default today)")
@click.option("--cycle", "mode", flag_value="cycle", default=True, help="Advance the status cycle")
@click.option("--engage", "mode", flag_value="engage", help="Toggle check-in")
@click.option("--special", "mode", flag_value="special", help="Toggle special check-in")
@click.option("--view", type=VIEW, default=None, help="Window used for consistency")
@click.pass_obj
def toggle(app: AppContext, habit_id: int, day, mode: str, view: Optional[str]) -> None:
    """Change one day of a habit and refresh its stats."""

    habit = _load_habit(app, habit_id)
    intent = Cycle() if mode == "cycle" else SetEngaged(special=mode == "special")
    result = app.tracker.toggle_day(
        habit,
        _as_date(day) or app.tracker.today(),
        intent,
        user_name=app.current_user.label if app.current_user else "",
        view=view or app.view,
    )
    if not result.committed:
        raise click.ClickException(f"Change not saved: {result.error}")
    status = result.status.value if result.status else "unrecorded"
    click.echo(f"{status}  ->  {_describe(result.habit)}")
    if result.activity is not None:
        click.echo(f"Logged {result.activity.type.value} activity")


@cli.command("remove")
@click.argument("habit_id", type=int)
@click.pass_obj
def remove(app: AppContext, habit_id: int) -> None:
    """Delete a habit (its activity history is kept)."""

    app.tracker.remove_habit(habit_id, user_id=app.require_user_id())
    click.echo(f"Removed habit {habit_id}")


@cli.command("heatmap")
@click.option("--view", type=VIEW, default="year", show_default=True)
@click.option("--date", "reference", type=DATE, default=None)
@click.option("--png", "png_path", type=click.Path(path_type=Path), default=None)
@click.pass_obj
def show_heatmap(app: AppContext, view: str, reference, png_path: Optional[Path]) -> None:
    """Habits completed per day across all habits."""

    habits = app.tracker.list_habits(app.require_user_id())
    rows = heatmap.build_heatmap(habits, view, _as_date(reference) or app.tracker.today())
    if png_path is not None:
        click.echo(f"Heatmap written: {reports.export_heatmap_png(rows, output_path=png_path)}")
        return
    for row in rows:
        cells = "".join(str(cell.bucket) for cell in row)
        click.echo(f"{row[0].day.isoformat()}  {cells}")


@cli.command("contributions")
@click.argument("habit_id", type=int)
@click.option("--year", type=int, default=None)
@click.option("--png", "png_path", type=click.Path(path_type=Path), default=None)
@click.pass_obj
def contributions(app: AppContext, habit_id: int, year: Optional[int], png_path: Optional[Path]) -> None:
    """A habit's year grid."""

    habit = _load_habit(app, habit_id)
    rows = heatmap.build_contribution_grid(habit.calendar, year or app.tracker.today().year)
    if png_path is not None:
        path = reports.export_contribution_png(rows, output_path=png_path, title=habit.name)
        click.echo(f"Contribution graph written: {path}")
        return
    for row in rows:
        cells = "".join(STATUS_GLYPHS[cell.status] for cell in row)
        click.echo(f"{row[0].day.isoformat()}  {cells}")


@cli.command("activities")
@click.option("--limit", type=int, default=None)
@click.pass_obj
def activities(app: AppContext, limit: Optional[int]) -> None:
    """Recent check-ins."""

    for activity in app.tracker.recent_activities(app.require_user_id(), limit):
        click.echo(
            f"{to_local(activity.completed_at):%Y-%m-%d %H:%M}  {activity.habit_icon} "
            f"{activity.habit_name} ({activity.type.value})"
        )


@cli.command("feel")
@click.argument("mood", type=click.Choice([m.value for m in MOOD_SCALE], case_sensitive=False))
@click.argument("emotion")
@click.option("--intensity", type=int, default=5, show_default=True)
@click.option("--note", default="")
@click.pass_obj
def feel(app: AppContext, mood: str, emotion: str, intensity: int, note: str) -> None:
    """Log how you feel right now."""

    canonical = next(m for m in Mood if m.value.lower() == mood.lower())
    try:
        record = emotions.log_emotion(
            app.emotion_repo,
            user_id=app.require_user_id(),
            mood=canonical,
            emotion=emotion,
            intensity=intensity,
            note=note,
            clock=app.clock,
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    click.echo(f"Logged {record.emotion} ({record.intensity}/10)")


@cli.command("trend")
@click.option("--days", type=int, default=7, show_default=True)
@click.pass_obj
def trend(app: AppContext, days: int) -> None:
    """Emotion intensity and completed habits for the last few days."""

    today = app.tracker.today()
    user_id = app.require_user_id()
    records = app.emotion_repo.list_emotions(user_id, since=emotions.trend_since(today, days))
    habits = app.tracker.list_habits(user_id)
    for point in emotions.emotion_trend(records, habits, today=today, days=days):
        feeling = f"{point.emotion} {point.intensity}" if point.emotion else "-"
        click.echo(f"{point.day.isoformat()}  {feeling:<16} {', '.join(point.completed_habits)}")


@cli.command("export")
@click.argument("habit_id", type=int)
@click.argument("output", type=click.Path(path_type=Path))
@click.pass_obj
def export(app: AppContext, habit_id: int, output: Path) -> None:
    """Write a habit's calendar to CSV."""

    habit = _load_habit(app, habit_id)
    click.echo(f"Export written: {export_csv.export_calendar_csv(habit=habit, output_path=output)}")


def main() -> None:
    cli(prog_name="habitpulse")


if __name__ == "__main__":  # pragma: no cover
    main()
