"""Seed demo habits and completions.

Usage:
    flask seed-habits             # Two weeks of history
    flask seed-habits --days 30
"""

from __future__ import annotations

from datetime import timedelta

import click
from flask.cli import with_appcontext

from habittracker.core.utils.dates import today, weekday_of
from habittracker.domains.habits import services as habit_services
from habittracker.domains.habits.models.habit_models import Habit

DEMO_HABITS = (
    ("Drink 2L of water", [0, 1, 2, 3, 4, 5, 6]),
    ("Gym", [1, 3, 5]),
    ("Read 20 pages", [0, 2, 4, 6]),
)


def seed_demo_habits(days: int) -> dict:
    start = today() - timedelta(days=days)
    created = []
    for title, week_days in DEMO_HABITS:
        habit = Habit.query.filter_by(title=title).first()
        if not habit:
            habit = habit_services.create_habit(title, week_days, created_on=start)
        created.append(habit)

    toggled = 0
    for offset in range(days):
        day = start + timedelta(days=offset)
        for index, habit in enumerate(created):
            if weekday_of(day) not in habit.week_day_set:
                continue
            # Deterministic pattern: skip roughly every third eligible day per habit
            if (offset + index) % 3 == 0:
                continue
            record = habit_services.find_day(day)
            if record and habit.id in habit_services.list_completions_for_day(record.id):
                continue
            habit_services.toggle_habit(habit.id, day)
            toggled += 1
    return {"habits": len(created), "completions": toggled}


@click.command("seed-habits")
@click.option("--days", "-d", type=click.IntRange(1, 366), default=14, help="Days of history to generate")
@with_appcontext
def seed_habits_command(days: int):
    """Create demo habits backdated DAYS days with a completion history."""
    stats = seed_demo_habits(days)
    click.echo(f"Seeded {stats['habits']} habits and {stats['completions']} completions over {days} days")


def register_commands(app):
    """Register CLI commands with the app."""
    app.cli.add_command(seed_habits_command)
