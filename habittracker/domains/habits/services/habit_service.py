"""Habit definitions and their weekday schedules."""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional

from habittracker.core.errors import ValidationError
from habittracker.core.utils.dates import start_of_day, weekday_of
from habittracker.domains.habits.models.habit_models import Habit, HabitWeekDay
from habittracker.extensions import db

logger = logging.getLogger(__name__)


def _normalize_week_days(week_days: Iterable[int]) -> List[int]:
    normalized = set()
    for value in week_days or ():
        # bool is an int subclass; True must not sneak in as Monday
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"week day must be an integer, got {value!r}")
        if value < 0 or value > 6:
            raise ValidationError(f"week day out of range: {value}")
        normalized.add(value)
    return sorted(normalized)


def create_habit(
    title: str,
    week_days: Iterable[int],
    *,
    created_on: Optional[date] = None,
) -> Habit:
    title_norm = (title or "").strip()
    if not title_norm:
        raise ValidationError("title is required")
    days = _normalize_week_days(week_days)

    habit = Habit(
        title=title_norm,
        created_at=start_of_day(created_on),
        week_days=[HabitWeekDay(week_day=wd) for wd in days],
    )
    db.session.add(habit)
    db.session.commit()
    logger.info("Created habit %s (%r) on weekdays %s", habit.id, habit.title, days)
    return habit


def get_habit(habit_id: str) -> Optional[Habit]:
    return db.session.get(Habit, habit_id)


def find_possible_habits(day: date) -> List[Habit]:
    """Habits created on or before ``day`` and scheduled for its weekday."""
    day = start_of_day(day)
    return (
        Habit.query.filter(Habit.created_at <= day)
        .filter(Habit.week_days.any(HabitWeekDay.week_day == weekday_of(day)))
        .order_by(Habit.created_at, Habit.title)
        .all()
    )
