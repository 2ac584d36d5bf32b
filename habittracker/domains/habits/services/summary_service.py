"""Per-day aggregate of possible vs. completed habits across recorded days."""

from __future__ import annotations

from bisect import bisect_right
from collections import defaultdict
from datetime import date
from typing import Dict, List

from sqlalchemy import func

from habittracker.core.utils.dates import weekday_of
from habittracker.domains.habits.models.habit_models import Day, DayHabit, Habit, HabitWeekDay
from habittracker.extensions import db


def _creation_dates_by_weekday() -> Dict[int, List[date]]:
    rows = (
        db.session.query(HabitWeekDay.week_day, Habit.created_at)
        .join(Habit, Habit.id == HabitWeekDay.habit_id)
        .all()
    )
    schedule: Dict[int, List[date]] = defaultdict(list)
    for row in rows:
        schedule[row.week_day].append(row.created_at)
    for created in schedule.values():
        created.sort()
    return schedule


def get_summary() -> List[dict]:
    """One entry per Day row, ascending by date.

    Dates without a Day row are absent even if habits were possible on them.
    """
    day_rows = (
        db.session.query(Day.date, func.count(DayHabit.id).label("completed"))
        .outerjoin(DayHabit, DayHabit.day_id == Day.id)
        .group_by(Day.id, Day.date)
        .order_by(Day.date)
        .all()
    )
    schedule = _creation_dates_by_weekday()

    summary = []
    for row in day_rows:
        created = schedule.get(weekday_of(row.date), [])
        summary.append(
            {
                "date": row.date,
                "completed_count": int(row.completed or 0),
                "possible_count": bisect_right(created, row.date),
            }
        )
    return summary
