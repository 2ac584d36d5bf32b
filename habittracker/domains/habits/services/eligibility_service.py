"""Possible vs. completed habits for a single day."""

from __future__ import annotations

from datetime import date

from habittracker.core.utils.dates import start_of_day
from habittracker.domains.habits.services import day_service, habit_service


def get_day_summary(day: date) -> dict:
    """Read-only view of one calendar day.

    Completed ids are passed through as recorded, even for a habit that is not
    possible on that day.
    """
    day = start_of_day(day)
    possible = habit_service.find_possible_habits(day)
    record = day_service.find_day(day)
    completed = day_service.list_completions_for_day(record.id) if record else []
    return {
        "possible_habits": possible,
        "completed_habit_ids": completed,
    }
