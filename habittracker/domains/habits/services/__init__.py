"""Habit services: habit store, day store, toggle, day view and summary."""

from habittracker.domains.habits.services.day_service import (
    STATE_COMPLETED,
    STATE_UNCOMPLETED,
    add_completion,
    find_completion,
    find_day,
    get_or_create_day,
    list_completions_for_day,
    remove_completion,
    toggle_habit,
)
from habittracker.domains.habits.services.eligibility_service import get_day_summary
from habittracker.domains.habits.services.habit_service import (
    create_habit,
    find_possible_habits,
    get_habit,
)
from habittracker.domains.habits.services.summary_service import get_summary

__all__ = [
    "STATE_COMPLETED",
    "STATE_UNCOMPLETED",
    "add_completion",
    "create_habit",
    "find_completion",
    "find_day",
    "find_possible_habits",
    "get_day_summary",
    "get_habit",
    "get_or_create_day",
    "get_summary",
    "list_completions_for_day",
    "remove_completion",
    "toggle_habit",
]
