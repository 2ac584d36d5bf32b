"""Per-day completion records and the toggle write path."""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from habittracker.core.errors import ConflictError, NotFoundError
from habittracker.core.utils.dates import start_of_day
from habittracker.domains.habits.models.habit_models import Day, DayHabit, Habit
from habittracker.extensions import db

logger = logging.getLogger(__name__)

STATE_COMPLETED = "completed"
STATE_UNCOMPLETED = "uncompleted"


def find_day(day: date) -> Optional[Day]:
    return Day.query.filter_by(date=start_of_day(day)).first()


def get_or_create_day(day: date) -> Day:
    """Return the Day row for ``day``, inserting it when missing.

    Does not commit. A concurrent insert for the same date loses on the unique
    constraint; the savepoint is rolled back and the winner's row returned.
    """
    day = start_of_day(day)
    existing = find_day(day)
    if existing:
        return existing
    record = Day(date=day)
    try:
        with db.session.begin_nested():
            db.session.add(record)
    except IntegrityError:
        logger.debug("Day %s created concurrently; re-fetching", day)
        existing = find_day(day)
        if existing is None:
            raise
        return existing
    return record


def find_completion(day_id: str, habit_id: str) -> Optional[DayHabit]:
    return DayHabit.query.filter_by(day_id=day_id, habit_id=habit_id).first()


def add_completion(day_id: str, habit_id: str) -> DayHabit:
    """Insert a completion; raises ConflictError if the pair already exists. Does not commit."""
    completion = DayHabit(day_id=day_id, habit_id=habit_id)
    try:
        with db.session.begin_nested():
            db.session.add(completion)
    except IntegrityError as exc:
        raise ConflictError(f"habit {habit_id} already completed on day {day_id}") from exc
    return completion


def remove_completion(completion_id: str) -> None:
    DayHabit.query.filter_by(id=completion_id).delete(synchronize_session="fetch")


def list_completions_for_day(day_id: str) -> List[str]:
    rows = (
        db.session.query(DayHabit.habit_id)
        .filter(DayHabit.day_id == day_id)
        .distinct()
        .all()
    )
    return [row.habit_id for row in rows]


def toggle_habit(habit_id: str, day: Optional[date] = None) -> str:
    """Complete ``habit_id`` on ``day`` (default today), or undo an existing completion."""
    if db.session.get(Habit, habit_id) is None:
        raise NotFoundError(f"habit {habit_id} does not exist")

    record = get_or_create_day(start_of_day(day))
    existing = find_completion(record.id, habit_id)
    if existing:
        remove_completion(existing.id)
        state = STATE_UNCOMPLETED
    else:
        try:
            add_completion(record.id, habit_id)
        except ConflictError:
            # Another request completed it first; the pair exists either way.
            logger.debug("Completion for habit %s on %s already present", habit_id, record.date)
        state = STATE_COMPLETED
    db.session.commit()
    logger.info("Habit %s %s on %s", habit_id, state, record.date)
    return state
