"""Tests for the day store and the toggle write path."""

import threading
import uuid
from collections import Counter
from datetime import date
from unittest.mock import patch

import pytest

pytestmark = pytest.mark.integration

from habittracker import create_app
from habittracker.config import TestingConfig, _engine_options_from_uri
from habittracker.core.errors import ConflictError, NotFoundError
from habittracker.domains.habits.models.habit_models import Day, DayHabit
from habittracker.domains.habits.services import (
    STATE_COMPLETED,
    STATE_UNCOMPLETED,
    add_completion,
    create_habit,
    day_service,
    find_completion,
    find_day,
    get_or_create_day,
    list_completions_for_day,
    remove_completion,
    toggle_habit,
)
from habittracker.extensions import db

MONDAY = date(2024, 1, 15)


@pytest.fixture
def habit(app):
    return create_habit("Meditate", [0, 1, 2, 3, 4, 5, 6], created_on=MONDAY)


class TestDayStore:
    def test_find_day_absent(self, app):
        assert find_day(MONDAY) is None

    def test_get_or_create_day_is_idempotent(self, app):
        first = get_or_create_day(MONDAY)
        db.session.commit()
        second = get_or_create_day(MONDAY)

        assert first.id == second.id
        assert find_day(MONDAY).id == first.id
        assert Day.query.filter_by(date=MONDAY).count() == 1

    def test_get_or_create_day_repeated_calls_one_row(self, app):
        ids = {get_or_create_day(MONDAY).id for _ in range(5)}
        db.session.commit()

        assert len(ids) == 1
        assert Day.query.count() == 1

    def test_get_or_create_day_recovers_from_concurrent_insert(self, app):
        """The row inserted by another writer is returned instead of a duplicate."""
        winner = Day(date=MONDAY)
        db.session.add(winner)
        db.session.commit()

        real_find_day = day_service.find_day
        calls = []

        def stale_then_real(day):
            calls.append(day)
            if len(calls) == 1:
                return None
            return real_find_day(day)

        with patch.object(day_service, "find_day", side_effect=stale_then_real):
            result = get_or_create_day(MONDAY)
        db.session.commit()

        assert len(calls) == 2
        assert result.id == winner.id
        assert Day.query.count() == 1

    def test_add_find_remove_completion(self, app, habit):
        day = get_or_create_day(MONDAY)
        completion = add_completion(day.id, habit.id)
        db.session.commit()

        assert find_completion(day.id, habit.id).id == completion.id
        assert list_completions_for_day(day.id) == [habit.id]

        remove_completion(completion.id)
        db.session.commit()

        assert find_completion(day.id, habit.id) is None
        assert list_completions_for_day(day.id) == []

    def test_add_completion_duplicate_conflicts(self, app, habit):
        day = get_or_create_day(MONDAY)
        add_completion(day.id, habit.id)
        db.session.commit()

        with pytest.raises(ConflictError, match="conflict"):
            add_completion(day.id, habit.id)
        db.session.commit()

        assert DayHabit.query.filter_by(day_id=day.id, habit_id=habit.id).count() == 1


class TestToggleHabit:
    def test_toggle_creates_day_lazily(self, app, habit):
        assert find_day(MONDAY) is None

        assert toggle_habit(habit.id, MONDAY) == STATE_COMPLETED

        day = find_day(MONDAY)
        assert day is not None
        assert list_completions_for_day(day.id) == [habit.id]

    def test_toggle_twice_restores_state(self, app, habit):
        assert toggle_habit(habit.id, MONDAY) == STATE_COMPLETED
        assert toggle_habit(habit.id, MONDAY) == STATE_UNCOMPLETED

        day = find_day(MONDAY)
        assert find_completion(day.id, habit.id) is None
        # The Day row survives even with no completions left
        assert Day.query.count() == 1

    def test_toggle_defaults_to_today(self, app, habit):
        from habittracker.core.utils.dates import today

        toggle_habit(habit.id)
        assert find_day(today()) is not None

    def test_toggle_unknown_habit_not_found(self, app):
        with pytest.raises(NotFoundError, match="not_found"):
            toggle_habit(str(uuid.uuid4()), MONDAY)
        assert Day.query.count() == 0

    def test_toggle_recovers_from_concurrent_completion(self, app, habit):
        day = get_or_create_day(MONDAY)
        add_completion(day.id, habit.id)
        db.session.commit()

        with patch.object(day_service, "find_completion", return_value=None):
            state = toggle_habit(habit.id, MONDAY)

        assert state == STATE_COMPLETED
        assert DayHabit.query.count() == 1

    def test_toggle_is_per_day(self, app, habit):
        toggle_habit(habit.id, MONDAY)
        toggle_habit(habit.id, date(2024, 1, 16))

        assert Day.query.count() == 2
        assert DayHabit.query.count() == 2


# ============== Concurrent Writers ==============

WORKERS = 8


@pytest.fixture
def file_app(tmp_path, monkeypatch):
    """App on a file-backed SQLite database shared by several connections."""
    uri = f"sqlite:///{tmp_path / 'habits.db'}"
    monkeypatch.setattr(TestingConfig, "SQLALCHEMY_DATABASE_URI", uri)
    monkeypatch.setattr(TestingConfig, "SQLALCHEMY_ENGINE_OPTIONS", _engine_options_from_uri(uri))
    app = create_app("testing")
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


def _run_together(app, fn, workers=WORKERS):
    """Run ``fn`` in ``workers`` threads released at the same instant."""
    barrier = threading.Barrier(workers)
    results, failures = [], []

    def worker():
        with app.app_context():
            try:
                barrier.wait()
                results.append(fn())
            except Exception as exc:  # collected for the assertion below
                failures.append(exc)
            finally:
                db.session.remove()

    threads = [threading.Thread(target=worker) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)
    return results, failures


class TestConcurrentWriters:
    def test_concurrent_get_or_create_day_one_row(self, file_app):
        def create_and_commit():
            day_id = get_or_create_day(MONDAY).id
            db.session.commit()
            return day_id

        results, failures = _run_together(file_app, create_and_commit)

        assert failures == []
        assert len(results) == WORKERS
        assert len(set(results)) == 1
        with file_app.app_context():
            assert Day.query.filter_by(date=MONDAY).count() == 1

    def test_concurrent_toggles_serialize(self, file_app):
        with file_app.app_context():
            habit_id = create_habit("Meditate", [0, 1, 2, 3, 4, 5, 6], created_on=MONDAY).id

        results, failures = _run_together(file_app, lambda: toggle_habit(habit_id, MONDAY))

        assert failures == []
        # An even number of XOR toggles leaves the habit uncompleted
        assert Counter(results) == {STATE_COMPLETED: WORKERS // 2, STATE_UNCOMPLETED: WORKERS // 2}
        with file_app.app_context():
            assert Day.query.count() == 1
            assert DayHabit.query.count() == 0
