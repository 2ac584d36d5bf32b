import pytest

pytestmark = pytest.mark.integration

from habittracker.domains.habits.models.habit_models import Day, Habit
from habittracker.domains.habits.services import get_summary


def test_seed_habits_command(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["seed-habits", "--days", "7"])

    assert result.exit_code == 0, result.output
    assert "Seeded 3 habits" in result.output
    assert Habit.query.count() == 3
    assert Day.query.count() > 0
    for entry in get_summary():
        assert 0 < entry["completed_count"] <= entry["possible_count"]


def test_seed_habits_command_is_rerunnable(app):
    runner = app.test_cli_runner()
    runner.invoke(args=["seed-habits", "--days", "7"])
    before = get_summary()

    result = runner.invoke(args=["seed-habits", "--days", "7"])

    assert result.exit_code == 0, result.output
    assert Habit.query.count() == 3
    assert get_summary() == before
