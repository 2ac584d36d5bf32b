"""Habits JSON API controllers (thin, schema-validated)."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from habittracker.core import errors
from habittracker.domains.habits import services as habit_services
from habittracker.domains.habits.models.habit_models import Habit
from habittracker.domains.habits.schemas.habit_schemas import (
    DayQuery,
    HabitCreate,
    HabitIdParam,
    HabitResponse,
)

habit_api_bp = Blueprint("habit_api", __name__)


def _habit_payload(habit: Habit) -> dict:
    return HabitResponse(
        id=habit.id,
        title=habit.title,
        created_at=habit.created_at,
        week_days=sorted(habit.week_day_set),
    ).model_dump(mode="json")


def _validation_error(details):
    return jsonify({"ok": False, "error": "validation_error", "details": details}), 400


@habit_api_bp.post("/habits")
def create_habit():
    payload = request.get_json(silent=True) or {}
    try:
        data = HabitCreate.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc.errors(include_url=False, include_context=False))
    try:
        habit = habit_services.create_habit(data.title, data.week_days)
    except errors.ValidationError as exc:
        return _validation_error([{"msg": exc.detail}])
    return jsonify({"ok": True, "habit_id": habit.id}), 201


@habit_api_bp.get("/day")
def day_detail():
    try:
        query = DayQuery.model_validate(request.args.to_dict())
    except ValidationError as exc:
        return _validation_error(exc.errors(include_url=False, include_context=False))
    summary = habit_services.get_day_summary(query.date)
    return jsonify(
        {
            "ok": True,
            "possible_habits": [_habit_payload(h) for h in summary["possible_habits"]],
            "completed_habit_ids": summary["completed_habit_ids"],
        }
    )


@habit_api_bp.patch("/habits/<habit_id>/toggle")
def toggle_habit(habit_id: str):
    try:
        params = HabitIdParam.model_validate({"id": habit_id})
    except ValidationError as exc:
        return _validation_error(exc.errors(include_url=False, include_context=False))
    try:
        state = habit_services.toggle_habit(str(params.id))
    except errors.NotFoundError:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "state": state})


@habit_api_bp.get("/summary")
def summary():
    entries = [
        {
            "date": entry["date"].isoformat(),
            "completed_count": entry["completed_count"],
            "possible_count": entry["possible_count"],
        }
        for entry in habit_services.get_summary()
    ]
    return jsonify({"ok": True, "summary": entries})
