"""Habit, weekday schedule, day and completion models."""

from __future__ import annotations

import uuid
from datetime import date
from typing import List

from sqlalchemy.orm import Mapped, mapped_column, relationship

from habittracker.core.utils.dates import today
from habittracker.extensions import db


def _new_id() -> str:
    return str(uuid.uuid4())


class Habit(db.Model):
    __tablename__ = "habits"

    id: Mapped[str] = mapped_column(db.String(36), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(db.String(255), nullable=False)
    created_at: Mapped[date] = mapped_column(db.Date, nullable=False, default=today, index=True)

    week_days: Mapped[List["HabitWeekDay"]] = relationship(
        "HabitWeekDay",
        back_populates="habit",
        cascade="all, delete-orphan",
        order_by="HabitWeekDay.week_day",
    )
    day_habits: Mapped[List["DayHabit"]] = relationship(
        "DayHabit",
        back_populates="habit",
        cascade="all, delete-orphan",
    )

    @property
    def week_day_set(self) -> set[int]:
        return {wd.week_day for wd in self.week_days}


class HabitWeekDay(db.Model):
    __tablename__ = "habit_week_days"
    __table_args__ = (
        db.UniqueConstraint("habit_id", "week_day", name="ux_habit_week_days_habit_week_day"),
        db.CheckConstraint("week_day >= 0 AND week_day <= 6", name="ck_habit_week_days_range"),
    )

    id: Mapped[str] = mapped_column(db.String(36), primary_key=True, default=_new_id)
    habit_id: Mapped[str] = mapped_column(
        db.ForeignKey("habits.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    week_day: Mapped[int] = mapped_column(nullable=False)

    habit: Mapped[Habit] = relationship("Habit", back_populates="week_days")


class Day(db.Model):
    __tablename__ = "days"

    id: Mapped[str] = mapped_column(db.String(36), primary_key=True, default=_new_id)
    date: Mapped[date] = mapped_column(db.Date, unique=True, nullable=False)

    day_habits: Mapped[List["DayHabit"]] = relationship(
        "DayHabit",
        back_populates="day",
        cascade="all, delete-orphan",
    )


class DayHabit(db.Model):
    """A habit completed on a day."""

    __tablename__ = "day_habits"
    __table_args__ = (
        db.UniqueConstraint("day_id", "habit_id", name="ux_day_habits_day_habit"),
    )

    id: Mapped[str] = mapped_column(db.String(36), primary_key=True, default=_new_id)
    day_id: Mapped[str] = mapped_column(
        db.ForeignKey("days.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    habit_id: Mapped[str] = mapped_column(
        db.ForeignKey("habits.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    day: Mapped[Day] = relationship("Day", back_populates="day_habits")
    habit: Mapped[Habit] = relationship("Habit", back_populates="day_habits")
