"""Habit DTOs and schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, List
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field, StrictInt

WeekDay = Annotated[StrictInt, Field(ge=0, le=6)]


class HabitCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    week_days: List[WeekDay] = Field(
        validation_alias=AliasChoices("week_days", "weekDays"),
    )


class DayQuery(BaseModel):
    date: datetime


class HabitIdParam(BaseModel):
    id: UUID


class HabitResponse(BaseModel):
    id: str
    title: str
    created_at: date
    week_days: List[int]
