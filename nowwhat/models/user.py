"""User profile model for NowWhat."""

from datetime import date
from enum import Enum
from typing import Set

from pydantic import BaseModel, Field, field_validator

from nowwhat.models.constants import DEFAULT_FOCUS_MINUTES


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    NOT_SPECIFIED = "not_specified"


class AppLanguage(str, Enum):
    ENGLISH = "english"
    HEBREW = "hebrew"
    RUSSIAN = "russian"


def weekday_number(day: date) -> int:
    """Weekday number of a date, Sunday=1 through Saturday=7."""
    return day.isoweekday() % 7 + 1


class UserProfile(BaseModel):
    """Single user profile; supplies work hours and work days to the engine."""

    name: str = Field("", description="Display name")
    role: str = Field("", description="User role")
    gender: Gender = Field(Gender.NOT_SPECIFIED)
    language: AppLanguage = Field(AppLanguage.ENGLISH)
    start_work_hour: int = Field(9, ge=0, le=24, description="Work day start hour")
    end_work_hour: int = Field(17, ge=0, le=24, description="Work day end hour")
    work_days: Set[int] = Field(
        default_factory=lambda: {1, 2, 3, 4, 5},
        description="Weekday numbers the user works on (Sunday=1 ... Saturday=7)",
    )
    focus_dnd_minutes: int = Field(DEFAULT_FOCUS_MINUTES, ge=0, description="Focus session length")
    current_streak: int = Field(0, ge=0)
    longest_streak: int = Field(0, ge=0)

    @field_validator("end_work_hour")
    @classmethod
    def _validate_end_work_hour(cls, v, info):
        start = info.data.get("start_work_hour")
        if start is not None and v < start:
            raise ValueError("end_work_hour must be >= start_work_hour")
        return v

    @field_validator("work_days")
    @classmethod
    def _validate_work_days(cls, v):
        for day in v:
            if day < 1 or day > 7:
                raise ValueError(f"work day {day} is not a weekday number (1-7)")
        return v

    @property
    def daily_work_hours(self) -> int:
        return self.end_work_hour - self.start_work_hour

    @property
    def daily_work_minutes(self) -> int:
        return self.daily_work_hours * 60

    def is_work_day(self, day_of_week: int) -> bool:
        return day_of_week in self.work_days

    def is_work_date(self, day: date) -> bool:
        return self.is_work_day(weekday_number(day))
