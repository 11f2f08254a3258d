"""Data models for NowWhat."""

from nowwhat.models.task import (
    Priority,
    Severity,
    UrgencyLevel,
    Task,
    SubTask,
    TaskWithSubTasks,
    ScoredTask,
    live_subtasks_for,
)
from nowwhat.models.project import Project, ProjectView, RiskStatus
from nowwhat.models.user import UserProfile, Gender, AppLanguage, weekday_number
from nowwhat.models.schedule import FullTask, SplitTask, ScheduledItem, WeeklySchedule
from nowwhat.models.warning import Warning

__all__ = [
    "Priority",
    "Severity",
    "UrgencyLevel",
    "Task",
    "SubTask",
    "TaskWithSubTasks",
    "ScoredTask",
    "live_subtasks_for",
    "Project",
    "ProjectView",
    "RiskStatus",
    "UserProfile",
    "Gender",
    "AppLanguage",
    "weekday_number",
    "FullTask",
    "SplitTask",
    "ScheduledItem",
    "WeeklySchedule",
    "Warning",
]
