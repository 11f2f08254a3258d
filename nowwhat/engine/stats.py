"""Productivity statistics for NowWhat."""

import math
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from nowwhat.engine.time_utils import start_of_day, start_of_month, start_of_week
from nowwhat.models.project import Project
from nowwhat.models.task import Task


class ProductivityStats(BaseModel):
    """Aggregates shown on the statistics screen."""

    completed_today: int = 0
    completed_this_week: int = 0
    completed_this_month: int = 0
    minutes_worked_today: int = 0
    minutes_worked_this_week: int = 0
    minutes_worked_this_month: int = 0
    efficiency: float = 1.0
    productivity_score: int = 0
    average_estimation_ratio: Optional[float] = Field(None, description="Mean actual/estimated ratio")
    active_projects: int = 0
    completed_projects: int = 0


def calculate_efficiency(completed_tasks: List[Task]) -> float:
    """Average estimation accuracy of completed tasks.

    Each task with both an estimate and actual time scores
    1 - |1 - actual/estimate|: 1.0 for a perfect estimate, 0.0 at double or
    half, negative beyond that. Without any such task the result is 1.0.
    """
    ratios = [
        1 - abs(1 - task.actual_minutes / task.estimated_minutes)
        for task in completed_tasks
        if task.estimated_minutes > 0 and task.actual_minutes > 0
    ]
    if not ratios:
        return 1.0
    return sum(ratios) / len(ratios)


def calculate_productivity_score(total_worked_minutes: int, total_available_minutes: int, efficiency: float) -> int:
    """Utilization of the available time weighted by efficiency, 0-100 (half-up rounding)."""
    if total_available_minutes <= 0:
        return 0
    utilization = min(1.0, total_worked_minutes / total_available_minutes)
    return int(math.floor(utilization * efficiency * 100 + 0.5))


def _completed_between(tasks: List[Task], start: datetime, end: datetime) -> List[Task]:
    return [
        task for task in tasks
        if task.is_done and task.completed_at is not None and start <= task.completed_at < end
    ]


def tasks_completed_in_range(tasks: List[Task], start: datetime, end: datetime) -> int:
    return len(_completed_between(tasks, start, end))


def minutes_worked_in_range(tasks: List[Task], start: datetime, end: datetime) -> int:
    return sum(task.actual_minutes for task in _completed_between(tasks, start, end))


def average_estimation_ratio(tasks: List[Task]) -> Optional[float]:
    """Mean actual/estimated ratio over completed tasks with both values set."""
    ratios = [
        task.actual_minutes / task.estimated_minutes
        for task in tasks
        if task.is_done and task.estimated_minutes > 0 and task.actual_minutes > 0
    ]
    if not ratios:
        return None
    return sum(ratios) / len(ratios)


def build_productivity_stats(
    tasks: List[Task],
    projects: List[Project],
    available_minutes_by_period: Optional[Dict[str, int]] = None,
    now: Optional[datetime] = None,
) -> ProductivityStats:
    """Compute the statistics screen aggregates.

    Args:
        tasks: All tasks
        projects: All projects
        available_minutes_by_period: Capacity per period ("today", "week",
            "month"); the productivity score uses "week"
        now: Reference time (defaults to current local time)

    Returns:
        ProductivityStats
    """
    if now is None:
        now = datetime.now()
    available = available_minutes_by_period or {}

    today = start_of_day(now)
    tomorrow = today + timedelta(days=1)
    week_start = start_of_week(now)
    week_end = week_start + timedelta(days=7)
    month_start = start_of_month(now)
    if month_start.month == 12:
        month_end = month_start.replace(year=month_start.year + 1, month=1)
    else:
        month_end = month_start.replace(month=month_start.month + 1)

    completed = [task for task in tasks if task.is_done]
    efficiency = calculate_efficiency(completed)
    worked_week = minutes_worked_in_range(tasks, week_start, week_end)

    return ProductivityStats(
        completed_today=tasks_completed_in_range(tasks, today, tomorrow),
        completed_this_week=tasks_completed_in_range(tasks, week_start, week_end),
        completed_this_month=tasks_completed_in_range(tasks, month_start, month_end),
        minutes_worked_today=minutes_worked_in_range(tasks, today, tomorrow),
        minutes_worked_this_week=worked_week,
        minutes_worked_this_month=minutes_worked_in_range(tasks, month_start, month_end),
        efficiency=efficiency,
        productivity_score=calculate_productivity_score(worked_week, available.get("week", 0), efficiency),
        average_estimation_ratio=average_estimation_ratio(tasks),
        active_projects=sum(1 for project in projects if not project.is_closed),
        completed_projects=sum(1 for project in projects if project.is_closed),
    )


def format_minutes(minutes: int) -> str:
    """Format minutes as "2h 15m", "2h" or "45m"."""
    hours, mins = divmod(max(0, minutes), 60)
    if hours and mins:
        return f"{hours}h {mins}m"
    if hours:
        return f"{hours}h"
    return f"{mins}m"
