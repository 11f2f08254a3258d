"""Project risk assessment for NowWhat.

Compares the remaining work of a project with the work capacity left before
its deadline, and forecasts a completion date.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from nowwhat.models.project import Project, ProjectView, RiskStatus
from nowwhat.models.task import SubTask, Task, TaskWithSubTasks
from nowwhat.models.user import UserProfile
from nowwhat.models.constants import (
    RISK_CRITICAL_UTILIZATION,
    RISK_WARNING_UTILIZATION,
    WORK_DAYS_PER_WEEK,
    DAYS_PER_WEEK,
)

logger = logging.getLogger(__name__)


def time_needed_minutes(tasks: List[Task], subtasks: List[SubTask]) -> int:
    """Remaining minutes across undone tasks, folding in subtasks parent-first."""
    return sum(
        TaskWithSubTasks.build(task, subtasks).remaining_minutes
        for task in tasks
        if not task.is_done
    )


def calculate_project_risk(
    project: Project,
    tasks: List[Task],
    subtasks: List[SubTask],
    user: UserProfile,
    now: Optional[datetime] = None,
) -> RiskStatus:
    """Classify a project's risk of missing its deadline.

    Calendar days left are converted to work days assuming a five-day week,
    with at least one work day. Utilization above 1.2 is AT_RISK, above 0.85
    is WARNING.

    Args:
        project: Project to assess
        tasks: The project's tasks
        subtasks: All subtasks
        user: Profile supplying the daily work minutes
        now: Reference time (defaults to current local time)

    Returns:
        Risk status
    """
    if project.is_closed or project.deadline is None:
        return RiskStatus.ON_TRACK

    if now is None:
        now = datetime.now()

    if project.deadline <= now:
        logger.debug(f"Project {project.id} is past its deadline")
        return RiskStatus.AT_RISK

    needed = time_needed_minutes(tasks, subtasks)
    calendar_days_left = (project.deadline - now).days
    work_days_left = max(1, calendar_days_left * WORK_DAYS_PER_WEEK // DAYS_PER_WEEK)
    available = work_days_left * user.daily_work_minutes
    utilization = needed / max(1, available)

    if utilization > RISK_CRITICAL_UTILIZATION:
        risk = RiskStatus.AT_RISK
    elif utilization > RISK_WARNING_UTILIZATION:
        risk = RiskStatus.WARNING
    else:
        risk = RiskStatus.ON_TRACK

    logger.debug(
        f"Project {project.id}: {needed} min needed, {available} min available "
        f"({utilization:.2f}) -> {risk.value}"
    )
    return risk


def predict_project_completion(
    project: Project,
    tasks: List[Task],
    daily_capacity: int,
    now: Optional[datetime] = None,
) -> datetime:
    """Forecast when a project's open tasks will be done.

    Weekends and work days are not taken into account.
    """
    if now is None:
        now = datetime.now()

    minutes = sum(task.remaining_minutes for task in tasks if not task.is_done and not task.is_blocked)
    days_needed = int(minutes / max(1, daily_capacity))
    return now + timedelta(days=days_needed)


def will_miss_deadline(
    project: Project,
    tasks: List[Task],
    daily_capacity: int,
    now: Optional[datetime] = None,
) -> bool:
    if project.deadline is None:
        return False
    return predict_project_completion(project, tasks, daily_capacity, now) > project.deadline


def is_project_finished(tasks: List[Task]) -> bool:
    """A project is finished when it has tasks and all of them are done."""
    return bool(tasks) and all(task.is_done for task in tasks)


def build_project_view(
    project: Project,
    tasks: List[Task],
    subtasks: List[SubTask],
    user: UserProfile,
    now: Optional[datetime] = None,
) -> ProjectView:
    """Recompute counts, risk and forecast for one project from its tasks."""
    if now is None:
        now = datetime.now()

    daily_capacity = user.daily_work_minutes
    return ProjectView(
        project=project,
        total_tasks=len(tasks),
        completed_tasks=sum(1 for task in tasks if task.is_done),
        time_needed_minutes=time_needed_minutes(tasks, subtasks),
        risk=calculate_project_risk(project, tasks, subtasks, user, now),
        predicted_completion=predict_project_completion(project, tasks, daily_capacity, now),
        will_miss_deadline=will_miss_deadline(project, tasks, daily_capacity, now),
    )


def build_project_views(
    projects: List[Project],
    tasks: List[Task],
    subtasks: List[SubTask],
    user: UserProfile,
    now: Optional[datetime] = None,
) -> List[ProjectView]:
    """Project views for every project, each built from the tasks it owns."""
    if now is None:
        now = datetime.now()
    return [
        build_project_view(
            project,
            [task for task in tasks if task.project_id == project.id],
            subtasks,
            user,
            now,
        )
        for project in projects
    ]
