"""Capacity and recommendation logic for NowWhat.

Works on scored tasks and an externally computed "available minutes" budget.
Unless noted otherwise only open tasks (not done, not blocked) are considered.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from nowwhat.config import get_settings
from nowwhat.engine.stats import tasks_completed_in_range
from nowwhat.engine.time_utils import start_of_day
from nowwhat.engine.urgency import sort_by_urgency
from nowwhat.models.task import ScoredTask, SubTask, Task, TaskWithSubTasks, UrgencyLevel
from nowwhat.models.user import UserProfile
from nowwhat.models.warning import Warning
from nowwhat.models.constants import (
    WORKLOAD_SCORE_THRESHOLD,
    SHOULD_WORK_SCORE_OVERRIDE,
    SHOULD_WORK_NO_DEADLINE_SCORE,
    ATTENTION_SCORE_THRESHOLD,
    ATTENTION_MOVES_THRESHOLD,
    HIGH_WORKLOAD_FACTOR,
    LOW_CAPACITY_FACTOR,
    DEADLINE_APPROACHING_MIN_HOURS,
    DEADLINE_APPROACHING_MAX_HOURS,
)

logger = logging.getLogger(__name__)


class TaskRecommendations:
    """Grouped recommendations for the current moment."""

    def __init__(
        self,
        top_priority: Optional[ScoredTask] = None,
        critical: Optional[List[ScoredTask]] = None,
        overdue: Optional[List[ScoredTask]] = None,
        due_today: Optional[List[ScoredTask]] = None,
        blocked: Optional[List[ScoredTask]] = None,
        fit_in_day: Optional[List[ScoredTask]] = None,
    ):
        self.top_priority = top_priority
        self.critical: List[ScoredTask] = critical or []
        self.overdue: List[ScoredTask] = overdue or []
        self.due_today: List[ScoredTask] = due_today or []
        self.blocked: List[ScoredTask] = blocked or []
        self.fit_in_day: List[ScoredTask] = fit_in_day or []


def _open(scored: List[ScoredTask]) -> List[ScoredTask]:
    return [s for s in scored if s.is_open]


def resolve_available_minutes(
    calendar_minutes: Optional[int],
    fallback: Optional[int] = None,
) -> int:
    """Today's budget: the calendar figure when there is one, the fallback otherwise.

    The fallback defaults to the configured fallback_available_minutes.
    """
    if calendar_minutes is None:
        if fallback is None:
            fallback = get_settings().fallback_available_minutes
        logger.debug(f"No calendar capacity supplied, using fallback of {fallback} minutes")
        return fallback
    return max(0, calendar_minutes)


def workload_for_range(
    scored: List[ScoredTask],
    subtasks: List[SubTask],
    start: datetime,
    end: datetime,
) -> int:
    """Minutes of open work that belongs to a date range.

    A task counts when its deadline falls inside the range, when it is already
    overdue at the range start, when it is in progress, or when its urgency is
    at least 30. Tasks without an own estimate contribute their live subtasks.

    Args:
        scored: Scored tasks
        subtasks: All subtasks
        start: Range start
        end: Range end (inclusive)

    Returns:
        Total minutes
    """
    total = 0
    for s in _open(scored):
        task = s.task
        in_range = task.deadline is not None and start <= task.deadline <= end
        overdue = task.deadline is not None and task.deadline < start
        if in_range or overdue or task.actual_minutes > 0 or s.urgency_score >= WORKLOAD_SCORE_THRESHOLD:
            total += TaskWithSubTasks.build(task, subtasks).total_estimated_minutes
    return total


def recommend_focus_task(scored: List[ScoredTask], available_minutes: int) -> Optional[ScoredTask]:
    """Most urgent task that fits the budget, or the most urgent task overall.

    Returns:
        The recommended task, or None when nothing is open
    """
    candidates = _open(scored)
    if not candidates:
        return None

    fitting = [s for s in candidates if s.task.estimated_minutes <= available_minutes]
    pool = fitting or candidates
    return max(pool, key=lambda s: s.urgency_score)


def get_tasks_for_today(
    scored: List[ScoredTask],
    subtasks: List[SubTask],
    available_minutes: int,
    limit: Optional[int] = None,
) -> List[ScoredTask]:
    """Greedy selection of today's tasks by urgency.

    Tasks that do not fit the remaining budget are skipped and smaller ones
    further down may still be taken. This is greedy bin filling, not an
    optimal knapsack.

    Args:
        scored: Scored tasks
        subtasks: All subtasks
        available_minutes: Today's budget
        limit: Maximum number of tasks selected (defaults to the configured
            today_task_limit)

    Returns:
        Selected tasks, most urgent first
    """
    if limit is None:
        limit = get_settings().today_task_limit

    selected: List[ScoredTask] = []
    remaining = available_minutes

    for s in sort_by_urgency(_open(scored)):
        if len(selected) >= limit:
            break
        minutes = TaskWithSubTasks.build(s.task, subtasks).total_estimated_minutes
        if minutes <= remaining:
            selected.append(s)
            remaining -= minutes

    logger.debug(f"Selected {len(selected)} tasks for today, {remaining} minutes left unplanned")
    return selected


def should_work_on_task(scored_task: ScoredTask, available_minutes: int, now: Optional[datetime] = None) -> bool:
    """Whether a task deserves attention today."""
    if not scored_task.is_open:
        return False
    if now is None:
        now = datetime.now()

    task = scored_task.task
    hours = task.hours_until_deadline(now)
    if hours is None:
        return scored_task.urgency_score >= SHOULD_WORK_NO_DEADLINE_SCORE
    if hours < 0:
        return True
    if hours <= 24 and task.estimated_minutes <= available_minutes:
        return True
    return scored_task.urgency_score >= SHOULD_WORK_SCORE_OVERRIDE


def get_warnings(
    scored: List[ScoredTask],
    available_minutes: int,
    user: UserProfile,
    now: Optional[datetime] = None,
) -> List[Warning]:
    """Warnings for the current day, in a fixed order.

    Args:
        scored: Scored tasks
        available_minutes: Today's budget
        user: Profile supplying the daily work minutes
        now: Reference time (defaults to current local time)

    Returns:
        Zero or more of HIGH_WORKLOAD, LOW_CAPACITY, DEADLINE_APPROACHING, OVERDUE
    """
    if now is None:
        now = datetime.now()

    open_tasks = _open(scored)
    warnings: List[Warning] = []

    total_minutes = sum(s.task.estimated_minutes for s in open_tasks)
    if total_minutes > available_minutes * HIGH_WORKLOAD_FACTOR:
        warnings.append(Warning.HIGH_WORKLOAD)

    if available_minutes < user.daily_work_minutes * LOW_CAPACITY_FACTOR:
        warnings.append(Warning.LOW_CAPACITY)

    hours_left = [s.task.hours_until_deadline(now) for s in open_tasks]
    hours_left = [h for h in hours_left if h is not None]

    if any(DEADLINE_APPROACHING_MIN_HOURS <= h <= DEADLINE_APPROACHING_MAX_HOURS for h in hours_left):
        warnings.append(Warning.DEADLINE_APPROACHING)

    if any(h < 0 for h in hours_left):
        warnings.append(Warning.OVERDUE)

    if warnings:
        logger.debug(f"Raised warnings: {', '.join(w.value for w in warnings)}")
    return warnings


def get_tasks_needing_attention(scored: List[ScoredTask], now: Optional[datetime] = None) -> List[ScoredTask]:
    """Undone tasks that are blocked, due within a day, often postponed or very urgent.

    Blocked tasks are included. Overdue tasks count as due within a day.
    """
    if now is None:
        now = datetime.now()

    attention = []
    for s in scored:
        task = s.task
        if task.is_done:
            continue
        hours = task.hours_until_deadline(now)
        if (
            task.is_blocked
            or (hours is not None and hours <= 24)
            or task.moved_to_next_day >= ATTENTION_MOVES_THRESHOLD
            or s.urgency_score >= ATTENTION_SCORE_THRESHOLD
        ):
            attention.append(s)
    return sort_by_urgency(attention)


def generate_recommendations(
    scored: List[ScoredTask],
    subtasks: List[SubTask],
    available_minutes: int,
    now: Optional[datetime] = None,
    limit: Optional[int] = None,
) -> TaskRecommendations:
    """Build the dashboard recommendation groups."""
    if now is None:
        now = datetime.now()

    undone = [s for s in scored if not s.task.is_done]
    return TaskRecommendations(
        top_priority=recommend_focus_task(scored, available_minutes),
        critical=[s for s in undone if s.urgency_level == UrgencyLevel.CRITICAL],
        overdue=[s for s in undone if s.task.is_overdue(now)],
        due_today=[s for s in undone if s.task.is_due_today(now)],
        blocked=[s for s in undone if s.task.is_blocked],
        fit_in_day=get_tasks_for_today(scored, subtasks, available_minutes, limit=limit),
    )


def roll_over_unfinished(tasks: List[Task], now: Optional[datetime] = None) -> List[Task]:
    """Proposed write-backs for tasks left unfinished past their deadline day.

    Returns copies of undone tasks whose deadline is before today's midnight,
    with moved_to_next_day incremented. The input tasks are not modified.
    """
    if now is None:
        now = datetime.now()
    today = start_of_day(now)

    rolled = [
        task.model_copy(update={"moved_to_next_day": task.moved_to_next_day + 1})
        for task in tasks
        if not task.is_done and task.deadline is not None and task.deadline < today
    ]
    logger.debug(f"Rolling over {len(rolled)} unfinished tasks")
    return rolled


def update_streak(user: UserProfile, tasks: List[Task], now: Optional[datetime] = None) -> UserProfile:
    """Proposed profile write-back after a task is completed.

    When at least one task was completed today the current streak grows by
    one, and the longest streak follows it when exceeded. Otherwise the
    profile is returned unchanged.
    """
    if now is None:
        now = datetime.now()
    today = start_of_day(now)

    if tasks_completed_in_range(tasks, today, today + timedelta(days=1)) == 0:
        return user

    streak = user.current_streak + 1
    logger.debug(f"Streak is now {streak} days")
    return user.model_copy(
        update={"current_streak": streak, "longest_streak": max(user.longest_streak, streak)}
    )
