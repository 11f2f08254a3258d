"""Urgency scoring for NowWhat.

Turns a task and today's available minutes into a 0-100 urgency score, a
bucketed level and a human reason. Scoring is deterministic for a given `now`.
"""

import logging
from datetime import datetime
from typing import List, Optional

from nowwhat.models.task import Priority, Severity, Task, ScoredTask, UrgencyLevel
from nowwhat.models.constants import (
    PRIORITY_POINTS_CRITICAL,
    PRIORITY_POINTS_IMMEDIATE,
    PRIORITY_POINTS_HIGH,
    PRIORITY_POINTS_MEDIUM,
    PRIORITY_POINTS_LOW,
    SEVERITY_POINTS_CRITICAL,
    SEVERITY_POINTS_HIGH,
    SEVERITY_POINTS_MEDIUM,
    SEVERITY_POINTS_LOW,
    TIME_PRESSURE_OVERDUE,
    TIME_PRESSURE_UNDER_DAY_BASE,
    TIME_PRESSURE_UNDER_DAY_RAMP,
    TIME_PRESSURE_UNDER_3_DAYS,
    TIME_PRESSURE_UNDER_WEEK,
    TIME_PRESSURE_DISTANT,
    TIME_PRESSURE_NO_DEADLINE,
    MOMENTUM_STARTED_BONUS,
    MOMENTUM_FITS_TODAY_BONUS,
    MOVED_DAY_BOOST,
    MOVED_DAY_BOOST_MAX,
    MIN_URGENCY_SCORE,
    MAX_URGENCY_SCORE,
    URGENCY_CRITICAL_THRESHOLD,
    URGENCY_VERY_HIGH_THRESHOLD,
    URGENCY_HIGH_THRESHOLD,
    URGENCY_MEDIUM_THRESHOLD,
    PROCRASTINATION_MOVES,
)

logger = logging.getLogger(__name__)


PRIORITY_POINTS = {
    Priority.CRITICAL: PRIORITY_POINTS_CRITICAL,
    Priority.IMMEDIATE: PRIORITY_POINTS_IMMEDIATE,
    Priority.HIGH: PRIORITY_POINTS_HIGH,
    Priority.MEDIUM: PRIORITY_POINTS_MEDIUM,
    Priority.LOW: PRIORITY_POINTS_LOW,
}

SEVERITY_POINTS = {
    Severity.CRITICAL: SEVERITY_POINTS_CRITICAL,
    Severity.HIGH: SEVERITY_POINTS_HIGH,
    Severity.MEDIUM: SEVERITY_POINTS_MEDIUM,
    Severity.LOW: SEVERITY_POINTS_LOW,
}

HIGH_PRIORITY_FLAGS = (Priority.CRITICAL, Priority.IMMEDIATE)


def calculate_urgency_score(task: Task, available_minutes: int, now: Optional[datetime] = None) -> int:
    """Calculate the urgency score of a task.

    Done or blocked tasks always score 0; that check runs before any other
    factor. Otherwise the score adds up priority (max 30), severity (max 20),
    deadline pressure (max 40), momentum (max 10) and an anti-starvation
    boost for tasks that keep rolling over (max 10), then truncates and
    clamps the total to [0, 100].

    Args:
        task: Task to score
        available_minutes: Minutes still available today
        now: Reference time (defaults to current local time)

    Returns:
        Integer urgency score in [0, 100]
    """
    if task.is_done or task.is_blocked:
        return 0

    if now is None:
        now = datetime.now()

    score = 0.0
    score += PRIORITY_POINTS[task.priority]
    score += SEVERITY_POINTS[task.severity]
    score += _time_pressure(task, now)

    if task.actual_minutes > 0:
        score += MOMENTUM_STARTED_BONUS
    if task.estimated_minutes <= available_minutes:
        score += MOMENTUM_FITS_TODAY_BONUS

    score += min(task.moved_to_next_day * MOVED_DAY_BOOST, MOVED_DAY_BOOST_MAX)

    return max(MIN_URGENCY_SCORE, min(MAX_URGENCY_SCORE, int(score)))


def _time_pressure(task: Task, now: datetime) -> float:
    """Deadline pressure points; ramps from 35 to 40 during the last 24 hours."""
    hours = task.hours_until_deadline(now)
    if hours is None:
        return TIME_PRESSURE_NO_DEADLINE
    if hours < 0:
        return TIME_PRESSURE_OVERDUE
    if hours < 24:
        return TIME_PRESSURE_UNDER_DAY_BASE + (1 - hours / 24) * TIME_PRESSURE_UNDER_DAY_RAMP
    if hours < 72:
        return TIME_PRESSURE_UNDER_3_DAYS
    if hours < 168:
        return TIME_PRESSURE_UNDER_WEEK
    return TIME_PRESSURE_DISTANT


def urgency_level(score: int) -> UrgencyLevel:
    """Bucket a score. Thresholds are inclusive lower bounds, checked top-down."""
    if score >= URGENCY_CRITICAL_THRESHOLD:
        return UrgencyLevel.CRITICAL
    if score >= URGENCY_VERY_HIGH_THRESHOLD:
        return UrgencyLevel.VERY_HIGH
    if score >= URGENCY_HIGH_THRESHOLD:
        return UrgencyLevel.HIGH
    if score >= URGENCY_MEDIUM_THRESHOLD:
        return UrgencyLevel.MEDIUM
    return UrgencyLevel.LOW


def urgency_reason(task: Task, now: Optional[datetime] = None) -> str:
    """Explain a task's urgency. The first matching condition wins.

    Args:
        task: Task to explain
        now: Reference time (defaults to current local time)

    Returns:
        Short human-readable reason
    """
    if now is None:
        now = datetime.now()

    if task.is_blocked:
        waiting_for = (task.waiting_for or "").strip()
        if waiting_for:
            return f"Blocked: waiting for {waiting_for}"
        if task.blocker_description:
            return f"Blocked: {task.blocker_description}"
        return "Blocked"
    if task.is_done:
        return "Completed"
    if task.is_overdue(now):
        return "Overdue"
    if task.is_due_today(now):
        return "Due today"
    if task.is_due_tomorrow(now):
        return "Due tomorrow"
    if task.priority in HIGH_PRIORITY_FLAGS:
        return "High priority"
    if task.actual_minutes > 0:
        return "In progress"
    if task.moved_to_next_day > PROCRASTINATION_MOVES:
        return f"Postponed {task.moved_to_next_day} times"
    return "Standard priority"


def score_task(task: Task, available_minutes: int, now: Optional[datetime] = None) -> ScoredTask:
    """Annotate a task with its urgency score, level and reason."""
    if now is None:
        now = datetime.now()
    score = calculate_urgency_score(task, available_minutes, now)
    return ScoredTask(
        task=task,
        urgency_score=score,
        urgency_level=urgency_level(score),
        urgency_reason=urgency_reason(task, now),
    )


def score_tasks(tasks: List[Task], available_minutes: int, now: Optional[datetime] = None) -> List[ScoredTask]:
    """Annotate every task, preserving input order."""
    if now is None:
        now = datetime.now()
    scored = [score_task(task, available_minutes, now) for task in tasks]
    logger.debug(f"Scored {len(scored)} tasks with {available_minutes} minutes available")
    return scored


def sort_by_urgency(scored: List[ScoredTask]) -> List[ScoredTask]:
    """Sort descending by urgency score. Ties keep their input order."""
    return sorted(scored, key=lambda s: -s.urgency_score)


def completion_probability(task: Task, available_minutes: int, now: Optional[datetime] = None) -> float:
    """Rough chance of finishing a task before its deadline with today's budget.

    Args:
        task: Task to evaluate
        available_minutes: Minutes available today
        now: Reference time (defaults to current local time)

    Returns:
        Probability between 0.0 and 1.0
    """
    if task.is_done:
        return 1.0
    if task.deadline is None:
        return 0.8

    if now is None:
        now = datetime.now()
    if task.deadline < now:
        return 0.0

    minutes_until_deadline = int((task.deadline - now).total_seconds() // 60)
    time_available = min(available_minutes, minutes_until_deadline)
    remaining = task.remaining_minutes

    if remaining <= time_available * 0.5:
        return 0.95
    if remaining <= time_available * 0.8:
        return 0.75
    if remaining <= time_available:
        return 0.50
    if remaining <= time_available * 1.2:
        return 0.25
    return 0.1


def recommended_focus_duration(task: Task, focus_minutes: int) -> int:
    """Length of the next focus session: finish the task if it is shorter than a session."""
    remaining = task.remaining_minutes
    if 0 < remaining < focus_minutes:
        return remaining
    return focus_minutes
