"""Weekly scheduling for NowWhat.

Packs open tasks into day buckets by urgency, honouring the user's daily work
minutes and work days. A task too big for what is left of a day is split into
two segments on consecutive calendar days when at least an hour is left.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Set, Union

from nowwhat.config import get_settings
from nowwhat.engine.urgency import sort_by_urgency
from nowwhat.models.schedule import FullTask, SplitTask, WeeklySchedule
from nowwhat.models.task import ScoredTask, SubTask, TaskWithSubTasks
from nowwhat.models.user import UserProfile
from nowwhat.models.constants import MIN_SPLIT_MINUTES

logger = logging.getLogger(__name__)


def schedule_tasks_for_week(
    scored: List[ScoredTask],
    subtasks: List[SubTask],
    user: UserProfile,
    start_date: Union[date, datetime],
    days: Optional[int] = None,
) -> WeeklySchedule:
    """Distribute open tasks over consecutive days.

    Tasks are taken in descending urgency (ties keep input order). For each
    work day the remaining queue is walked in order:
    - a task whose parent-first total fits the remaining minutes is placed whole
    - otherwise, with at least 60 minutes left, segment 1 fills the day and
      segment 2 (the rest) goes on the next calendar day, work day or not
    - otherwise packing for the day stops

    Non-work days get an empty bucket and still use up a day of the horizon.
    Tasks not placed within the horizon are absent from the result.

    Args:
        scored: Scored tasks
        subtasks: All subtasks
        user: Profile supplying daily work minutes and work days
        start_date: First day of the horizon (time of day is ignored)
        days: Number of days in the horizon (defaults to the configured
            schedule_days)

    Returns:
        Mapping of day to scheduled items, in day order
    """
    if isinstance(start_date, datetime):
        start_date = start_date.date()
    if days is None:
        days = get_settings().schedule_days

    queue = sort_by_urgency([s for s in scored if s.is_open])
    schedule: WeeklySchedule = {}

    for offset in range(days):
        day = start_date + timedelta(days=offset)
        bucket = schedule.setdefault(day, [])

        if not user.is_work_date(day):
            logger.debug(f"{day} is not a work day, skipping")
            continue

        available = user.daily_work_minutes
        placed = 0

        for s in queue:
            wrapper = TaskWithSubTasks.build(s.task, subtasks)
            total = wrapper.total_estimated_minutes

            if total <= available:
                bucket.append(FullTask(task_with_subs=wrapper, scheduled_date=day))
                available -= total
                placed += 1
            elif available >= MIN_SPLIT_MINUTES:
                next_day = day + timedelta(days=1)
                bucket.append(
                    SplitTask(task_with_subs=wrapper, estimated_minutes=available, scheduled_date=day, part_number=1)
                )
                schedule.setdefault(next_day, []).append(
                    SplitTask(
                        task_with_subs=wrapper,
                        estimated_minutes=total - available,
                        scheduled_date=next_day,
                        part_number=2,
                    )
                )
                logger.debug(f"Split task {s.task.id}: {available} min on {day}, {total - available} min on {next_day}")
                available = 0
                placed += 1
            else:
                break

        queue = queue[placed:]
        logger.debug(f"{day}: {len(bucket)} items, {available} min unused, {len(queue)} tasks waiting")

    if queue:
        logger.debug(f"{len(queue)} tasks did not fit in the {days}-day horizon")
    return schedule


def unscheduled_tasks(scored: List[ScoredTask], schedule: WeeklySchedule) -> List[ScoredTask]:
    """Open tasks that do not appear anywhere in a schedule."""
    scheduled_ids: Set[str] = {
        item.task_with_subs.task.id for items in schedule.values() for item in items
    }
    return [s for s in scored if s.is_open and s.task.id not in scheduled_ids]


def scheduled_minutes_by_day(schedule: WeeklySchedule) -> Dict[date, int]:
    """Total scheduled minutes per day."""
    return {day: sum(item.estimated_minutes for item in items) for day, items in schedule.items()}


def balance_workload(scored: List[ScoredTask], daily_capacity: int, days: int) -> List[List[ScoredTask]]:
    """Spread open tasks over `days` buckets of equal capacity, by urgency.

    Subtasks and splitting are ignored. A task that does not fit the current
    bucket moves to the next one; if it does not fit there either it is
    dropped. When no bucket is left, the remaining tasks are dropped, so the
    result may hold fewer tasks than the input.

    Args:
        scored: Scored tasks
        daily_capacity: Minutes per bucket
        days: Number of buckets

    Returns:
        Exactly `days` lists of tasks
    """
    buckets: List[List[ScoredTask]] = [[] for _ in range(days)]
    if days <= 0:
        return buckets

    index = 0
    used = 0
    dropped = 0
    queue = sort_by_urgency([s for s in scored if s.is_open])

    for position, s in enumerate(queue):
        minutes = s.task.estimated_minutes
        if used + minutes <= daily_capacity:
            buckets[index].append(s)
            used += minutes
            continue

        if index + 1 >= days:
            dropped += len(queue) - position
            break

        index += 1
        used = 0
        if minutes <= daily_capacity:
            buckets[index].append(s)
            used = minutes
        else:
            dropped += 1

    if dropped:
        logger.debug(f"balance_workload dropped {dropped} tasks")
    return buckets
