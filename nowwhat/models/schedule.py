"""Scheduled item models for NowWhat.

A scheduled item is either a whole task placed on one day or one of the two
segments of a task split across consecutive days.
"""

from datetime import date
from typing import Annotated, Dict, List, Literal, Union

from pydantic import BaseModel, Field

from nowwhat.models.task import TaskWithSubTasks


class FullTask(BaseModel):
    """The whole task fits in one day."""

    kind: Literal["full"] = "full"
    task_with_subs: TaskWithSubTasks = Field(..., description="Task being scheduled")
    scheduled_date: date = Field(..., description="Day the task is scheduled on")

    @property
    def estimated_minutes(self) -> int:
        return self.task_with_subs.total_estimated_minutes


class SplitTask(BaseModel):
    """One segment of a task split across two consecutive days."""

    kind: Literal["split"] = "split"
    task_with_subs: TaskWithSubTasks = Field(..., description="Task being scheduled")
    estimated_minutes: int = Field(..., ge=0, description="Minutes in this segment")
    scheduled_date: date = Field(..., description="Day the segment is scheduled on")
    part_number: Literal[1, 2] = Field(..., description="Segment number")


ScheduledItem = Annotated[Union[FullTask, SplitTask], Field(discriminator="kind")]

WeeklySchedule = Dict[date, List[ScheduledItem]]
