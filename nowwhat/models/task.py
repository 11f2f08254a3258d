"""Task data models for NowWhat."""

from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from nowwhat.models.constants import DEFAULT_ESTIMATED_MINUTES


def to_naive_local(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class Priority(str, Enum):
    """Task priority, highest first."""
    CRITICAL = "critical"
    IMMEDIATE = "immediate"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Severity(str, Enum):
    """Impact of the task on the organization, highest first."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class UrgencyLevel(str, Enum):
    """Bucketed urgency score."""
    CRITICAL = "critical"
    VERY_HIGH = "very_high"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Task(BaseModel):
    """Stored task record.

    Scores are never stored on the record; see ScoredTask.
    """

    id: str = Field(..., description="Unique task identifier")
    project_id: Optional[str] = Field(None, description="Owning project, if any")
    title: str = Field(..., description="Task title")
    description: str = Field("", description="Task description")
    priority: Priority = Field(Priority.MEDIUM, description="Task priority")
    severity: Severity = Field(Severity.MEDIUM, description="Task severity")
    estimated_minutes: int = Field(DEFAULT_ESTIMATED_MINUTES, ge=0, description="Estimated effort in minutes")
    actual_minutes: int = Field(0, ge=0, description="Minutes already worked")
    deadline: Optional[datetime] = Field(None, description="Task deadline")
    is_done: bool = Field(False, description="Whether the task is completed")
    is_archived: bool = Field(False, description="Whether the task is archived")
    has_blocker: bool = Field(False, description="Whether the task is blocked")
    blocker_description: str = Field("", description="What blocks the task")
    waiting_for: Optional[str] = Field(None, description="Person or event the task waits for")
    moved_to_next_day: int = Field(0, ge=0, description="Times the task rolled over unfinished")
    created_at: datetime = Field(default_factory=datetime.now, description="Task creation timestamp")
    completed_at: Optional[datetime] = Field(None, description="Task completion timestamp")
    reminder_time: Optional[datetime] = Field(None, description="Reminder timestamp")

    @field_validator("deadline", "created_at", "completed_at", "reminder_time")
    @classmethod
    def _naive_local_times(cls, v):
        return to_naive_local(v)

    @property
    def is_blocked(self) -> bool:
        return self.has_blocker or bool(self.waiting_for and self.waiting_for.strip())

    @property
    def remaining_minutes(self) -> int:
        return max(0, self.estimated_minutes - self.actual_minutes)

    @property
    def progress(self) -> int:
        """Progress percentage, capped at 99 until the task is done."""
        if self.is_done:
            return 100
        if self.actual_minutes > 0 and self.estimated_minutes > 0:
            return min(99, max(0, int(self.actual_minutes / self.estimated_minutes * 100)))
        return 0

    def hours_until_deadline(self, now: datetime) -> Optional[float]:
        """Hours left until the deadline (negative when overdue)."""
        if self.deadline is None:
            return None
        return (self.deadline - now).total_seconds() / 3600

    def days_until_deadline(self, now: datetime) -> Optional[int]:
        """Whole days left until the deadline, truncated toward zero."""
        if self.deadline is None:
            return None
        return int((self.deadline - now).total_seconds() / 86400)

    def is_overdue(self, now: datetime) -> bool:
        return self.deadline is not None and self.deadline < now and not self.is_done

    def is_due_today(self, now: datetime) -> bool:
        return self.deadline is not None and self.deadline.date() == now.date()

    def is_due_tomorrow(self, now: datetime) -> bool:
        return self.deadline is not None and self.deadline.date() == (now + timedelta(days=1)).date()


class SubTask(BaseModel):
    """A step of a task. Owned by exactly one task."""

    id: str = Field(..., description="Unique subtask identifier")
    task_id: str = Field(..., description="Parent task identifier")
    title: str = Field(..., description="Subtask title")
    estimated_hours: float = Field(0.0, ge=0, description="Estimated effort in hours")
    actual_minutes: int = Field(0, ge=0, description="Minutes already worked")
    priority: Priority = Field(Priority.MEDIUM, description="Subtask priority")
    severity: Severity = Field(Severity.MEDIUM, description="Subtask severity")
    deadline: Optional[datetime] = Field(None, description="Subtask deadline")
    is_done: bool = Field(False, description="Whether the subtask is completed")
    created_at: datetime = Field(default_factory=datetime.now, description="Subtask creation timestamp")
    completed_at: Optional[datetime] = Field(None, description="Subtask completion timestamp")

    @field_validator("deadline", "created_at", "completed_at")
    @classmethod
    def _naive_local_times(cls, v):
        return to_naive_local(v)

    @property
    def estimated_minutes(self) -> int:
        # truncated, not rounded: 4.1 h is 245 minutes
        return int(self.estimated_hours * 60)


def live_subtasks_for(task_id: str, subtasks: List[SubTask]) -> List[SubTask]:
    """Undone subtasks belonging to a task, in input order."""
    return [sub for sub in subtasks if sub.task_id == task_id and not sub.is_done]


class TaskWithSubTasks(BaseModel):
    """A task together with its live subtasks.

    Time totals follow the parent-first rule: the task's own estimate wins
    when it is non-zero, otherwise the subtask estimates are summed.
    """

    task: Task
    subtasks: List[SubTask] = Field(default_factory=list)

    @classmethod
    def build(cls, task: Task, all_subtasks: List[SubTask]) -> "TaskWithSubTasks":
        return cls(task=task, subtasks=live_subtasks_for(task.id, all_subtasks))

    @property
    def total_estimated_minutes(self) -> int:
        if self.task.estimated_minutes > 0:
            return self.task.estimated_minutes
        return sum(sub.estimated_minutes for sub in self.subtasks)

    @property
    def total_actual_minutes(self) -> int:
        return self.task.actual_minutes + sum(sub.actual_minutes for sub in self.subtasks)

    @property
    def remaining_minutes(self) -> int:
        return max(0, self.total_estimated_minutes - self.total_actual_minutes)


class ScoredTask(BaseModel):
    """A task annotated with its urgency for the current context."""

    task: Task
    urgency_score: int = Field(..., ge=0, le=100, description="Normalized urgency score")
    urgency_level: UrgencyLevel = Field(..., description="Bucketed urgency")
    urgency_reason: str = Field(..., description="Human explanation of the urgency")

    @property
    def is_open(self) -> bool:
        """Undone and not blocked."""
        return not self.task.is_done and not self.task.is_blocked
