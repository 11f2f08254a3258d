"""Project data models for NowWhat."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from nowwhat.models.task import Priority, to_naive_local


class RiskStatus(str, Enum):
    """Likelihood of a project meeting its deadline."""
    ON_TRACK = "on_track"
    WARNING = "warning"
    AT_RISK = "at_risk"


class Project(BaseModel):
    """Stored project record. Owns zero or more tasks through Task.project_id."""

    id: str = Field(..., description="Unique project identifier")
    name: str = Field(..., description="Project name")
    description: str = Field("", description="Project description")
    deadline: Optional[datetime] = Field(None, description="Project deadline")
    priority: Priority = Field(Priority.MEDIUM, description="Project priority")
    created_at: datetime = Field(default_factory=datetime.now, description="Project creation timestamp")
    is_completed: bool = Field(False, description="Whether the project is completed")
    marked_complete: bool = Field(False, description="Whether the user marked the project complete")
    completed_at: Optional[datetime] = Field(None, description="Project completion timestamp")
    is_archived: bool = Field(False, description="Whether the project is archived")

    @field_validator("deadline", "created_at", "completed_at")
    @classmethod
    def _naive_local_times(cls, v):
        return to_naive_local(v)

    @property
    def is_closed(self) -> bool:
        return self.is_completed or self.marked_complete


class ProjectView(BaseModel):
    """Derived project state, recomputed from the live task set."""

    project: Project
    total_tasks: int = Field(0, ge=0)
    completed_tasks: int = Field(0, ge=0)
    time_needed_minutes: int = Field(0, ge=0, description="Remaining minutes across undone tasks")
    risk: RiskStatus = Field(RiskStatus.ON_TRACK)
    predicted_completion: Optional[datetime] = Field(None, description="Forecast completion timestamp")
    will_miss_deadline: bool = Field(False)

    @property
    def progress(self) -> int:
        if self.total_tasks > 0:
            return self.completed_tasks * 100 // self.total_tasks
        return 0
