"""Pytest fixtures and configuration for NowWhat tests."""

import pytest
from datetime import datetime
import uuid

from nowwhat.config import get_settings
from nowwhat.engine.urgency import urgency_level
from nowwhat.models.task import Task, SubTask, ScoredTask, Priority, Severity
from nowwhat.models.project import Project
from nowwhat.models.user import UserProfile


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Start every test from default engine settings."""
    for name in ("NOWWHAT_FALLBACK_AVAILABLE_MINUTES", "NOWWHAT_SCHEDULE_DAYS", "NOWWHAT_TODAY_TASK_LIMIT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def now():
    """Fixed reference time: Wednesday 2024-01-03 10:00."""
    return datetime(2024, 1, 3, 10, 0, 0)


@pytest.fixture
def user():
    """Profile working 9-17 Sunday through Thursday (480 minutes a day)."""
    return UserProfile(
        name="Test User",
        role="Engineer",
        start_work_hour=9,
        end_work_hour=17,
        work_days={1, 2, 3, 4, 5},
    )


@pytest.fixture
def sample_task_base(now):
    """Base task data for creating test tasks.

    Returns a dict with default task attributes that can be overridden.
    """
    return {
        "id": str(uuid.uuid4()),
        "project_id": None,
        "title": "Test Task",
        "description": "Test description",
        "priority": Priority.MEDIUM,
        "severity": Severity.MEDIUM,
        "estimated_minutes": 60,
        "actual_minutes": 0,
        "deadline": None,
        "is_done": False,
        "has_blocker": False,
        "waiting_for": None,
        "moved_to_next_day": 0,
        "created_at": now,
    }


@pytest.fixture
def make_task(sample_task_base):
    """Factory for tasks with a fresh id and overridden attributes."""
    def _make(**overrides):
        return Task(**{**sample_task_base, "id": str(uuid.uuid4()), **overrides})
    return _make


@pytest.fixture
def make_subtask(now):
    """Factory for subtasks of a given task."""
    def _make(task_id, **overrides):
        base = {
            "id": str(uuid.uuid4()),
            "task_id": task_id,
            "title": "Test Subtask",
            "estimated_hours": 1.0,
            "created_at": now,
        }
        return SubTask(**{**base, **overrides})
    return _make


@pytest.fixture
def sample_task(sample_task_base):
    """Create a sample Task object for testing."""
    return Task(**sample_task_base)


@pytest.fixture
def blocked_task(sample_task_base):
    return Task(**{**sample_task_base, "has_blocker": True, "blocker_description": "Waiting on review"})


@pytest.fixture
def done_task(sample_task_base):
    return Task(**{**sample_task_base, "is_done": True})


@pytest.fixture
def sample_project(now):
    return Project(id="project-1", name="Test Project", created_at=now)


@pytest.fixture
def scored(make_task):
    """Factory wrapping a new task in a ScoredTask with a fixed score."""
    def _scored(score, **overrides):
        return ScoredTask(
            task=make_task(**overrides),
            urgency_score=score,
            urgency_level=urgency_level(score),
            urgency_reason="test",
        )
    return _scored
