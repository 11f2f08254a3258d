"""Capacity warning model for NowWhat."""

from enum import Enum


class Warning(str, Enum):
    """Workload and deadline warnings raised for the current day."""
    HIGH_WORKLOAD = "high_workload"
    LOW_CAPACITY = "low_capacity"
    DEADLINE_APPROACHING = "deadline_approaching"
    OVERDUE = "overdue"
