"""NowWhat: urgency scoring, capacity planning and weekly scheduling for personal tasks."""

__version__ = "0.1.0"
