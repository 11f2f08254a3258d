"""Constants for NowWhat.

This module centralizes all magic numbers and default values used by the engine.
"""


# Task defaults
DEFAULT_ESTIMATED_MINUTES = 60
DEFAULT_FOCUS_MINUTES = 30

# Urgency score components (max 30 + 20 + 40 + 10, plus up to 10 anti-starvation)
PRIORITY_POINTS_CRITICAL = 30
PRIORITY_POINTS_IMMEDIATE = 25
PRIORITY_POINTS_HIGH = 20
PRIORITY_POINTS_MEDIUM = 10
PRIORITY_POINTS_LOW = 5

SEVERITY_POINTS_CRITICAL = 20
SEVERITY_POINTS_HIGH = 15
SEVERITY_POINTS_MEDIUM = 10
SEVERITY_POINTS_LOW = 5

TIME_PRESSURE_OVERDUE = 40
TIME_PRESSURE_UNDER_DAY_BASE = 35
TIME_PRESSURE_UNDER_DAY_RAMP = 5
TIME_PRESSURE_UNDER_3_DAYS = 25
TIME_PRESSURE_UNDER_WEEK = 15
TIME_PRESSURE_DISTANT = 5
TIME_PRESSURE_NO_DEADLINE = 5

MOMENTUM_STARTED_BONUS = 5
MOMENTUM_FITS_TODAY_BONUS = 5

MOVED_DAY_BOOST = 2
MOVED_DAY_BOOST_MAX = 10

MIN_URGENCY_SCORE = 0
MAX_URGENCY_SCORE = 100

# Urgency level lower bounds (inclusive)
URGENCY_CRITICAL_THRESHOLD = 85
URGENCY_VERY_HIGH_THRESHOLD = 70
URGENCY_HIGH_THRESHOLD = 50
URGENCY_MEDIUM_THRESHOLD = 30

# Reason: postponed "chronically" when moved more than this many times
PROCRASTINATION_MOVES = 3

# Capacity & recommendations
WORKLOAD_SCORE_THRESHOLD = 30
TODAY_TASK_LIMIT = 10
SHOULD_WORK_SCORE_OVERRIDE = 60
SHOULD_WORK_NO_DEADLINE_SCORE = 40
ATTENTION_SCORE_THRESHOLD = 75
ATTENTION_MOVES_THRESHOLD = 3
HIGH_WORKLOAD_FACTOR = 1.5
LOW_CAPACITY_FACTOR = 0.3
DEADLINE_APPROACHING_MIN_HOURS = 1
DEADLINE_APPROACHING_MAX_HOURS = 24
FALLBACK_AVAILABLE_MINUTES = 480

# Project risk
RISK_CRITICAL_UTILIZATION = 1.2
RISK_WARNING_UTILIZATION = 0.85
WORK_DAYS_PER_WEEK = 5
DAYS_PER_WEEK = 7

# Scheduling
SCHEDULE_HORIZON_DAYS = 7
MIN_SPLIT_MINUTES = 60  # one-hour minimum for a split segment
