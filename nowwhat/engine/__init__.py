"""Scheduling engine for NowWhat."""

from nowwhat.engine.urgency import (
    calculate_urgency_score,
    urgency_level,
    urgency_reason,
    score_task,
    score_tasks,
    sort_by_urgency,
    completion_probability,
    recommended_focus_duration,
)
from nowwhat.engine.capacity import (
    TaskRecommendations,
    resolve_available_minutes,
    workload_for_range,
    recommend_focus_task,
    get_tasks_for_today,
    should_work_on_task,
    get_warnings,
    get_tasks_needing_attention,
    generate_recommendations,
    roll_over_unfinished,
    update_streak,
)
from nowwhat.engine.risk import (
    calculate_project_risk,
    predict_project_completion,
    will_miss_deadline,
    is_project_finished,
    build_project_view,
    build_project_views,
)
from nowwhat.engine.scheduler import (
    schedule_tasks_for_week,
    balance_workload,
    unscheduled_tasks,
    scheduled_minutes_by_day,
)
from nowwhat.engine.stats import (
    ProductivityStats,
    calculate_efficiency,
    calculate_productivity_score,
    build_productivity_stats,
    format_minutes,
)

__all__ = [
    "calculate_urgency_score",
    "urgency_level",
    "urgency_reason",
    "score_task",
    "score_tasks",
    "sort_by_urgency",
    "completion_probability",
    "recommended_focus_duration",
    "TaskRecommendations",
    "resolve_available_minutes",
    "workload_for_range",
    "recommend_focus_task",
    "get_tasks_for_today",
    "should_work_on_task",
    "get_warnings",
    "get_tasks_needing_attention",
    "generate_recommendations",
    "roll_over_unfinished",
    "update_streak",
    "calculate_project_risk",
    "predict_project_completion",
    "will_miss_deadline",
    "is_project_finished",
    "build_project_view",
    "build_project_views",
    "schedule_tasks_for_week",
    "balance_workload",
    "unscheduled_tasks",
    "scheduled_minutes_by_day",
    "ProductivityStats",
    "calculate_efficiency",
    "calculate_productivity_score",
    "build_productivity_stats",
    "format_minutes",
]
