"""Tests for weekly scheduling and workload balancing.

The default profile works 480 minutes a day, Sunday through Thursday.
"""

from datetime import date, datetime, timedelta

from nowwhat.engine.scheduler import (
    schedule_tasks_for_week,
    unscheduled_tasks,
    scheduled_minutes_by_day,
    balance_workload,
)
from nowwhat.models.schedule import FullTask, SplitTask
from nowwhat.models.user import UserProfile

SUNDAY = date(2024, 1, 7)


def day(offset):
    return SUNDAY + timedelta(days=offset)


def summary(items):
    """(title, kind, minutes) for each item of a day bucket."""
    return [(item.task_with_subs.task.title, item.kind, item.estimated_minutes) for item in items]


class TestScheduleTasksForWeek:
    """Test schedule_tasks_for_week() packing."""

    def test_single_task_placed_whole(self, scored, user):
        task = scored(50, title="A", estimated_minutes=60)

        schedule = schedule_tasks_for_week([task], [], user, SUNDAY)

        assert list(schedule) == [day(i) for i in range(7)]
        assert len(schedule[day(0)]) == 1
        item = schedule[day(0)][0]
        assert isinstance(item, FullTask)
        assert item.scheduled_date == day(0)
        assert item.task_with_subs.task is task.task
        assert all(schedule[day(i)] == [] for i in range(1, 7))

    def test_accepts_datetime_start(self, scored, user):
        schedule = schedule_tasks_for_week([scored(50)], [], user, datetime(2024, 1, 7, 15, 30))
        assert len(schedule[SUNDAY]) == 1

    def test_highest_urgency_first(self, scored, user):
        low = scored(20, title="low", estimated_minutes=30)
        high = scored(90, title="high", estimated_minutes=30)

        schedule = schedule_tasks_for_week([low, high], [], user, SUNDAY)
        assert [t for t, _, _ in summary(schedule[day(0)])] == ["high", "low"]

    def test_ties_keep_input_order(self, scored, user):
        first = scored(50, title="first", estimated_minutes=30)
        second = scored(50, title="second", estimated_minutes=30)

        schedule = schedule_tasks_for_week([first, second], [], user, SUNDAY)
        assert [t for t, _, _ in summary(schedule[day(0)])] == ["first", "second"]

    def test_packing_stops_when_too_little_is_left_to_split(self, scored, user):
        """45 minutes left is below the split minimum, so B waits for Monday."""
        a = scored(90, title="A", estimated_minutes=435)
        b = scored(80, title="B", estimated_minutes=90)

        schedule = schedule_tasks_for_week([a, b], [], user, SUNDAY)

        assert summary(schedule[day(0)]) == [("A", "full", 435)]
        assert summary(schedule[day(1)]) == [("B", "full", 90)]

    def test_stop_does_not_skip_to_smaller_tasks(self, scored, user):
        big = scored(90, title="big", estimated_minutes=450)
        medium = scored(80, title="medium", estimated_minutes=100)
        small = scored(70, title="small", estimated_minutes=20)

        schedule = schedule_tasks_for_week([big, medium, small], [], user, SUNDAY)

        assert summary(schedule[day(0)]) == [("big", "full", 450)]
        assert summary(schedule[day(1)]) == [("medium", "full", 100), ("small", "full", 20)]

    def test_split_across_consecutive_days(self, scored, user):
        a = scored(90, title="A", estimated_minutes=400)
        b = scored(80, title="B", estimated_minutes=200)

        schedule = schedule_tasks_for_week([a, b], [], user, SUNDAY)

        assert summary(schedule[day(0)]) == [("A", "full", 400), ("B", "split", 80)]
        assert summary(schedule[day(1)]) == [("B", "split", 120)]
        part_one, part_two = schedule[day(0)][1], schedule[day(1)][0]
        assert (part_one.part_number, part_two.part_number) == (1, 2)
        assert part_one.estimated_minutes + part_two.estimated_minutes == 200
        assert part_two.scheduled_date == day(1)

    def test_second_segment_does_not_reduce_next_day(self, scored, user):
        a = scored(90, title="A", estimated_minutes=400)
        b = scored(80, title="B", estimated_minutes=200)
        c = scored(70, title="C", estimated_minutes=480)

        schedule = schedule_tasks_for_week([a, b, c], [], user, SUNDAY)
        assert summary(schedule[day(1)]) == [("B", "split", 120), ("C", "full", 480)]

    def test_second_segment_may_land_on_non_work_day(self, scored, user):
        thursday = date(2024, 1, 11)
        task = scored(90, title="A", estimated_minutes=500)

        schedule = schedule_tasks_for_week([task], [], user, thursday, days=3)

        assert summary(schedule[thursday]) == [("A", "split", 480)]
        assert summary(schedule[date(2024, 1, 12)]) == [("A", "split", 20)]
        assert schedule[date(2024, 1, 13)] == []

    def test_non_work_days_stay_empty(self, scored, user):
        tasks = [scored(50, estimated_minutes=480) for _ in range(7)]

        schedule = schedule_tasks_for_week(tasks, [], user, SUNDAY)

        assert schedule[day(5)] == []
        assert schedule[day(6)] == []
        assert [len(schedule[day(i)]) for i in range(5)] == [1, 1, 1, 1, 1]
        assert len(unscheduled_tasks(tasks, schedule)) == 2

    def test_last_day_split_spills_past_horizon(self, scored, user):
        a = scored(90, title="A", estimated_minutes=420)
        b = scored(80, title="B", estimated_minutes=200)

        schedule = schedule_tasks_for_week([a, b], [], user, SUNDAY, days=1)

        assert list(schedule) == [day(0), day(1)]
        assert summary(schedule[day(1)]) == [("B", "split", 140)]

    def test_unplaced_tasks_are_absent(self, scored, user):
        a = scored(90, title="A", estimated_minutes=480)
        b = scored(80, title="B", estimated_minutes=60)

        schedule = schedule_tasks_for_week([a, b], [], user, SUNDAY, days=1)

        assert summary(schedule[day(0)]) == [("A", "full", 480)]
        assert unscheduled_tasks([a, b], schedule) == [b]

    def test_each_task_appears_at_most_twice(self, scored):
        every_day = UserProfile(work_days={1, 2, 3, 4, 5, 6, 7})
        tasks = [scored(90 - i, estimated_minutes=minutes) for i, minutes in enumerate([300, 250, 400, 90, 700, 30])]

        schedule = schedule_tasks_for_week(tasks, [], every_day, SUNDAY)

        for s in tasks:
            items = [item for items in schedule.values() for item in items if item.task_with_subs.task.id == s.task.id]
            assert len(items) <= 2
            if len(items) == 2:
                assert all(isinstance(item, SplitTask) for item in items)
                assert sum(item.estimated_minutes for item in items) == s.task.estimated_minutes

    def test_blocked_and_done_tasks_excluded(self, scored, user):
        tasks = [scored(0, has_blocker=True), scored(0, waiting_for="Dana"), scored(0, is_done=True)]

        schedule = schedule_tasks_for_week(tasks, [], user, SUNDAY)

        assert all(items == [] for items in schedule.values())
        assert unscheduled_tasks(tasks, schedule) == []

    def test_uses_parent_first_totals(self, scored, make_subtask, user):
        parent = scored(90, title="parent", estimated_minutes=0)
        subtasks = [make_subtask(parent.task.id, estimated_hours=1.5), make_subtask(parent.task.id, estimated_hours=0.5)]

        schedule = schedule_tasks_for_week([parent], subtasks, user, SUNDAY)
        assert summary(schedule[day(0)]) == [("parent", "full", 120)]

    def test_scheduled_minutes_by_day(self, scored, user):
        a = scored(90, estimated_minutes=400)
        b = scored(80, estimated_minutes=200)

        schedule = schedule_tasks_for_week([a, b], [], user, SUNDAY, days=3)
        assert scheduled_minutes_by_day(schedule) == {day(0): 480, day(1): 120, day(2): 0}


class TestBalanceWorkload:
    """Test balance_workload() bucket filling."""

    def test_overflow_moves_on_then_drops(self, scored):
        a = scored(90, title="A", estimated_minutes=60)
        b = scored(80, title="B", estimated_minutes=50)
        c = scored(70, title="C", estimated_minutes=40)
        d = scored(60, title="D", estimated_minutes=30)
        e = scored(50, title="E", estimated_minutes=10)

        buckets = balance_workload([e, d, c, b, a], 100, 2)
        assert buckets == [[a], [b, c]]

    def test_task_larger_than_capacity_is_dropped(self, scored):
        a = scored(90, estimated_minutes=80)
        too_big = scored(80, estimated_minutes=150)
        c = scored(70, estimated_minutes=90)

        assert balance_workload([a, too_big, c], 100, 3) == [[a], [c], []]

    def test_always_returns_requested_bucket_count(self, scored):
        assert balance_workload([], 100, 4) == [[], [], [], []]
        assert balance_workload([scored(50)], 100, 0) == []

    def test_ignores_blocked_and_done(self, scored):
        open_task = scored(10, estimated_minutes=30)
        buckets = balance_workload([scored(90, has_blocker=True), scored(0, is_done=True), open_task], 100, 1)
        assert buckets == [[open_task]]
