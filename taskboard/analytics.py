"""Derived statistics over a task snapshot.

Every function takes the whole collection and recomputes from scratch; no
results are cached between calls. Calendar-day comparisons use the local
date of each timestamp.
"""
import math
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel

from taskboard.models import PRIORITIES, STATUSES, Task

DEFAULT_TREND_DAYS = 7
SECONDS_PER_DAY = 60 * 60 * 24


def _local_date(ts: datetime) -> date:
    return ts.astimezone().date()


def _today(today: Optional[date]) -> date:
    return today or datetime.now().astimezone().date()


def counts_by_status(tasks: Iterable[Task]) -> Dict[str, int]:
    counts = {status: 0 for status in STATUSES}
    for task in tasks:
        counts[task.status] += 1
    return counts


def counts_by_priority(tasks: Iterable[Task]) -> Dict[str, int]:
    counts = {priority: 0 for priority in PRIORITIES}
    for task in tasks:
        counts[task.priority] += 1
    return counts


def _percent(part: int, total: int) -> int:
    if total == 0:
        return 0
    # .5 rounds up, not to even
    return math.floor(part / total * 100 + 0.5)


def completion_rate(tasks: Sequence[Task]) -> int:
    completed = sum(1 for t in tasks if t.status == "COMPLETED")
    return _percent(completed, len(tasks))


def daily_completion_trend(
    tasks: Sequence[Task],
    days: int = DEFAULT_TREND_DAYS,
    today: Optional[date] = None,
) -> List[Tuple[date, int]]:
    """Completions per local calendar day for the ``days`` days ending today, oldest first."""
    end = _today(today)
    window = [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    per_day: Dict[date, int] = {}
    for task in tasks:
        if task.completedAt is not None:
            day = _local_date(task.completedAt)
            per_day[day] = per_day.get(day, 0) + 1
    return [(day, per_day.get(day, 0)) for day in window]


def average_completion_days(tasks: Sequence[Task]) -> float:
    durations = [
        (t.completedAt - t.createdAt).total_seconds() / SECONDS_PER_DAY
        for t in tasks
        if t.status == "COMPLETED" and t.completedAt is not None
    ]
    if not durations:
        return 0
    return sum(durations) / len(durations)


def most_productive_day(
    tasks: Sequence[Task],
    days: int = DEFAULT_TREND_DAYS,
    today: Optional[date] = None,
) -> Optional[date]:
    best_day, best_count = None, 0
    for day, count in daily_completion_trend(tasks, days, today):
        # strict comparison keeps the earliest day on ties
        if count > best_count:
            best_day, best_count = day, count
    return best_day


def weekly_completions(
    tasks: Sequence[Task],
    days: int = DEFAULT_TREND_DAYS,
    today: Optional[date] = None,
) -> int:
    return sum(count for _, count in daily_completion_trend(tasks, days, today))


def productivity_score(
    tasks: Sequence[Task],
    days: int = DEFAULT_TREND_DAYS,
    today: Optional[date] = None,
) -> int:
    return _percent(weekly_completions(tasks, days, today), len(tasks))


def high_priority_pending(tasks: Iterable[Task]) -> int:
    return sum(1 for t in tasks if t.priority == "HIGH" and t.status != "COMPLETED")


def created_on(tasks: Iterable[Task], day: date) -> int:
    return sum(1 for t in tasks if _local_date(t.createdAt) == day)


def completed_on(tasks: Iterable[Task], day: date) -> int:
    return sum(1 for t in tasks if t.completedAt is not None and _local_date(t.completedAt) == day)


def completed_since(tasks: Iterable[Task], since: datetime) -> int:
    return sum(1 for t in tasks if t.completedAt is not None and t.completedAt >= since)


class Progress(BaseModel):
    total: int
    completed: int
    inProgress: int
    todo: int
    completedPercent: float
    inProgressPercent: float


def progress(tasks: Sequence[Task]) -> Progress:
    counts = counts_by_status(tasks)
    total = len(tasks)
    return Progress(
        total=total,
        completed=counts["COMPLETED"],
        inProgress=counts["IN_PROGRESS"],
        todo=counts["TODO"],
        completedPercent=counts["COMPLETED"] / total * 100 if total else 0.0,
        inProgressPercent=counts["IN_PROGRESS"] / total * 100 if total else 0.0,
    )


class TrendPoint(BaseModel):
    day: date
    count: int


class DashboardSummary(BaseModel):
    total: int
    byStatus: Dict[str, int]
    byPriority: Dict[str, int]
    completionRate: int
    trend: List[TrendPoint]
    weeklyCompletions: int
    averageCompletionDays: float
    mostProductiveDay: Optional[date] = None
    productivityScore: int
    highPriorityPending: int
    createdToday: int
    completedToday: int
    completedLast7Days: int
    progress: Progress


def summarize(
    tasks: Sequence[Task],
    days: int = DEFAULT_TREND_DAYS,
    today: Optional[date] = None,
    now: Optional[datetime] = None,
) -> DashboardSummary:
    """Every dashboard metric, computed from the same snapshot."""
    day = _today(today)
    moment = now or datetime.now(timezone.utc)
    trend = daily_completion_trend(tasks, days, day)
    weekly = sum(count for _, count in trend)
    return DashboardSummary(
        total=len(tasks),
        byStatus=counts_by_status(tasks),
        byPriority=counts_by_priority(tasks),
        completionRate=completion_rate(tasks),
        trend=[TrendPoint(day=d, count=c) for d, c in trend],
        weeklyCompletions=weekly,
        averageCompletionDays=average_completion_days(tasks),
        mostProductiveDay=most_productive_day(tasks, days, day),
        productivityScore=_percent(weekly, len(tasks)),
        highPriorityPending=high_priority_pending(tasks),
        createdToday=created_on(tasks, day),
        completedToday=completed_on(tasks, day),
        completedLast7Days=completed_since(tasks, moment - timedelta(days=7)),
        progress=progress(tasks),
    )
