"""Summary counts and chart series for the statistics dashboard."""
from datetime import date
from typing import Sequence

from pydantic import BaseModel

from app.engine.dates import month_key, month_label, parse_date, trailing_months
from app.models.bucket_item import BucketItem, ItemStatus, Priority


UNCATEGORIZED = "Uncategorized"
RECENT_LIMIT = 5
UPCOMING_LIMIT = 5
TIMELINE_MONTHS = 6


class StatusCounts(BaseModel):
    """Item count per status."""

    not_started: int = 0
    in_progress: int = 0
    completed: int = 0

    @property
    def total(self) -> int:
        return self.not_started + self.in_progress + self.completed


class CategoryBucket(BaseModel):
    """
    Per-category totals.

    `in_progress` counts every item that is not completed, Not Started
    included.
    """

    name: str
    total: int
    completed: int
    in_progress: int


class PriorityCounts(BaseModel):
    """Item count per priority."""

    high: int = 0
    medium: int = 0
    low: int = 0


class TimelinePoint(BaseModel):
    """Completions within one calendar month."""

    month: str
    label: str
    completed: int


class StatisticsReport(BaseModel):
    """Everything the statistics page renders."""

    total: int
    status_counts: StatusCounts
    completion_rate: int
    categories: list[CategoryBucket]
    priorities: PriorityCounts
    recent_completions: list[BucketItem]
    upcoming_deadlines: list[BucketItem]
    timeline: list[TimelinePoint]


def status_counts(records: Sequence[BucketItem]) -> StatusCounts:
    """Count items per status; unknown statuses count as Not Started."""
    counts = StatusCounts()
    for item in records:
        if item.status == ItemStatus.COMPLETED:
            counts.completed += 1
        elif item.status == ItemStatus.IN_PROGRESS:
            counts.in_progress += 1
        else:
            counts.not_started += 1
    return counts


def completion_rate(records: Sequence[BucketItem]) -> int:
    """
    Percentage of completed items, rounded half up.

    Examples:
        Two of three completed gives 67; an empty snapshot gives 0.
    """
    total = len(records)
    if total == 0:
        return 0
    completed = status_counts(records).completed
    return (200 * completed + total) // (2 * total)


def category_breakdown(records: Sequence[BucketItem]) -> list[CategoryBucket]:
    """Totals per category, largest first, ties in first-seen order."""
    totals: dict[str, list[int]] = {}
    for item in records:
        name = item.category or UNCATEGORIZED
        bucket = totals.setdefault(name, [0, 0])
        bucket[0] += 1
        if item.status == ItemStatus.COMPLETED:
            bucket[1] += 1

    buckets = [
        CategoryBucket(
            name=name,
            total=total,
            completed=completed,
            in_progress=total - completed,
        )
        for name, (total, completed) in totals.items()
    ]
    return sorted(buckets, key=lambda bucket: bucket.total, reverse=True)


def priority_breakdown(records: Sequence[BucketItem]) -> PriorityCounts:
    """Count items per priority; a missing priority counts as Medium."""
    counts = PriorityCounts()
    for item in records:
        priority = item.priority or Priority.MEDIUM
        if priority == Priority.HIGH:
            counts.high += 1
        elif priority == Priority.LOW:
            counts.low += 1
        elif priority == Priority.MEDIUM:
            counts.medium += 1
    return counts


def recent_completions(
    records: Sequence[BucketItem],
    limit: int = RECENT_LIMIT,
) -> list[BucketItem]:
    """Most recently completed items, newest first."""
    dated = []
    for item in records:
        if item.status != ItemStatus.COMPLETED:
            continue
        completed_on = parse_date(item.completion_date)
        if completed_on is not None:
            dated.append((completed_on, item))

    dated.sort(key=lambda pair: pair[0], reverse=True)
    return [item for _, item in dated[:limit]]


def upcoming_deadlines(
    records: Sequence[BucketItem],
    today: date,
    limit: int = UPCOMING_LIMIT,
) -> list[BucketItem]:
    """Open items due today or later, soonest first."""
    dated = []
    for item in records:
        if item.status == ItemStatus.COMPLETED:
            continue
        target = parse_date(item.target_date)
        if target is not None and target >= today:
            dated.append((target, item))

    dated.sort(key=lambda pair: pair[0])
    return [item for _, item in dated[:limit]]


def completion_timeline(
    records: Sequence[BucketItem],
    today: date,
    months: int = TIMELINE_MONTHS,
) -> list[TimelinePoint]:
    """Completions per month for the trailing window ending at today's month."""
    counts: dict[str, int] = {}
    for item in records:
        if item.status != ItemStatus.COMPLETED:
            continue
        completed_on = parse_date(item.completion_date)
        if completed_on is None:
            continue
        key = month_key(completed_on)
        counts[key] = counts.get(key, 0) + 1

    return [
        TimelinePoint(
            month=month_key(month),
            label=month_label(month),
            completed=counts.get(month_key(month), 0),
        )
        for month in trailing_months(today, months)
    ]


def build_statistics(records: Sequence[BucketItem], today: date) -> StatisticsReport:
    """
    Assemble the full statistics report for a snapshot.

    Args:
        records: Snapshot of one owner's items
        today: Evaluation date supplied by the caller's clock

    Returns:
        StatisticsReport
    """
    return StatisticsReport(
        total=len(records),
        status_counts=status_counts(records),
        completion_rate=completion_rate(records),
        categories=category_breakdown(records),
        priorities=priority_breakdown(records),
        recent_completions=recent_completions(records),
        upcoming_deadlines=upcoming_deadlines(records, today),
        timeline=completion_timeline(records, today),
    )
