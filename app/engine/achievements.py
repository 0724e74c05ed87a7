"""Achievement evaluation over a snapshot of bucket list items.

The catalog is a fixed table. Each entry pairs an identifier with two pure
functions of the snapshot: a predicate deciding whether the badge is earned
and a progress function used while it is still locked.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from pydantic import BaseModel

from app.engine.dates import parse_date, shift_month
from app.models.bucket_item import BucketItem, ItemStatus, Priority


LEARNING_CATEGORIES = frozenset({"Personal Growth", "Skill"})
MAX_LOCKED_PROGRESS = 99


class Tier(str, Enum):
    """Achievement rank, presentational only."""

    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"


Records = Sequence[BucketItem]


@dataclass(frozen=True)
class Achievement:
    """Catalog entry."""

    id: str
    title: str
    description: str
    tier: Tier
    predicate: Callable[[Records], bool]
    progress: Callable[[Records], int]


class AchievementStatus(BaseModel):
    """Serializable view of a catalog entry for one snapshot."""

    id: str
    title: str
    description: str
    tier: Tier
    earned: bool
    progress: int


class AchievementReport(BaseModel):
    """Earned and locked achievements, both in catalog order."""

    earned: list[AchievementStatus]
    locked: list[AchievementStatus]


def _completed(records: Records) -> list[BucketItem]:
    return [item for item in records if item.status == ItemStatus.COMPLETED]


def _ratio(count: int, goal: int) -> int:
    return min(count * 100 // goal, MAX_LOCKED_PROGRESS)


def _is_on_time(item: BucketItem) -> bool:
    if item.status != ItemStatus.COMPLETED:
        return False
    target = parse_date(item.target_date)
    completed_on = parse_date(item.completion_date)
    if target is None or completed_on is None:
        return False
    return completed_on <= target


def _count_completed(records: Records) -> int:
    return len(_completed(records))


def _count_high_priority(records: Records) -> int:
    return sum(1 for item in _completed(records) if item.priority == Priority.HIGH)


def _count_health(records: Records) -> int:
    return sum(1 for item in _completed(records) if item.category == "Health")


def _count_learning(records: Records) -> int:
    return sum(1 for item in _completed(records) if item.category in LEARNING_CATEGORIES)


def _count_on_time(records: Records) -> int:
    return sum(1 for item in records if _is_on_time(item))


def _category_coverage(records: Records) -> tuple[int, int]:
    """(completed categories, all categories), ignoring uncategorized items."""
    categories = {item.category for item in records if item.category}
    done = {item.category for item in _completed(records) if item.category}
    return len(done), len(categories)


def _all_categories_done(records: Records) -> bool:
    done, total = _category_coverage(records)
    return total > 0 and done == total


def _category_progress(records: Records) -> int:
    done, total = _category_coverage(records)
    if total == 0:
        return 0
    return _ratio(done, total)


def _longest_monthly_streak(records: Records) -> int:
    """Longest run of consecutive calendar months that each have a completion."""
    months = set()
    for item in _completed(records):
        completed_on = parse_date(item.completion_date)
        if completed_on is not None:
            months.add(completed_on.replace(day=1))

    longest = 0
    for month in months:
        if shift_month(month, -1) in months:
            continue
        run = 1
        while shift_month(month, run) in months:
            run += 1
        longest = max(longest, run)
    return longest


def _at_least(counter: Callable[[Records], int], goal: int) -> Callable[[Records], bool]:
    return lambda records: counter(records) >= goal


def _progress_towards(counter: Callable[[Records], int], goal: int) -> Callable[[Records], int]:
    return lambda records: _ratio(counter(records), goal)


def _first_steps_progress(records: Records) -> int:
    started = any(item.status == ItemStatus.IN_PROGRESS for item in records)
    return 50 if started else 0


ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement(
        id="first-complete",
        title="First Steps",
        description="Complete your first bucket list item",
        tier=Tier.BRONZE,
        predicate=_at_least(_count_completed, 1),
        progress=_first_steps_progress,
    ),
    Achievement(
        id="five-complete",
        title="Getting Started",
        description="Complete 5 bucket list items",
        tier=Tier.SILVER,
        predicate=_at_least(_count_completed, 5),
        progress=_progress_towards(_count_completed, 5),
    ),
    Achievement(
        id="ten-complete",
        title="Achievement Hunter",
        description="Complete 10 bucket list items",
        tier=Tier.GOLD,
        predicate=_at_least(_count_completed, 10),
        progress=_progress_towards(_count_completed, 10),
    ),
    Achievement(
        id="all-categories",
        title="Explorer",
        description="Complete at least one item from each category",
        tier=Tier.GOLD,
        predicate=_all_categories_done,
        progress=_category_progress,
    ),
    Achievement(
        id="high-priority",
        title="Dream Chaser",
        description="Complete 3 high priority items",
        tier=Tier.SILVER,
        predicate=_at_least(_count_high_priority, 3),
        progress=_progress_towards(_count_high_priority, 3),
    ),
    Achievement(
        id="health-focus",
        title="Wellness Warrior",
        description="Complete 3 items in the Health category",
        tier=Tier.SILVER,
        predicate=_at_least(_count_health, 3),
        progress=_progress_towards(_count_health, 3),
    ),
    Achievement(
        id="learning",
        title="Lifelong Learner",
        description="Complete 3 items in the Personal Growth or Skill categories",
        tier=Tier.SILVER,
        predicate=_at_least(_count_learning, 3),
        progress=_progress_towards(_count_learning, 3),
    ),
    Achievement(
        id="deadline-master",
        title="On Time, Every Time",
        description="Complete 5 items before their target dates",
        tier=Tier.GOLD,
        predicate=_at_least(_count_on_time, 5),
        progress=_progress_towards(_count_on_time, 5),
    ),
    Achievement(
        id="consistency",
        title="Consistent Achiever",
        description="Complete at least one item every month for 3 consecutive months",
        tier=Tier.GOLD,
        predicate=_at_least(_longest_monthly_streak, 3),
        progress=_progress_towards(_longest_monthly_streak, 3),
    ),
)


def evaluate_achievements(
    records: Records,
    catalog: Sequence[Achievement] = ACHIEVEMENTS,
) -> AchievementReport:
    """
    Split the catalog into earned and locked achievements for a snapshot.

    Args:
        records: Snapshot of one owner's items (may be empty)
        catalog: Achievement table to evaluate, in display order

    Returns:
        AchievementReport; locked entries carry progress in [0, 99]
    """
    earned = []
    locked = []
    for achievement in catalog:
        is_earned = achievement.predicate(records)
        if is_earned:
            progress = 100
        else:
            progress = max(0, min(achievement.progress(records), MAX_LOCKED_PROGRESS))
        status = AchievementStatus(
            id=achievement.id,
            title=achievement.title,
            description=achievement.description,
            tier=achievement.tier,
            earned=is_earned,
            progress=progress,
        )
        (earned if is_earned else locked).append(status)

    return AchievementReport(earned=earned, locked=locked)
