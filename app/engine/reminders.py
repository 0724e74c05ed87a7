"""Due-date reminders with caller-held dismissal state."""
from datetime import date
from typing import AbstractSet, Optional, Sequence

from pydantic import BaseModel

from app.engine.dates import days_between, parse_date
from app.models.bucket_item import BucketItem, ItemStatus, Priority


REMINDER_WINDOW_DAYS = 30


class Reminder(BaseModel):
    """Upcoming or overdue deadline for one open item."""

    item_id: int
    title: str
    due_date: date
    days_left: int
    priority: Priority
    status: ItemStatus
    dismissed: bool
    status_text: str


class ReminderReport(BaseModel):
    """All reminders, most urgent first, plus the non-dismissed subset."""

    reminders: list[Reminder]
    active: list[Reminder]


def status_text(days_left: int) -> str:
    """
    Human-readable urgency for a reminder.

    Examples:
        >>> status_text(-2)
        'Overdue'
        >>> status_text(5)
        'Due in 5 days'
    """
    if days_left < 0:
        return "Overdue"
    if days_left == 0:
        return "Due today"
    if days_left == 1:
        return "Due tomorrow"
    return f"Due in {days_left} days"


def build_reminders(
    records: Sequence[BucketItem],
    today: date,
    dismissed_ids: Optional[AbstractSet[int]] = None,
    window_days: int = REMINDER_WINDOW_DAYS,
) -> ReminderReport:
    """
    Derive reminders for open items due within the window or overdue.

    Args:
        records: Snapshot of one owner's items
        today: Evaluation date supplied by the caller's clock
        dismissed_ids: Item ids the owner has dismissed
        window_days: Largest days_left that still yields a reminder

    Returns:
        ReminderReport sorted by days_left ascending
    """
    dismissed_ids = dismissed_ids or frozenset()
    reminders = []

    for item in records:
        if item.status == ItemStatus.COMPLETED:
            continue
        due = parse_date(item.target_date)
        if due is None:
            continue
        days_left = days_between(today, due)
        if days_left > window_days:
            continue

        reminders.append(
            Reminder(
                item_id=item.id,
                title=item.title,
                due_date=due,
                days_left=days_left,
                priority=item.priority or Priority.MEDIUM,
                status=item.status,
                dismissed=item.id in dismissed_ids,
                status_text=status_text(days_left),
            )
        )

    reminders.sort(key=lambda reminder: reminder.days_left)
    active = [reminder for reminder in reminders if not reminder.dismissed]
    return ReminderReport(reminders=reminders, active=active)


def dismiss(dismissed_ids: AbstractSet[int], item_id: int) -> frozenset[int]:
    """Return a new dismissal set that also contains item_id."""
    return frozenset(dismissed_ids) | {item_id}


def reset_dismissed() -> frozenset[int]:
    """Empty dismissal set, restoring every reminder."""
    return frozenset()
