"""Insights router - achievements, statistics, reminders, gallery and inspiration."""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel

from app.config import settings
from app.database import get_database
from app.engine.achievements import AchievementReport, evaluate_achievements
from app.engine.gallery import GallerySections, build_gallery, placeholder_image_url
from app.engine.inspiration import (
    InspirationReport,
    find_idea,
    idea_to_item,
    inspiration_categories,
    quote_of_the_day,
    suggest_ideas,
)
from app.engine.reminders import ReminderReport, build_reminders, dismiss, reset_dismissed
from app.engine.statistics import StatisticsReport, build_statistics
from app.models.bucket_item import BucketItem
from app.routers.auth import get_current_user_id
from app.services.bucket_service import BucketListService
from app.services.dismissal_service import DismissalService
from app.utils.clock import get_today


router = APIRouter(prefix="/insights", tags=["insights"])


class PlaceholderResponse(BaseModel):
    """Placeholder image for a category."""

    category: Optional[str]
    image_url: str


class IdeaSelection(BaseModel):
    """Catalog idea to add to the list."""

    title: str


@router.get("/achievements", response_model=AchievementReport)
async def get_achievements(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Earned and locked achievements for the authenticated user.

    - Requires authentication
    - Locked achievements report progress from 0 to 99
    """
    records = await BucketListService(db).list_items(owner_id=user_id)
    return evaluate_achievements(records)


@router.get("/statistics", response_model=StatisticsReport)
async def get_statistics(
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db=Depends(get_database),
):
    """
    Status, category and priority breakdowns plus completion timeline.

    - Requires authentication
    """
    records = await BucketListService(db).list_items(owner_id=user_id)
    return build_statistics(records, today)


@router.get("/reminders", response_model=ReminderReport)
async def get_reminders(
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db=Depends(get_database),
):
    """
    Reminders for open items that are overdue or due soon.

    - Requires authentication
    - Dismissed reminders are listed but excluded from `active`
    """
    records = await BucketListService(db).list_items(owner_id=user_id)
    dismissed = await DismissalService(db).get_dismissed(owner_id=user_id)
    return build_reminders(
        records,
        today,
        dismissed_ids=dismissed,
        window_days=settings.reminder_window_days,
    )


@router.post("/reminders/{item_id}/dismiss", response_model=ReminderReport)
async def dismiss_reminder(
    item_id: int,
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db=Depends(get_database),
):
    """
    Dismiss the reminder for an item.

    - Requires authentication
    - Returns 404 if the item is not one of the user's
    - Returns the refreshed reminder report
    """
    records = await BucketListService(db).list_items(owner_id=user_id)
    owned_ids = {item.id for item in records}
    if item_id not in owned_ids:
        raise HTTPException(status_code=404, detail="Item not found")

    dismissals = DismissalService(db)
    stored = await dismissals.get_dismissed(owner_id=user_id)
    # ids of deleted items drop out whenever the set is rewritten
    dismissed = dismiss(stored & owned_ids, item_id)
    await dismissals.save_dismissed(owner_id=user_id, item_ids=dismissed)

    return build_reminders(
        records,
        today,
        dismissed_ids=dismissed,
        window_days=settings.reminder_window_days,
    )


@router.delete("/reminders/dismissed", status_code=status.HTTP_204_NO_CONTENT)
async def reset_dismissed_reminders(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Restore every dismissed reminder.

    - Requires authentication
    """
    await DismissalService(db).save_dismissed(owner_id=user_id, item_ids=reset_dismissed())
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/gallery", response_model=GallerySections)
async def get_gallery(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Items with their own images, grouped by status.

    - Requires authentication
    """
    records = await BucketListService(db).list_items(owner_id=user_id)
    return build_gallery(records)


@router.get("/placeholder", response_model=PlaceholderResponse)
async def get_placeholder(category: Optional[str] = Query(None)):
    """Stock image used for items without their own picture."""
    return PlaceholderResponse(category=category, image_url=placeholder_image_url(category))


@router.get("/inspiration", response_model=InspirationReport)
async def get_inspiration(
    category: Optional[str] = Query(None),
    hide_existing: bool = Query(True),
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db=Depends(get_database),
):
    """
    Quote of the day and curated ideas for new goals.

    - Requires authentication
    - `category` accepts a tab name ("personal") or category ("Personal Growth")
    - Ideas already on the user's list are left out unless hide_existing is false
    """
    records = []
    if hide_existing:
        records = await BucketListService(db).list_items(owner_id=user_id)
    return InspirationReport(
        quote=quote_of_the_day(today.toordinal()),
        categories=inspiration_categories(),
        ideas=suggest_ideas(records, category),
    )


@router.post("/inspiration", response_model=BucketItem, status_code=status.HTTP_201_CREATED)
async def add_inspiration(
    selection: IdeaSelection,
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db=Depends(get_database),
):
    """
    Add a catalog idea to the user's list.

    - Requires authentication
    - Returns 404 if no idea has that title
    """
    idea = find_idea(selection.title)
    if idea is None:
        raise HTTPException(status_code=404, detail="Idea not found")

    return await BucketListService(db).create_item(
        owner_id=user_id,
        item_create=idea_to_item(idea),
        today=today,
    )
