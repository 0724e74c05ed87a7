"""Bucket list router - CRUD endpoints and the paginated list view."""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.config import settings
from app.database import get_database
from app.engine.listing import ALL, ListingPage, ListingQuery, ListView, SortOrder, apply_listing
from app.models.bucket_item import BucketItem, BucketItemCreate, BucketItemUpdate
from app.routers.auth import get_current_user_id
from app.services.bucket_service import BucketListService
from app.services.dismissal_service import DismissalService
from app.utils.clock import get_today


router = APIRouter(prefix="/bucket-list", tags=["bucket-list"])


@router.get("", response_model=list[BucketItem])
async def list_items(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    List every item for the authenticated user, newest first.

    - Requires authentication
    """
    service = BucketListService(db)
    return await service.list_items(owner_id=user_id)


@router.get("/view", response_model=ListingPage)
async def view_items(
    view: ListView = Query(ListView.ALL, description="All, Upcoming or Completed"),
    item_status: str = Query(ALL, alias="status", description="Exact status or All"),
    category: str = Query(ALL, description="Exact category or All"),
    priority: str = Query(ALL, description="Exact priority or All"),
    tags: list[str] = Query([], description="Items must carry every tag"),
    search: str = Query("", description="Case-insensitive text search"),
    sort: Optional[SortOrder] = Query(None, description="Sort order"),
    page: int = Query(1, description="1-indexed page number"),
    page_size: Optional[int] = Query(None, description="Items per page"),
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db=Depends(get_database),
):
    """
    Filter, sort and paginate the user's items.

    - Requires authentication
    - Returns 400 for a page or page size below 1
    """
    query = ListingQuery(
        view=view,
        status=item_status,
        category=category,
        priority=priority,
        tags=tags,
        search=search,
        sort=sort,
        page=page,
        page_size=settings.default_page_size if page_size is None else page_size,
    )
    service = BucketListService(db)
    records = await service.list_items(owner_id=user_id)
    try:
        return apply_listing(records, query, today)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{item_id}", response_model=BucketItem)
async def get_item(
    item_id: int,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Get a single item.

    - Requires authentication
    - Returns 404 if the item is missing or owned by someone else
    """
    service = BucketListService(db)
    try:
        return await service.get_item(owner_id=user_id, item_id=item_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=BucketItem, status_code=status.HTTP_201_CREATED)
async def create_item(
    item: BucketItemCreate,
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db=Depends(get_database),
):
    """
    Create a new item.

    - Requires authentication
    - Items created as Completed get today's completion date if none given
    """
    service = BucketListService(db)
    return await service.create_item(owner_id=user_id, item_create=item, today=today)


@router.patch("/{item_id}", response_model=BucketItem)
async def update_item(
    item_id: int,
    item_update: BucketItemUpdate,
    user_id: str = Depends(get_current_user_id),
    today: date = Depends(get_today),
    db=Depends(get_database),
):
    """
    Update an item.

    - Requires authentication
    - Completing stamps a completion date, reopening clears it
    - Returns 404 if item not found
    """
    service = BucketListService(db)
    try:
        return await service.update_item(
            owner_id=user_id,
            item_id=item_id,
            item_update=item_update,
            today=today,
        )
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: int,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Delete an item permanently.

    - Requires authentication
    - Returns 404 if item not found
    """
    service = BucketListService(db)
    try:
        await service.delete_item(owner_id=user_id, item_id=item_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    await DismissalService(db).discard(owner_id=user_id, item_id=item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
