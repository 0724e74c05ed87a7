"""Bucket list service - per-owner storage of bucket list items."""
import logging
from datetime import date, datetime, timezone
from typing import Optional

from pydantic import ValidationError
from pymongo import DESCENDING, ReturnDocument

from app.engine.dates import parse_date
from app.models.bucket_item import BucketItem, BucketItemCreate, BucketItemUpdate, ItemStatus


logger = logging.getLogger(__name__)

ITEM_SEQUENCE = "bucket_list_items"


def _to_datetime(value: Optional[date]) -> Optional[datetime]:
    """BSON has no date type; store calendar dates at midnight."""
    if value is None:
        return None
    return datetime.combine(value, datetime.min.time())


class BucketListService:
    """Service for handling bucket list item operations."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.items = db["bucket_list_items"]
        self.counters = db["counters"]

    def _doc_to_item(self, doc: dict) -> BucketItem:
        """
        Convert database document to BucketItem model.

        Stored datetimes become calendar dates; unreadable dates become None.
        """
        return BucketItem(
            _id=doc["_id"],
            owner_id=doc["owner_id"],
            title=doc["title"],
            description=doc.get("description"),
            status=doc.get("status", ItemStatus.NOT_STARTED),
            category=doc.get("category"),
            priority=doc.get("priority") or "Medium",
            tags=doc.get("tags") or [],
            target_date=parse_date(doc.get("target_date")),
            completion_date=parse_date(doc.get("completion_date")),
            image_url=doc.get("image_url"),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    async def _next_id(self) -> int:
        """Allocate the next integer item id."""
        counter = await self.counters.find_one_and_update(
            {"_id": ITEM_SEQUENCE},
            {"$inc": {"value": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return counter["value"]

    async def create_item(
        self,
        owner_id: str,
        item_create: BucketItemCreate,
        today: date,
    ) -> BucketItem:
        """
        Create a new bucket list item.

        Args:
            owner_id: User ID who owns the item
            item_create: Item creation data
            today: Date recorded as completion date for items created completed

        Returns:
            Created item
        """
        completion_date = None
        if item_create.status == ItemStatus.COMPLETED:
            completion_date = item_create.completion_date or today

        now = datetime.now(timezone.utc)
        item_doc = {
            "_id": await self._next_id(),
            "owner_id": owner_id,
            "title": item_create.title,
            "description": item_create.description,
            "status": item_create.status.value,
            "category": item_create.category,
            "priority": item_create.priority.value,
            "tags": list(item_create.tags),
            "target_date": _to_datetime(item_create.target_date),
            "completion_date": _to_datetime(completion_date),
            "image_url": item_create.image_url,
            "created_at": now,
            "updated_at": now,
        }

        await self.items.insert_one(item_doc)
        logger.info("Created bucket list item %s for %s", item_doc["_id"], owner_id)

        return self._doc_to_item(item_doc)

    async def list_items(self, owner_id: str) -> list[BucketItem]:
        """
        List all items for an owner, most recently created first.

        Args:
            owner_id: User ID

        Returns:
            List of items; stored documents that no longer validate are skipped
        """
        cursor = self.items.find({"owner_id": owner_id}).sort("created_at", DESCENDING)
        item_docs = await cursor.to_list(length=None)

        items = []
        for doc in item_docs:
            try:
                items.append(self._doc_to_item(doc))
            except (KeyError, ValidationError):
                logger.warning("Skipping unreadable bucket list item %s", doc.get("_id"))
        return items

    async def get_item(self, owner_id: str, item_id: int) -> BucketItem:
        """
        Get a single item.

        Raises:
            ValueError: If the item does not exist or belongs to someone else
        """
        item_doc = await self.items.find_one({"_id": item_id, "owner_id": owner_id})

        if not item_doc:
            raise ValueError("Item not found")

        return self._doc_to_item(item_doc)

    async def update_item(
        self,
        owner_id: str,
        item_id: int,
        item_update: BucketItemUpdate,
        today: date,
    ) -> BucketItem:
        """
        Update an item.

        Moving to Completed without a completion date stamps today (an item
        that was already completed keeps its date); moving to any other
        status clears the completion date. A completed item never loses its
        completion date to an explicit null.

        Args:
            owner_id: User ID
            item_id: Item ID
            item_update: Update data
            today: Date used when stamping a completion

        Returns:
            Updated item

        Raises:
            ValueError: If item not found
        """
        existing = await self.items.find_one({"_id": item_id, "owner_id": owner_id})

        if not existing:
            raise ValueError("Item not found")

        changes = item_update.model_dump(exclude_unset=True)
        update_doc = {
            "updated_at": datetime.now(timezone.utc),
        }

        # title is required on stored items; an explicit null leaves it alone
        if item_update.title is not None:
            update_doc["title"] = item_update.title
        for field in ("description", "category", "image_url"):
            if field in changes:
                update_doc[field] = changes[field]
        if changes.get("tags") is not None:
            update_doc["tags"] = list(changes["tags"])
        if changes.get("priority") is not None:
            update_doc["priority"] = item_update.priority.value
        if "target_date" in changes:
            update_doc["target_date"] = _to_datetime(item_update.target_date)

        if item_update.status is not None:
            update_doc["status"] = item_update.status.value
            new_status = item_update.status.value
        else:
            new_status = existing.get("status")

        if item_update.status is not None or "completion_date" in changes:
            if new_status == ItemStatus.COMPLETED.value:
                completed_on = item_update.completion_date
                if completed_on is None and existing.get("status") == ItemStatus.COMPLETED.value:
                    completed_on = parse_date(existing.get("completion_date"))
                update_doc["completion_date"] = _to_datetime(completed_on or today)
            else:
                update_doc["completion_date"] = None

        updated_doc = await self.items.find_one_and_update(
            {"_id": item_id, "owner_id": owner_id},
            {"$set": update_doc},
            return_document=ReturnDocument.AFTER,
        )
        logger.info("Updated bucket list item %s for %s", item_id, owner_id)

        return self._doc_to_item(updated_doc)

    async def delete_item(self, owner_id: str, item_id: int) -> None:
        """
        Permanently delete an item.

        Raises:
            ValueError: If item not found
        """
        result = await self.items.delete_one({"_id": item_id, "owner_id": owner_id})

        if result.deleted_count == 0:
            raise ValueError("Item not found")

        logger.info("Deleted bucket list item %s for %s", item_id, owner_id)
