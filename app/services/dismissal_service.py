"""Dismissal service - stores which reminders each user has dismissed."""
import logging
from datetime import datetime, timezone
from typing import AbstractSet


logger = logging.getLogger(__name__)


class DismissalService:
    """Owner-scoped set of dismissed reminder item ids."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.dismissals = db["reminder_dismissals"]

    async def get_dismissed(self, owner_id: str) -> frozenset[int]:
        """Dismissed item ids for an owner (empty when none stored)."""
        doc = await self.dismissals.find_one({"_id": owner_id})
        if not doc:
            return frozenset()
        return frozenset(doc.get("item_ids", []))

    async def save_dismissed(self, owner_id: str, item_ids: AbstractSet[int]) -> None:
        """Replace the stored set for an owner."""
        await self.dismissals.update_one(
            {"_id": owner_id},
            {
                "$set": {
                    "item_ids": sorted(item_ids),
                    "updated_at": datetime.now(timezone.utc),
                }
            },
            upsert=True,
        )
        logger.info("Stored %d dismissed reminders for %s", len(item_ids), owner_id)

    async def discard(self, owner_id: str, item_id: int) -> None:
        """Forget a dismissal, e.g. once its item has been deleted."""
        await self.dismissals.update_one(
            {"_id": owner_id},
            {"$pull": {"item_ids": item_id}},
        )
