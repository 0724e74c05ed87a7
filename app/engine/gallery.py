"""Image lookups for item cards and the gallery page."""
from typing import Optional, Sequence

from pydantic import BaseModel

from app.models.bucket_item import BucketItem, ItemStatus


_UNSPLASH = "https://images.unsplash.com/{photo}?ixlib=rb-4.0.3&auto=format&fit=crop&w=800&h=450"

CATEGORY_PLACEHOLDERS = {
    "Travel": _UNSPLASH.format(photo="photo-1501426026826-31c667bdf23d"),
    "Adventure": _UNSPLASH.format(photo="photo-1521673252667-e05da380b252"),
    "Personal Growth": _UNSPLASH.format(photo="photo-1525201548942-d8732f6617a0"),
    "Education": _UNSPLASH.format(photo="photo-1519904981063-b0cf448d479e"),
    "Health": _UNSPLASH.format(photo="photo-1571019613454-1cb2f99b2d8b"),
    "Finance": _UNSPLASH.format(photo="photo-1526304640581-d334cdbbf45e"),
    "Creativity": _UNSPLASH.format(photo="photo-1513364776144-60967b0f800f"),
    "Skill": _UNSPLASH.format(photo="photo-1516321318423-f06f85e504b3"),
    "Relationships": _UNSPLASH.format(photo="photo-1541943181603-d8fe267a5dcf"),
}
DEFAULT_PLACEHOLDER = _UNSPLASH.format(photo="photo-1483347756197-71ef80e95f73")


class GallerySections(BaseModel):
    """Items that carry their own image, grouped by status."""

    completed: list[BucketItem]
    in_progress: list[BucketItem]
    not_started: list[BucketItem]

    @property
    def total(self) -> int:
        return len(self.completed) + len(self.in_progress) + len(self.not_started)


def placeholder_image_url(category: Optional[str]) -> str:
    """Stock image for a category; unknown or missing categories share one."""
    return CATEGORY_PLACEHOLDERS.get(category or "", DEFAULT_PLACEHOLDER)


def display_image_url(item: BucketItem) -> str:
    """The item's own image, else its category placeholder."""
    return item.image_url or placeholder_image_url(item.category)


def build_gallery(records: Sequence[BucketItem]) -> GallerySections:
    """
    Group the items that carry their own image by status.

    Args:
        records: Snapshot of one owner's items

    Returns:
        GallerySections; items without an image_url are left out
    """
    with_images = [item for item in records if item.image_url]
    return GallerySections(
        completed=[item for item in with_images if item.status == ItemStatus.COMPLETED],
        in_progress=[item for item in with_images if item.status == ItemStatus.IN_PROGRESS],
        not_started=[item for item in with_images if item.status == ItemStatus.NOT_STARTED],
    )
