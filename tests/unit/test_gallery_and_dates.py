"""Tests for image lookups and date helpers."""
from datetime import date, datetime, timezone

from app.engine.dates import days_between, parse_date, parse_datetime, trailing_months
from app.engine.gallery import (
    CATEGORY_PLACEHOLDERS,
    DEFAULT_PLACEHOLDER,
    build_gallery,
    display_image_url,
    placeholder_image_url,
)


class TestPlaceholders:
    """Tests for category placeholder images."""

    def test_known_category(self):
        """Test a known category maps to its own image."""
        assert placeholder_image_url("Travel") == CATEGORY_PLACEHOLDERS["Travel"]
        assert "photo-1501426026826" in placeholder_image_url("Travel")

    def test_unknown_or_missing_category(self):
        """Test everything else falls back to the default image."""
        assert placeholder_image_url("Other") == DEFAULT_PLACEHOLDER
        assert placeholder_image_url(None) == DEFAULT_PLACEHOLDER

    def test_display_prefers_own_image(self, make_item):
        """Test an item's own image wins over the placeholder."""
        own = make_item(1, category="Travel", image_url="https://example.com/me.jpg")
        bare = make_item(2, category="Health")

        assert display_image_url(own) == "https://example.com/me.jpg"
        assert display_image_url(bare) == CATEGORY_PLACEHOLDERS["Health"]


class TestGallery:
    """Tests for build_gallery."""

    def test_groups_items_with_images(self, make_item):
        """Test only items with images appear, split by status."""
        records = [
            make_item(1, status="Completed", image_url="https://example.com/1.jpg"),
            make_item(2, status="In Progress", image_url="https://example.com/2.jpg"),
            make_item(3, image_url="https://example.com/3.jpg"),
            make_item(4, status="Completed"),
        ]

        gallery = build_gallery(records)

        assert [item.id for item in gallery.completed] == [1]
        assert [item.id for item in gallery.in_progress] == [2]
        assert [item.id for item in gallery.not_started] == [3]
        assert gallery.total == 3


class TestDates:
    """Tests for date parsing helpers."""

    def test_parse_date_accepts_common_forms(self):
        """Test dates, datetimes and ISO strings all parse."""
        assert parse_date(date(2025, 3, 14)) == date(2025, 3, 14)
        assert parse_date(datetime(2025, 3, 14, 23, 59)) == date(2025, 3, 14)
        assert parse_date("2025-03-14") == date(2025, 3, 14)
        assert parse_date("2025-03-14T10:00:00Z") == date(2025, 3, 14)

    def test_parse_date_rejects_garbage(self):
        """Test unparseable values come back as None."""
        assert parse_date(None) is None
        assert parse_date("") is None
        assert parse_date("2025-02-30") is None
        assert parse_date("soon") is None
        assert parse_date(12345) is None

    def test_parse_datetime_drops_timezone(self):
        """Test aware datetimes become naive UTC."""
        aware = datetime(2025, 3, 14, 12, 0, tzinfo=timezone.utc)

        assert parse_datetime(aware) == datetime(2025, 3, 14, 12, 0)
        assert parse_datetime(date(2025, 3, 14)) == datetime(2025, 3, 14)

    def test_days_between(self):
        """Test signed calendar-day differences."""
        assert days_between(date(2025, 6, 15), date(2025, 6, 20)) == 5
        assert days_between(date(2025, 6, 15), date(2025, 6, 10)) == -5

    def test_trailing_months(self):
        """Test the window ends at the current month."""
        months = trailing_months(date(2025, 1, 31), 2)

        assert months == [date(2024, 12, 1), date(2025, 1, 1)]
