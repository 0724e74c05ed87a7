"""Tests for Pydantic models."""
import pytest
from datetime import date, datetime
from pydantic import ValidationError


class TestBucketItemModel:
    """Tests for bucket list item models."""

    def test_status_enum_values(self):
        """Test ItemStatus uses the display labels."""
        from app.models.bucket_item import ItemStatus

        assert ItemStatus.NOT_STARTED.value == "Not Started"
        assert ItemStatus.IN_PROGRESS.value == "In Progress"
        assert ItemStatus.COMPLETED.value == "Completed"

    def test_priority_enum_values(self):
        """Test Priority has three levels."""
        from app.models.bucket_item import Priority

        assert [p.value for p in Priority] == ["Low", "Medium", "High"]

    def test_item_create_minimal(self):
        """Test creating an item with only a title."""
        from app.models.bucket_item import BucketItemCreate

        item = BucketItemCreate(title="Learn to juggle")

        assert item.title == "Learn to juggle"
        assert item.status.value == "Not Started"  # default
        assert item.priority.value == "Medium"  # default
        assert item.tags == []
        assert item.category is None
        assert item.target_date is None

    def test_item_create_full(self):
        """Test creating an item with every field."""
        from app.models.bucket_item import BucketItemCreate, ItemStatus, Priority

        item = BucketItemCreate(
            title="Walk the Camino",
            description="Start in Saint-Jean-Pied-de-Port",
            status="In Progress",
            category="Travel",
            priority="High",
            tags=["walking", "spain"],
            target_date="2026-05-01",
            image_url="https://example.com/camino.jpg",
        )

        assert item.status == ItemStatus.IN_PROGRESS
        assert item.priority == Priority.HIGH
        assert item.target_date == date(2026, 5, 1)

    @pytest.mark.parametrize("title", ["", "Go", "x" * 101])
    def test_item_create_title_length(self, title):
        """Test titles must be between 3 and 100 characters."""
        from app.models.bucket_item import BucketItemCreate

        with pytest.raises(ValidationError):
            BucketItemCreate(title=title)

    def test_item_create_description_length(self):
        """Test descriptions are capped at 500 characters."""
        from app.models.bucket_item import BucketItemCreate

        BucketItemCreate(title="Write a novel", description="x" * 500)
        with pytest.raises(ValidationError):
            BucketItemCreate(title="Write a novel", description="x" * 501)

    def test_item_create_unknown_status(self):
        """Test statuses outside the enum are rejected."""
        from app.models.bucket_item import BucketItemCreate

        with pytest.raises(ValidationError):
            BucketItemCreate(title="Learn Rust", status="Abandoned")

    def test_item_update_partial(self):
        """Test updates only record the fields that were set."""
        from app.models.bucket_item import BucketItemUpdate

        update = BucketItemUpdate(status="Completed")

        assert update.model_dump(exclude_unset=True) == {"status": "Completed"}

    def test_item_update_validates_title(self):
        """Test update titles follow the create limits."""
        from app.models.bucket_item import BucketItemUpdate

        with pytest.raises(ValidationError):
            BucketItemUpdate(title="Go")

    def test_item_alias_id_field(self):
        """Test the stored _id maps to id and serializes as id."""
        from app.models.bucket_item import BucketItem

        now = datetime(2025, 6, 15, 9, 0)
        item = BucketItem(
            _id=3,
            owner_id="user123",
            title="Swim with sharks",
            created_at=now,
            updated_at=now,
        )

        assert item.id == 3
        dumped = item.model_dump(by_alias=True)
        assert dumped["id"] == 3
        assert "_id" not in dumped


class TestUserModel:
    """Tests for User models."""

    def test_user_create_valid(self):
        """Test creating a valid user registration."""
        from app.models.user import UserCreate

        user = UserCreate(
            email="test@example.com",
            password="securepassword123",
            first_name="Ada",
            last_name="Lovelace",
        )

        assert user.email == "test@example.com"
        assert user.first_name == "Ada"
        assert user.profile_image_url is None

    def test_user_create_short_password(self):
        """Test passwords need at least eight characters."""
        from app.models.user import UserCreate

        with pytest.raises(ValidationError):
            UserCreate(email="test@example.com", password="short")

    def test_user_create_invalid_email(self):
        """Test email addresses are validated."""
        from app.models.user import UserCreate

        with pytest.raises(ValidationError):
            UserCreate(email="not-an-email", password="securepassword123")

    def test_user_has_no_password(self):
        """Test the response model carries no credentials."""
        from app.models.user import User

        now = datetime(2025, 6, 15)
        user = User(_id="abc123", email="test@example.com", created_at=now, updated_at=now)

        dumped = user.model_dump(by_alias=True)
        assert dumped["id"] == "abc123"
        assert "password" not in dumped
        assert "password_hash" not in dumped
