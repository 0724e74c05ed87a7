"""Authentication service - registration, login and profile lookup."""
import logging
from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId

from app.models.user import User, UserCreate
from app.utils.auth import create_access_token, hash_password, verify_password


logger = logging.getLogger(__name__)


class AuthService:
    """Service for handling user authentication."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.users = db["users"]

    def _doc_to_user(self, doc: dict) -> User:
        """Convert database document to User model, dropping the password hash."""
        return User(
            _id=str(doc["_id"]),
            email=doc["email"],
            first_name=doc.get("first_name", ""),
            last_name=doc.get("last_name", ""),
            profile_image_url=doc.get("profile_image_url"),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    async def register_user(self, user_create: UserCreate) -> User:
        """
        Register a new user.

        Args:
            user_create: Registration data including the plain password

        Returns:
            User object (without password)

        Raises:
            ValueError: If email is already registered
        """
        email = user_create.email.lower()
        existing = await self.users.find_one({"email": email})
        if existing:
            raise ValueError("Email already registered")

        now = datetime.now(timezone.utc)
        user_doc = {
            "email": email,
            "password_hash": hash_password(user_create.password),
            "first_name": user_create.first_name,
            "last_name": user_create.last_name,
            "profile_image_url": user_create.profile_image_url,
            "created_at": now,
            "updated_at": now,
        }

        result = await self.users.insert_one(user_doc)
        user_doc["_id"] = result.inserted_id
        logger.info("Registered user %s", user_doc["_id"])

        return self._doc_to_user(user_doc)

    async def login(self, email: str, password: str) -> str:
        """
        Check credentials and issue a JWT.

        Raises:
            ValueError: If credentials are invalid
        """
        user_doc = await self.users.find_one({"email": email.lower()})
        if not user_doc or not verify_password(password, user_doc["password_hash"]):
            logger.info("Rejected login for %s", email)
            raise ValueError("Invalid email or password")

        return create_access_token(user_id=str(user_doc["_id"]))

    async def get_user_by_id(self, user_id: str) -> User:
        """
        Get user by ID.

        Raises:
            ValueError: If the id is malformed or no such user exists
        """
        try:
            object_id = ObjectId(user_id)
        except (InvalidId, TypeError):
            raise ValueError("Invalid user ID format")

        user_doc = await self.users.find_one({"_id": object_id})
        if not user_doc:
            raise ValueError("User not found")

        return self._doc_to_user(user_doc)
