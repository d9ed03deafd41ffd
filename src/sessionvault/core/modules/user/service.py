from typing import Any
from uuid import UUID, uuid4

import bcrypt
import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from sessionvault.core.core import Service
from sessionvault.core.modules.user.models import User
from sessionvault.errors import AuthenticationError, NotFoundError
from sessionvault.utils import now

logger = structlog.get_logger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def password_matches(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


class UserService(Service):
    """Dashboard accounts, cached in memory. The admin account follows config."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")
        self._users: dict[UUID, User] = {}

    def get_user(self, user_id: UUID) -> User:
        if user_id not in self._users:
            raise NotFoundError(f"User '{user_id}' not found")
        return self._users[user_id]

    def has_user(self, user_id: UUID) -> bool:
        return user_id in self._users

    def authenticate(self, username: str, password: str) -> User:
        """Return the account for valid credentials, AuthenticationError otherwise."""
        user = next((u for u in self._users.values() if u.username == username), None)
        if user is None or not password_matches(password, user.password_hash):
            raise AuthenticationError("Invalid credentials")
        return user

    async def sync_admin_account(self) -> User:
        """Create the configured admin account, or re-hash it when the configured password changed."""
        username = self.core.config.admin_username
        password = self.core.config.admin_password
        current = next((u for u in self._users.values() if u.username == username), None)
        if current is not None and password_matches(password, current.password_hash):
            return current

        doc = await self._collection.find_one_and_update(
            {"username": username},
            {
                "$set": {"password_hash": hash_password(password)},
                "$setOnInsert": {"_id": uuid4(), "created_at": now()},
            },
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        user = User.model_validate(doc)
        self._users[user.id] = user
        logger.info("admin_account_synced", username=username, created=current is None)
        return user

    async def on_start(self) -> None:
        """Create indexes, load accounts, and sync the admin account."""
        await self._collection.create_index([("username", 1)], unique=True)
        users = await User.list_cursor(self._collection.find())
        self._users = {user.id: user for user in users}
        await self.sync_admin_account()
        logger.debug("user_service_started", user_count=len(self._users))
