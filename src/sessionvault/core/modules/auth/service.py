import secrets
from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from sessionvault.core.core import Service
from sessionvault.core.modules.auth.models import AUTH_TOKEN_TTL_SECONDS, AuthToken, IssuedToken, digest_token
from sessionvault.core.modules.user.models import User
from sessionvault.errors import AuthenticationError

logger = structlog.get_logger(__name__)


class AuthService(Service):
    """Issues, resolves and revokes opaque bearer tokens."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("auth_tokens")

    async def on_start(self) -> None:
        await self._collection.create_index([("token_digest", 1)], unique=True)
        # Expired tokens are removed by MongoDB
        await self._collection.create_index([("created_at", 1)], expireAfterSeconds=AUTH_TOKEN_TTL_SECONDS)

    async def issue_token(self, user_id: UUID) -> AuthToken:
        auth_token = AuthToken(secrets.token_urlsafe(32))
        issued = IssuedToken(user_id=user_id, token_digest=digest_token(auth_token))
        await self._collection.insert_one(issued.to_mongo())
        logger.debug("auth_token_issued", user_id=user_id)
        return auth_token

    async def resolve_user(self, auth_token: AuthToken) -> User:
        """Return the token's owner; AuthenticationError for unknown, expired or orphaned tokens."""
        doc = await self._collection.find_one({"token_digest": digest_token(auth_token)})
        if doc is None or not self.core.services.user.has_user(doc["user_id"]):
            raise AuthenticationError("Invalid or expired session")
        return self.core.services.user.get_user(doc["user_id"])

    async def is_token_valid(self, auth_token: AuthToken) -> bool:
        try:
            await self.resolve_user(auth_token)
        except AuthenticationError:
            return False
        return True

    async def revoke_token(self, auth_token: AuthToken) -> None:
        await self._collection.delete_one({"token_digest": digest_token(auth_token)})
        logger.debug("auth_token_revoked")
