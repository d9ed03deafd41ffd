"""Authentication token models."""

import hashlib
from datetime import datetime
from typing import NewType
from uuid import UUID

from pydantic import Field

from sessionvault.core.db import MongoModel
from sessionvault.utils import now

AuthToken = NewType("AuthToken", str)

AUTH_TOKEN_TTL_SECONDS = 30 * 24 * 60 * 60


def digest_token(auth_token: AuthToken) -> str:
    """SHA-256 hex digest under which a token is stored."""
    return hashlib.sha256(auth_token.encode("utf-8")).hexdigest()


class IssuedToken(MongoModel):
    """Login token issued to a dashboard user; the raw token is never stored.

    Indexed on token_digest - unique, created_at (TTL 30 days).
    """

    user_id: UUID
    token_digest: str
    created_at: datetime = Field(default_factory=now)
