from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from sessionvault.core.db import MongoModel
from sessionvault.utils import now


class User(MongoModel):
    """Dashboard account. Unique on username."""

    username: str
    password_hash: str  # bcrypt hash
    created_at: datetime = Field(default_factory=now)


class CallerView(BaseModel):
    """The authenticated caller as returned by check-auth."""

    id: UUID = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    created_at: datetime = Field(..., description="Account creation time")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_user(cls, user: User) -> "CallerView":
        return cls(id=user.id, username=user.username, created_at=user.created_at)
