"""Session record models."""

from datetime import datetime

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from sessionvault.core.db import MongoModel
from sessionvault.utils import now


class SessionRecord(MongoModel):
    """Named key/value record managed from the dashboard.

    Stored with snake_case keys; serialized to the API in camelCase
    (``isActive``, ``isDeleted``, ``createdAt``, ``updatedAt``).
    Unique on name among records with is_deleted=false (partial index).
    """

    name: str
    value: str | None = None  # Secret or credential payload
    url: str | None = None
    description: str | None = None
    is_active: bool = True
    is_deleted: bool = False  # Soft-delete marker, records are never purged
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)

    model_config = ConfigDict(alias_generator=to_camel)
