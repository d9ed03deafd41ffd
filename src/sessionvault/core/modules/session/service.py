import asyncio
from typing import Any
from uuid import UUID

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from sessionvault.core.core import Service
from sessionvault.core.modules.session.models import SessionRecord
from sessionvault.core.modules.session.query import LIST_SORT, active_records_filter, build_list_filter
from sessionvault.core.pagination import DEFAULT_PAGE, DEFAULT_PER_PAGE, PageResult, page_offset, parse_page_number
from sessionvault.errors import ConflictError, ValidationError
from sessionvault.utils import now

logger = structlog.get_logger(__name__)

MISSING_FIELDS_MESSAGE = "Name and value are required fields."
DUPLICATE_NAME_MESSAGE = "Session with this name already exists. Please choose a different name."
NOT_FOUND_MESSAGE = "Session not found."


def validate_required_fields(name: str | None, value: str | None) -> None:
    """Raise ValidationError unless both name and value are non-empty."""
    if not name or not value:
        raise ValidationError(MISSING_FIELDS_MESSAGE)


class SessionService(Service):
    """Manages named key/value session records with soft delete."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("sessions")

    async def on_start(self) -> None:
        """Create indexes for name uniqueness and listing."""
        # Names are unique among live records only; soft-deleted names may be reused
        await self._collection.create_index(
            [("name", 1)],
            unique=True,
            partialFilterExpression={"is_deleted": False},
        )
        await self._collection.create_index([("is_deleted", 1), ("created_at", -1)])

    async def create_session(
        self,
        name: str | None,
        value: str | None,
        url: str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> SessionRecord:
        """Insert a new record. The unique index rejects duplicate live names."""
        validate_required_fields(name, value)
        record = SessionRecord(
            name=name,
            value=value,
            url=url,
            description=description,
            is_active=True if is_active is None else is_active,
        )
        try:
            await self._collection.insert_one(record.to_mongo())
        except DuplicateKeyError as e:
            logger.info("session_name_conflict", name=name)
            raise ConflictError(DUPLICATE_NAME_MESSAGE) from e

        logger.info("session_created", session_id=record.id, name=name)
        return record

    async def update_session(
        self,
        session_id: UUID,
        name: str | None,
        value: str | None,
        url: str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> SessionRecord:
        """Overwrite every editable field of a record.

        This is a full replacement, not a merge: omitted url and description
        become null and an omitted is_active becomes true.
        """
        validate_required_fields(name, value)
        update = {
            "name": name,
            "value": value,
            "url": url,
            "description": description,
            "is_active": True if is_active is None else is_active,
            "updated_at": now(),
        }
        try:
            doc = await self._collection.find_one_and_update(
                {"_id": session_id, "is_deleted": False},
                {"$set": update},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            logger.info("session_name_conflict", session_id=session_id, name=name)
            raise ConflictError(DUPLICATE_NAME_MESSAGE) from e

        record = SessionRecord.from_mongo(doc, NOT_FOUND_MESSAGE)
        logger.info("session_updated", session_id=session_id)
        return record

    async def list_sessions(
        self,
        page: object = None,
        per_page: object = None,
        get_all: bool = False,
        search_value: str | None = None,
    ) -> PageResult[SessionRecord] | list[SessionRecord]:
        """List live records, optionally filtered by a search term.

        With ``get_all`` every match is returned as a plain list in store
        order. Otherwise a page of rows, newest first, is returned together
        with the total match count.
        """
        query = build_list_filter(search_value)

        if get_all:
            return await SessionRecord.list_cursor(self._collection.find(query))

        actual_page = parse_page_number(page, DEFAULT_PAGE)
        actual_per_page = parse_page_number(per_page, DEFAULT_PER_PAGE)

        cursor = self._collection.find(query).sort(LIST_SORT).skip(page_offset(actual_page, actual_per_page))
        cursor = cursor.limit(actual_per_page)
        rows, count = await asyncio.gather(
            SessionRecord.list_cursor(cursor),
            self._collection.count_documents(query),
        )

        logger.debug(
            "list_sessions",
            query=query,
            page=actual_page,
            per_page=actual_per_page,
            count=count,
            returned=len(rows),
        )
        return PageResult(rows=rows, count=count)

    async def get_session(self, session_id: UUID) -> SessionRecord:
        """Get a live record by ID."""
        doc = await self._collection.find_one({"_id": session_id, "is_deleted": False})
        return SessionRecord.from_mongo(doc, NOT_FOUND_MESSAGE)

    async def get_caller_session(self, user_id: UUID) -> SessionRecord:
        """Get the record identified by the authenticated caller's own ID."""
        return await self.get_session(user_id)

    async def get_all_sessions(self) -> list[SessionRecord]:
        """Get every live record without filtering or pagination."""
        return await SessionRecord.list_cursor(self._collection.find(active_records_filter()))

    async def delete_session(self, session_id: UUID) -> SessionRecord:
        """Soft-delete a record by flagging it; the document is kept."""
        doc = await self._collection.find_one_and_update(
            {"_id": session_id, "is_deleted": False},
            {"$set": {"is_deleted": True, "updated_at": now()}},
            return_document=ReturnDocument.AFTER,
        )
        record = SessionRecord.from_mongo(doc, NOT_FOUND_MESSAGE)
        logger.info("session_deleted", session_id=session_id)
        return record
