"""Session record API endpoints."""

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Body
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from sessionvault.core.modules.session.models import SessionRecord
from sessionvault.core.modules.session.service import NOT_FOUND_MESSAGE
from sessionvault.core.modules.user.models import CallerView
from sessionvault.core.pagination import PageResult
from sessionvault.errors import NotFoundError
from sessionvault.web.deps import AppDep, AuthTokenDep
from sessionvault.web.openapi import ApiResponse, ErrorResponse

router: APIRouter = APIRouter(prefix="/session", tags=["sessions"])

RETRIEVED_MESSAGE = "Session retrieved successfully."


class CamelModel(BaseModel):
    # Numbers posted for text fields are stored as their string form
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)


class SessionPayload(CamelModel):
    """Complete session record as sent by the dashboard.

    Used for both create and update. Updates overwrite every field: omitted
    ``url`` and ``description`` are cleared and omitted ``isActive`` resets to true.
    """

    name: str | None = Field(None, description="Unique name among live records (required)")
    value: str | None = Field(None, description="Secret or credential payload (required)")
    url: str | None = Field(None, description="Optional URL the value belongs to")
    description: str | None = Field(None, description="Optional free-form description")
    is_active: bool | None = Field(None, description="Active flag, defaults to true")


class ListSessionsRequest(CamelModel):
    """Listing parameters.

    Accepted as sent and coerced by the service: non-numeric page values fall
    back to the defaults and any truthy ``getAll`` disables pagination.
    """

    page: Any = Field(None, description="1-based page number, default 1")
    per_page: Any = Field(None, description="Page size, default 25")
    get_all: Any = Field(None, description="Return every match without pagination when truthy")
    search_value: str | None = Field(None, description="Case-insensitive substring of name, value or description")


SessionListData = PageResult[SessionRecord] | list[SessionRecord]


def parse_session_id(raw_id: str) -> UUID:
    """Parse a record ID from the path; malformed IDs cannot match any record."""
    try:
        return UUID(raw_id)
    except ValueError:
        raise NotFoundError(NOT_FOUND_MESSAGE) from None


@router.post(
    "/",
    summary="Create session record",
    description="Create a record. A live record with the same name yields status 202 and no insert.",
    operation_id="createSession",
    responses={
        200: {"description": "Record created"},
        202: {"model": ErrorResponse, "description": "A record with this name already exists"},
        400: {"model": ErrorResponse, "description": "Name or value missing"},
    },
)
async def create_session(payload: SessionPayload, app: AppDep) -> ApiResponse[SessionRecord]:
    record = await app.create_session(
        payload.name, payload.value, payload.url, payload.description, payload.is_active
    )
    return ApiResponse(message="Session has been created successfully.", data=record)


@router.post(
    "/list",
    summary="List session records",
    description=(
        "Paginated list of live records, newest first, returned as `{rows, count}`. "
        "With `getAll` every match is returned as a plain array."
    ),
    operation_id="listSessions",
)
async def list_sessions(
    app: AppDep, request: Annotated[ListSessionsRequest | None, Body()] = None
) -> ApiResponse[SessionListData]:
    request = request or ListSessionsRequest()
    data = await app.list_sessions(request.page, request.per_page, bool(request.get_all), request.search_value)
    return ApiResponse(message=RETRIEVED_MESSAGE, data=data)


@router.get(
    "/getSession",
    summary="List session records with defaults",
    description="Same as `POST /session/list` with no parameters: first page of 25 records.",
    operation_id="getSessionPage",
)
async def get_session_page(app: AppDep) -> ApiResponse[SessionListData]:
    data = await app.list_sessions()
    return ApiResponse(message=RETRIEVED_MESSAGE, data=data)


@router.get(
    "/all",
    summary="Get all session records",
    description="Every live record, without filtering or pagination.",
    operation_id="getAllSessions",
)
async def get_all_sessions(app: AppDep) -> ApiResponse[list[SessionRecord]]:
    return ApiResponse(message=RETRIEVED_MESSAGE, data=await app.get_all_sessions())


@router.get(
    "/check-auth",
    summary="Check authentication",
    description="Verify the caller's token and return their profile.",
    operation_id="checkSessionAuth",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def check_auth(app: AppDep, auth_token: AuthTokenDep) -> ApiResponse[CallerView]:
    user = await app.get_current_user(auth_token)
    return ApiResponse(message="User is authenticated.", data=user)


@router.get(
    "/detail",
    summary="Get caller's session record",
    description="Get the record whose ID is the authenticated caller's own ID.",
    operation_id="getCallerSession",
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Record not found"},
    },
)
async def get_caller_session(app: AppDep, auth_token: AuthTokenDep) -> ApiResponse[SessionRecord]:
    record = await app.get_caller_session(auth_token)
    return ApiResponse(message=RETRIEVED_MESSAGE, data=record)


@router.get(
    "/{session_id}",
    summary="Get session record",
    operation_id="getSession",
    responses={404: {"model": ErrorResponse, "description": "Record not found"}},
)
async def get_session(session_id: str, app: AppDep) -> ApiResponse[SessionRecord]:
    record = await app.get_session(parse_session_id(session_id))
    return ApiResponse(message=RETRIEVED_MESSAGE, data=record)


@router.put(
    "/{session_id}",
    summary="Replace session record",
    description="Overwrite every field of a record (full replacement, not a partial update).",
    operation_id="updateSession",
    responses={
        202: {"model": ErrorResponse, "description": "Another record already uses this name"},
        400: {"model": ErrorResponse, "description": "Name or value missing"},
        404: {"model": ErrorResponse, "description": "Record not found"},
    },
)
async def update_session(session_id: str, payload: SessionPayload, app: AppDep) -> ApiResponse[SessionRecord]:
    record = await app.update_session(
        parse_session_id(session_id),
        payload.name,
        payload.value,
        payload.url,
        payload.description,
        payload.is_active,
    )
    return ApiResponse(message="Session has been updated successfully.", data=record)


@router.delete(
    "/{session_id}",
    summary="Delete session record",
    description="Soft delete: the record is flagged and hidden from every read, never purged.",
    operation_id="deleteSession",
    responses={404: {"model": ErrorResponse, "description": "Record not found"}},
)
async def delete_session(session_id: str, app: AppDep) -> ApiResponse[SessionRecord]:
    record = await app.delete_session(parse_session_id(session_id))
    return ApiResponse(message="Session has been deleted successfully.", data=record)
