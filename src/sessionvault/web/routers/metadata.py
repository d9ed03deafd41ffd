"""Metadata endpoints for exposing system information."""

from fastapi import APIRouter

from sessionvault.web.deps import AppDep, AuthTokenDep
from sessionvault.web.openapi import ErrorResponse

router = APIRouter(tags=["metadata"])


@router.get(
    "/metadata/version",
    summary="Get version information",
    description="Returns package version, git commit hash and build time.",
    operation_id="getVersion",
    responses={
        200: {"description": "Version and build information"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_version(app: AppDep, auth_token: AuthTokenDep) -> dict[str, str]:
    return await app.get_version(auth_token)
