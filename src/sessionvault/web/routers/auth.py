from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from sessionvault.core.modules.auth.models import AUTH_TOKEN_TTL_SECONDS
from sessionvault.core.modules.user.models import CallerView
from sessionvault.web.deps import AUTH_COOKIE_NAME, AppDep, AuthTokenDep
from sessionvault.web.openapi import ApiResponse, ErrorResponse

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    """Authentication request."""

    username: str = Field(..., description="Username for authentication")
    password: str = Field(..., description="Password for authentication")


class LoginResponse(BaseModel):
    """Authentication response."""

    token: str = Field(..., description="Authentication token for subsequent requests")


@router.post(
    "/login",
    summary="Authenticate user",
    description="Authenticate with username and password to receive an authentication token.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(login_data: LoginRequest, app: AppDep, response: Response) -> LoginResponse:
    token = await app.login(login_data.username, login_data.password)

    # Set cookie for browser-based clients
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=False,  # Set to True in production with HTTPS
        max_age=AUTH_TOKEN_TTL_SECONDS,
    )

    return LoginResponse(token=token)


@router.post(
    "/logout",
    summary="End session",
    description="Invalidate the current authentication token.",
    operation_id="logout",
    status_code=204,
    responses={
        204: {"description": "Successfully logged out"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def logout(app: AppDep, auth_token: AuthTokenDep, response: Response) -> None:
    await app.logout(auth_token)
    response.delete_cookie(AUTH_COOKIE_NAME)


@router.get(
    "/check-auth",
    summary="Check authentication",
    description="Verify the caller's token and return their profile.",
    operation_id="checkAuth",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def check_auth(app: AppDep, auth_token: AuthTokenDep) -> ApiResponse[CallerView]:
    user = await app.get_current_user(auth_token)
    return ApiResponse(message="User is authenticated.", data=user)
