from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer

from sessionvault.app import App
from sessionvault.core.modules.auth.models import AuthToken
from sessionvault.errors import AuthenticationError

AUTH_COOKIE_NAME = "auth_token"

bearer_scheme = HTTPBearer(auto_error=False)
cookie_scheme = APIKeyCookie(name=AUTH_COOKIE_NAME, auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


def presented_tokens(credentials: HTTPAuthorizationCredentials | None, token_cookie: str | None) -> list[AuthToken]:
    """Tokens sent with the request, Bearer header before cookie."""
    tokens = []
    if credentials and credentials.scheme.lower() == "bearer" and credentials.credentials:
        tokens.append(AuthToken(credentials.credentials))
    if token_cookie:
        tokens.append(AuthToken(token_cookie))
    return tokens


async def get_auth_token(
    app: Annotated[App, Depends(get_app)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
    token_cookie: Annotated[str | None, Depends(cookie_scheme)] = None,
) -> AuthToken:
    """Return the first presented token that is still valid."""
    for auth_token in presented_tokens(credentials, token_cookie):
        if await app.is_auth_token_valid(auth_token):
            return auth_token
    raise AuthenticationError("Not authenticated")


AppDep = Annotated[App, Depends(get_app)]
AuthTokenDep = Annotated[AuthToken, Depends(get_auth_token)]
