from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version
from uuid import UUID

from sessionvault.config import Config
from sessionvault.core.core import Core
from sessionvault.core.modules.auth.models import AuthToken
from sessionvault.core.modules.session.models import SessionRecord
from sessionvault.core.modules.user.models import CallerView
from sessionvault.core.pagination import PageResult


class App:
    """Facade for all application operations, checks authentication before delegating to Core."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Authentication ===
    async def is_auth_token_valid(self, auth_token: AuthToken) -> bool:
        """Check if authentication token is valid."""
        return await self._core.services.auth.is_token_valid(auth_token)

    async def login(self, username: str, password: str) -> AuthToken:
        """Authenticate user and issue a token."""
        user = self._core.services.user.authenticate(username, password)
        return await self._core.services.auth.issue_token(user.id)

    async def logout(self, auth_token: AuthToken) -> None:
        """Invalidate the caller's token."""
        await self._core.services.access.ensure_authenticated(auth_token)
        await self._core.services.auth.revoke_token(auth_token)

    async def get_current_user(self, auth_token: AuthToken) -> CallerView:
        """Get the authenticated caller's profile."""
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        return CallerView.from_user(current_user)

    # === Session records ===
    async def create_session(
        self,
        name: str | None,
        value: str | None,
        url: str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> SessionRecord:
        return await self._core.services.session.create_session(name, value, url, description, is_active)

    async def update_session(
        self,
        session_id: UUID,
        name: str | None,
        value: str | None,
        url: str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> SessionRecord:
        return await self._core.services.session.update_session(session_id, name, value, url, description, is_active)

    async def list_sessions(
        self,
        page: object = None,
        per_page: object = None,
        get_all: bool = False,
        search_value: str | None = None,
    ) -> PageResult[SessionRecord] | list[SessionRecord]:
        return await self._core.services.session.list_sessions(page, per_page, get_all, search_value)

    async def get_session(self, session_id: UUID) -> SessionRecord:
        return await self._core.services.session.get_session(session_id)

    async def get_caller_session(self, auth_token: AuthToken) -> SessionRecord:
        """Get the record keyed by the authenticated caller's ID."""
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.session.get_caller_session(current_user.id)

    async def get_all_sessions(self) -> list[SessionRecord]:
        return await self._core.services.session.get_all_sessions()

    async def delete_session(self, session_id: UUID) -> SessionRecord:
        return await self._core.services.session.delete_session(session_id)

    # === Metadata ===
    async def get_version(self, auth_token: AuthToken) -> dict[str, str]:
        """Get package version and build information (requires authentication)."""
        await self._core.services.access.ensure_authenticated(auth_token)
        try:
            package_version = version("sessionvault")
        except PackageNotFoundError:
            package_version = "unknown"
        return {
            "version": package_version,
            "git_commit_hash": self._core.config.git_commit_hash,
            "build_time": self._core.config.build_time,
        }
