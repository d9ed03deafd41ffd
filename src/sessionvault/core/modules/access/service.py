from sessionvault.core.core import Service
from sessionvault.core.modules.auth.models import AuthToken
from sessionvault.core.modules.user.models import User


class AccessService(Service):
    async def ensure_authenticated(self, auth_token: AuthToken) -> User:
        """Ensure the caller is authenticated and return the user."""
        return await self.core.services.auth.resolve_user(auth_token)
