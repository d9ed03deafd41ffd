"""Tests for user and auth token services."""

from unittest.mock import AsyncMock, MagicMock

import bcrypt
import pytest

from sessionvault.config import Config
from sessionvault.core.modules.auth.models import AuthToken, digest_token
from sessionvault.core.modules.auth.service import AuthService
from sessionvault.core.modules.user.models import CallerView, User
from sessionvault.core.modules.user.service import UserService
from sessionvault.errors import AuthenticationError, NotFoundError


def _fast_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8")


@pytest.fixture
def core():
    core = MagicMock()
    core.config = Config(database_url="mongodb://localhost:27017/test", admin_username="admin", admin_password="s3cret")
    return core


@pytest.fixture
def user_service(collection, core):
    database = MagicMock()
    database.get_collection.return_value = collection
    service = UserService(database)
    service.set_core(core)
    core.services.user = service
    return service


@pytest.fixture
def auth_service(collection, core, user_service):
    database = MagicMock()
    database.get_collection.return_value = collection
    service = AuthService(database)
    service.set_core(core)
    return service


@pytest.fixture
def admin(user_service):
    user = User(username="admin", password_hash=_fast_hash("s3cret"))
    user_service._users[user.id] = user
    return user


class TestAuthenticate:
    def test_valid_credentials(self, user_service, admin):
        assert user_service.authenticate("admin", "s3cret") is admin

    @pytest.mark.parametrize(("username", "password"), [("admin", "wrong"), ("ghost", "s3cret")])
    def test_invalid_credentials(self, user_service, admin, username, password):
        with pytest.raises(AuthenticationError, match="Invalid credentials"):
            user_service.authenticate(username, password)

    def test_get_unknown_user(self, user_service):
        with pytest.raises(NotFoundError):
            user_service.get_user(User(username="x", password_hash="h").id)


class TestSyncAdminAccount:
    async def test_current_password_needs_no_write(self, user_service, collection, admin):
        assert await user_service.sync_admin_account() is admin
        collection.find_one_and_update.assert_not_awaited()

    async def test_missing_admin_is_upserted(self, user_service, collection):
        """Test that the configured admin account is created with a bcrypt hash."""
        stored = User(username="admin", password_hash=_fast_hash("s3cret")).to_mongo()
        collection.find_one_and_update.return_value = stored

        user = await user_service.sync_admin_account()

        query, update = collection.find_one_and_update.await_args.args[:2]
        assert query == {"username": "admin"}
        assert bcrypt.checkpw(b"s3cret", update["$set"]["password_hash"].encode("utf-8"))
        assert "_id" in update["$setOnInsert"]
        assert collection.find_one_and_update.await_args.kwargs["upsert"] is True
        assert user_service.has_user(user.id)

    async def test_changed_password_is_rehashed(self, user_service, collection):
        old = User(username="admin", password_hash=_fast_hash("old-password"))
        user_service._users[old.id] = old
        collection.find_one_and_update.return_value = old.model_copy(
            update={"password_hash": _fast_hash("s3cret")}
        ).to_mongo()

        user = await user_service.sync_admin_account()

        collection.find_one_and_update.assert_awaited_once()
        assert user_service.authenticate("admin", "s3cret") is user


class TestAuthService:
    async def test_issued_token_is_stored_as_digest(self, auth_service, collection, admin):
        token = await auth_service.issue_token(admin.id)

        stored = collection.insert_one.await_args.args[0]
        assert stored["token_digest"] == digest_token(token)
        assert token not in stored.values()
        assert stored["user_id"] == admin.id

    async def test_resolves_token_to_user(self, auth_service, collection, admin):
        collection.find_one.return_value = {"token_digest": digest_token(AuthToken("tok")), "user_id": admin.id}

        assert await auth_service.resolve_user(AuthToken("tok")) is admin
        assert await auth_service.is_token_valid(AuthToken("tok")) is True
        collection.find_one.assert_awaited_with({"token_digest": digest_token(AuthToken("tok"))})

    async def test_unknown_token_is_invalid(self, auth_service):
        with pytest.raises(AuthenticationError):
            await auth_service.resolve_user(AuthToken("nope"))
        assert await auth_service.is_token_valid(AuthToken("nope")) is False

    async def test_token_of_removed_user_is_invalid(self, auth_service, collection):
        collection.find_one.return_value = {"token_digest": "d", "user_id": User(username="x", password_hash="h").id}

        assert await auth_service.is_token_valid(AuthToken("tok")) is False

    async def test_revoke_deletes_by_digest(self, auth_service, collection):
        collection.delete_one = AsyncMock()

        await auth_service.revoke_token(AuthToken("tok"))

        collection.delete_one.assert_awaited_once_with({"token_digest": digest_token(AuthToken("tok"))})


def test_caller_view_serializes_camel_case(admin):
    data = CallerView.from_user(admin).model_dump(by_alias=True)
    assert set(data) == {"id", "username", "createdAt"}
