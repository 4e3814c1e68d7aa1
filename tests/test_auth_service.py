"""
Tests for AuthService against an in-memory user store.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from auth.errors import (
    ConfigurationMissingError,
    DuplicateUserError,
    InvalidCredentialsError,
    NoTokenError,
    StoreFailureError,
    UnauthorizedError,
    UserNotFoundError,
    ValidationError,
)
from auth.password import PasswordHasher
from auth.service import AuthService, extract_bearer_token
from auth.tokens import TokenService

SECRET = "service-test-secret-0123456789abcdef012345"


class InMemoryUserStore:
    def __init__(self):
        self.users = {}
        self._next_id = 1
        self.commits = 0

    async def find_by_email(self, email):
        return next((u for u in self.users.values() if u.email == email), None)

    async def find_by_id(self, user_id):
        return self.users.get(user_id)

    async def exists_by_email(self, email):
        return await self.find_by_email(email) is not None

    async def insert_user(self, username, email, password_hash):
        user = SimpleNamespace(
            id=self._next_id, username=username, email=email, password_hash=password_hash,
        )
        self.users[user.id] = user
        self._next_id += 1
        return user

    async def commit(self):
        self.commits += 1


class FakeClock:
    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def store():
    return InMemoryUserStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(store, clock):
    return AuthService(store, PasswordHasher(rounds=4), TokenService(SECRET, clock=clock))


class TestRegister:
    @pytest.mark.asyncio
    async def test_returns_public_fields_only(self, service, store):
        user = await service.register("ana", "a@x.com", "pw123")
        assert user == {"id": 1, "username": "ana", "email": "a@x.com"}
        assert store.users[1].password_hash != "pw123"
        assert store.commits == 1

    @pytest.mark.asyncio
    async def test_duplicate_email(self, service, store):
        await service.register("ana", "a@x.com", "pw123")
        with pytest.raises(DuplicateUserError):
            await service.register("other", "a@x.com", "different")
        assert len(store.users) == 1
        assert store.users[1].username == "ana"
        assert store.commits == 1

    @pytest.mark.asyncio
    async def test_constraint_violation_on_insert_is_duplicate(self, service, store):
        # Another request inserted the same email between check and insert.
        store.insert_user = AsyncMock(side_effect=DuplicateUserError())
        with pytest.raises(DuplicateUserError):
            await service.register("ana", "a@x.com", "pw123")

    @pytest.mark.asyncio
    async def test_empty_password_is_accepted(self, service):
        await service.register("ana", "a@x.com", "")
        result = await service.login("a@x.com", "")
        assert result["token"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("username,email", [("", "a@x.com"), ("ana", "")])
    async def test_missing_fields(self, service, username, email):
        with pytest.raises(ValidationError):
            await service.register(username, email, "pw123")

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, service, store):
        store.exists_by_email = AsyncMock(side_effect=StoreFailureError())
        with pytest.raises(StoreFailureError):
            await service.register("ana", "a@x.com", "pw123")


class TestLogin:
    @pytest.mark.asyncio
    async def test_success(self, service):
        await service.register("ana", "a@x.com", "pw123")
        result = await service.login("a@x.com", "pw123")
        assert result["user"] == {"id": 1, "username": "ana", "email": "a@x.com"}
        assert service.tokens.verify(result["token"]).user_id == 1

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_look_the_same(self, service):
        await service.register("ana", "a@x.com", "pw123")

        with pytest.raises(InvalidCredentialsError) as wrong_password:
            await service.login("a@x.com", "nope")
        with pytest.raises(InvalidCredentialsError) as unknown_email:
            await service.login("b@x.com", "pw123")

        assert wrong_password.value.message == unknown_email.value.message
        assert wrong_password.value.status_code == unknown_email.value.status_code == 401

    @pytest.mark.asyncio
    async def test_missing_secret(self, store):
        service = AuthService(store, PasswordHasher(rounds=4), TokenService(None))
        await service.register("ana", "a@x.com", "pw123")
        with pytest.raises(ConfigurationMissingError):
            await service.login("a@x.com", "pw123")


class TestProfile:
    @pytest.mark.asyncio
    async def test_success(self, service):
        await service.register("ana", "a@x.com", "pw123")
        token = (await service.login("a@x.com", "pw123"))["token"]
        profile = await service.profile(f"Bearer {token}")
        assert profile == {"id": 1, "username": "ana", "email": "a@x.com"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer ", "Token abc", "bearer abc"])
    async def test_no_token(self, service, header):
        with pytest.raises(NoTokenError):
            await service.profile(header)

    @pytest.mark.asyncio
    async def test_token_failures_collapse_to_unauthorized(self, service, clock):
        await service.register("ana", "a@x.com", "pw123")
        token = (await service.login("a@x.com", "pw123"))["token"]

        with pytest.raises(UnauthorizedError):
            await service.profile("Bearer garbage")

        forged = TokenService("x" * 40, clock=clock).issue(1, "ana")
        with pytest.raises(UnauthorizedError):
            await service.profile(f"Bearer {forged}")

        clock.now += 3600
        with pytest.raises(UnauthorizedError):
            await service.profile(f"Bearer {token}")

    @pytest.mark.asyncio
    async def test_user_vanished(self, service, store):
        await service.register("ana", "a@x.com", "pw123")
        token = (await service.login("a@x.com", "pw123"))["token"]
        store.users.clear()
        with pytest.raises(UserNotFoundError):
            await service.profile(f"Bearer {token}")

    @pytest.mark.asyncio
    async def test_missing_secret_is_not_unauthorized(self, store):
        service = AuthService(store, PasswordHasher(rounds=4), TokenService(None))
        with pytest.raises(ConfigurationMissingError):
            await service.profile("Bearer something")


class TestExtractBearerToken:
    def test_strips_prefix(self):
        assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_requires_prefix(self):
        with pytest.raises(NoTokenError):
            extract_bearer_token("abc.def.ghi")
