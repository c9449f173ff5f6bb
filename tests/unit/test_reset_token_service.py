"""Unit tests for ResetTokenService."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from src.taskflow.core.exceptions import InternalError, NotFoundError
from src.taskflow.core.security import TokenType, decode_token, hash_token
from src.taskflow.models import ResetToken
from src.taskflow.services.reset_token_service import ResetTokenService
from tests.factories import ResetTokenFactory, UserFactory, utc_now

pytestmark = pytest.mark.unit


@pytest.fixture
def mock_token_repo() -> MagicMock:
    repo = MagicMock()
    repo.add = MagicMock()
    repo.get_by_hash = AsyncMock(return_value=None)
    repo.delete_by_hash = AsyncMock(return_value=1)
    repo.cleanup_expired = AsyncMock(return_value=0)
    return repo


@pytest.fixture
def mock_user_repo() -> MagicMock:
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def mock_session() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def service(mock_token_repo, mock_user_repo, mock_session) -> ResetTokenService:
    return ResetTokenService(mock_token_repo, mock_user_repo, mock_session)


class TestCreateResetToken:
    async def test_stores_only_the_hash(self, service, mock_token_repo, mock_user_repo):
        user = UserFactory.build()
        mock_user_repo.get_by_id.return_value = user

        token = await service.create_reset_token(user.id)

        stored: ResetToken = mock_token_repo.add.call_args[0][0]
        assert stored.user_id == user.id
        assert stored.token_hash == hash_token(token)
        assert stored.token_hash != token
        payload = decode_token(token, TokenType.RESET)
        assert payload is not None
        assert payload["id"] == str(user.id)

    async def test_expiry_is_one_hour_after_creation(
        self, service, mock_token_repo, mock_user_repo
    ):
        mock_user_repo.get_by_id.return_value = UserFactory.build()

        await service.create_reset_token(uuid4())

        stored: ResetToken = mock_token_repo.add.call_args[0][0]
        lifetime = stored.expires_at - stored.created_at
        assert timedelta(minutes=60) <= lifetime < timedelta(minutes=60, seconds=1)

    async def test_row_expires_with_signed_token(
        self, service, mock_token_repo, mock_user_repo
    ):
        mock_user_repo.get_by_id.return_value = UserFactory.build()

        token = await service.create_reset_token(uuid4())

        stored: ResetToken = mock_token_repo.add.call_args[0][0]
        payload = decode_token(token, TokenType.RESET)
        assert payload is not None
        signed_expiry = datetime.fromtimestamp(payload["exp"], UTC).replace(tzinfo=None)
        assert stored.expires_at.replace(microsecond=0) == signed_expiry

    async def test_tokens_for_same_user_differ(self, service, mock_user_repo):
        mock_user_repo.get_by_id.return_value = UserFactory.build()

        first = await service.create_reset_token(uuid4())
        second = await service.create_reset_token(uuid4())

        assert first != second

    async def test_unknown_user(self, service, mock_token_repo):
        with pytest.raises(NotFoundError):
            await service.create_reset_token(uuid4())

        mock_token_repo.add.assert_not_called()

    async def test_store_failure_rolls_back(self, service, mock_user_repo, mock_session):
        mock_user_repo.get_by_id.return_value = UserFactory.build()
        mock_session.commit.side_effect = OperationalError("INSERT", {}, Exception("down"))

        with pytest.raises(InternalError):
            await service.create_reset_token(uuid4())

        mock_session.rollback.assert_awaited_once()


class TestValidateResetToken:
    async def test_unknown_token(self, service):
        assert await service.validate_reset_token("nope") is False

    async def test_live_token(self, service, mock_token_repo):
        user = UserFactory.build()
        mock_token_repo.get_by_hash.return_value = (
            ResetTokenFactory.build(user_id=user.id),
            user,
        )

        assert await service.validate_reset_token("token") is True
        mock_token_repo.get_by_hash.assert_awaited_once_with(hash_token("token"))

    async def test_expired_token(self, service, mock_token_repo):
        user = UserFactory.build()
        mock_token_repo.get_by_hash.return_value = (
            ResetTokenFactory.expired(user_id=user.id),
            user,
        )

        assert await service.validate_reset_token("token") is False

    async def test_never_mutates(self, service, mock_token_repo, mock_session):
        await service.validate_reset_token("token")

        mock_token_repo.delete_by_hash.assert_not_awaited()
        mock_session.commit.assert_not_awaited()

    async def test_lookup_failure(self, service, mock_token_repo):
        mock_token_repo.get_by_hash.side_effect = OperationalError("SELECT", {}, Exception("x"))

        with pytest.raises(InternalError):
            await service.validate_reset_token("token")


class TestFindByToken:
    async def test_returns_token_with_user(self, service, mock_token_repo):
        user = UserFactory.build()
        stored = ResetTokenFactory.build(user_id=user.id, expires_at=utc_now())
        mock_token_repo.get_by_hash.return_value = (stored, user)

        match = await service.find_by_token("token")

        assert match is not None
        assert match.token is stored
        assert match.user is user


class TestInvalidateResetToken:
    async def test_deletes_and_commits(self, service, mock_token_repo, mock_session):
        await service.invalidate_reset_token("token")

        mock_token_repo.delete_by_hash.assert_awaited_once_with(hash_token("token"))
        mock_session.commit.assert_awaited_once()

    async def test_already_gone_is_noop(self, service, mock_token_repo):
        mock_token_repo.delete_by_hash.return_value = 0

        await service.invalidate_reset_token("token")


class TestDeleteExpired:
    async def test_returns_count(self, service, mock_token_repo):
        mock_token_repo.cleanup_expired.return_value = 3

        assert await service.delete_expired() == 3

    async def test_commits_the_sweep(self, service, mock_token_repo, mock_session):
        await service.delete_expired()

        mock_token_repo.cleanup_expired.assert_awaited_once()
        mock_session.commit.assert_awaited_once()

    async def test_store_failure_rolls_back(self, service, mock_token_repo, mock_session):
        mock_token_repo.cleanup_expired.side_effect = OperationalError(
            "DELETE", {}, Exception("down")
        )

        with pytest.raises(InternalError):
            await service.delete_expired()

        mock_session.rollback.assert_awaited_once()
        mock_session.commit.assert_not_awaited()
