"""
Unit tests for ConfirmPasswordResetUseCase

Tests all business logic with mocked dependencies.
"""
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import bcrypt
import pytest
from sqlalchemy.exc import OperationalError

from src.app.use_cases.auth.confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from src.domain.entities import PasswordResetToken


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all required repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.update_password_hash = AsyncMock(return_value=True)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.list_unexpired = AsyncMock(return_value=[])
    uow.password_reset_tokens.delete_all_for_user = AsyncMock(return_value=1)

    return uow


@pytest.fixture
def session_issuer():
    issuer = MagicMock()
    issuer.create_session = AsyncMock(return_value="session-credential")
    return issuer


@pytest.fixture
def use_case(mock_uow, session_issuer):
    return ConfirmPasswordResetUseCase(
        mock_uow, session_issuer, token_hash_rounds=4, password_hash_rounds=4
    )


def make_token(raw_token: str, user_id=None, minutes_left: int = 30) -> PasswordResetToken:
    return PasswordResetToken(
        id=uuid4(),
        user_id=user_id or uuid4(),
        token_hash=bcrypt.hashpw(raw_token.encode(), bcrypt.gensalt(4)).decode(),
        expires_at=datetime.utcnow() + timedelta(minutes=minutes_left),
    )


@pytest.mark.asyncio
async def test_successful_password_reset_confirmation(use_case, mock_uow, session_issuer):
    # Arrange
    user_id = uuid4()
    raw_token = "a" * 64
    new_password = "NewSecurePass123!"
    mock_uow.password_reset_tokens.list_unexpired.return_value = [make_token(raw_token, user_id)]

    # Act
    result = await use_case.execute(raw_token, new_password)

    # Assert
    assert result.is_ok()
    assert result.value.success is True
    assert result.value.message == "Password reset successful"
    assert result.value.session_token == "session-credential"

    mock_uow.users.update_password_hash.assert_called_once()
    updated_user_id, new_hash = mock_uow.users.update_password_hash.call_args.args
    assert updated_user_id == user_id
    assert new_hash != new_password
    assert bcrypt.checkpw(new_password.encode(), new_hash.encode())

    mock_uow.password_reset_tokens.delete_all_for_user.assert_called_once_with(user_id)
    mock_uow.commit.assert_called_once()
    session_issuer.create_session.assert_called_once_with(user_id)


@pytest.mark.asyncio
async def test_response_body_does_not_leak_user_or_session(use_case, mock_uow):
    user_id = uuid4()
    raw_token = "b" * 64
    mock_uow.password_reset_tokens.list_unexpired.return_value = [make_token(raw_token, user_id)]

    result = await use_case.execute(raw_token, "NewSecurePass123!")

    body = result.value.model_dump()
    assert body == {"success": True, "message": "Password reset successful"}


@pytest.mark.asyncio
async def test_only_unexpired_tokens_are_requested(use_case, mock_uow):
    before = datetime.utcnow()
    await use_case.execute("c" * 64, "NewSecurePass123!")
    after = datetime.utcnow()

    mock_uow.password_reset_tokens.list_unexpired.assert_called_once()
    now = mock_uow.password_reset_tokens.list_unexpired.call_args.args[0]
    assert before <= now <= after


@pytest.mark.asyncio
async def test_no_candidates_is_invalid_or_expired(use_case, mock_uow, session_issuer):
    mock_uow.password_reset_tokens.list_unexpired.return_value = []

    result = await use_case.execute("d" * 64, "NewSecurePass123!")

    assert result.is_err()
    assert result.error.code == "INVALID_OR_EXPIRED_TOKEN"
    assert result.error.message == "Invalid or expired reset token"
    mock_uow.users.update_password_hash.assert_not_called()
    mock_uow.password_reset_tokens.delete_all_for_user.assert_not_called()
    mock_uow.commit.assert_not_called()
    session_issuer.create_session.assert_not_called()


@pytest.mark.asyncio
async def test_mismatch_and_empty_store_are_indistinguishable(use_case, mock_uow):
    mock_uow.password_reset_tokens.list_unexpired.return_value = []
    empty = await use_case.execute("e" * 64, "NewSecurePass123!")

    mock_uow.password_reset_tokens.list_unexpired.return_value = [make_token("f" * 64)]
    mismatch = await use_case.execute("e" * 64, "NewSecurePass123!")

    assert empty.error == mismatch.error


@pytest.mark.asyncio
async def test_matching_token_found_among_several(use_case, mock_uow, session_issuer):
    owner_id = uuid4()
    raw_token = "1" * 64
    mock_uow.password_reset_tokens.list_unexpired.return_value = [
        make_token("2" * 64),
        make_token(raw_token, owner_id),
        make_token("3" * 64),
    ]

    result = await use_case.execute(raw_token, "NewSecurePass123!")

    assert result.is_ok()
    mock_uow.password_reset_tokens.delete_all_for_user.assert_called_once_with(owner_id)
    session_issuer.create_session.assert_called_once_with(owner_id)


@pytest.mark.asyncio
async def test_malformed_stored_hash_is_skipped(use_case, mock_uow):
    owner_id = uuid4()
    raw_token = "4" * 64
    broken = make_token("5" * 64)
    broken.token_hash = "not-a-bcrypt-hash"
    mock_uow.password_reset_tokens.list_unexpired.return_value = [
        broken,
        make_token(raw_token, owner_id),
    ]

    result = await use_case.execute(raw_token, "NewSecurePass123!")

    assert result.is_ok()
    mock_uow.password_reset_tokens.delete_all_for_user.assert_called_once_with(owner_id)


@pytest.mark.asyncio
async def test_oversized_token_is_invalid_not_an_error(use_case, mock_uow):
    mock_uow.password_reset_tokens.list_unexpired.return_value = [make_token("6" * 64)]

    result = await use_case.execute("x" * 500, "NewSecurePass123!")

    assert result.is_err()
    assert result.error.code == "INVALID_OR_EXPIRED_TOKEN"


@pytest.mark.asyncio
async def test_unencodable_token_is_invalid_not_an_error(use_case, mock_uow, session_issuer):
    """A lone surrogate in the token cannot match and must not crash"""
    mock_uow.password_reset_tokens.list_unexpired.return_value = [make_token("5" * 64)]

    result = await use_case.execute("abc\ud800def", "GoodPass123!")

    assert result.is_err()
    assert result.error.code == "INVALID_OR_EXPIRED_TOKEN"
    mock_uow.users.update_password_hash.assert_not_called()
    mock_uow.commit.assert_not_called()
    session_issuer.create_session.assert_not_called()


@pytest.mark.asyncio
async def test_password_too_short(use_case, mock_uow, session_issuer):
    """Validation happens before the store is touched, even for a valid token"""
    raw_token = "7" * 64
    mock_uow.password_reset_tokens.list_unexpired.return_value = [make_token(raw_token)]

    result = await use_case.execute(raw_token, "short")

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    assert "8 characters" in result.error.message
    mock_uow.password_reset_tokens.list_unexpired.assert_not_called()
    mock_uow.users.update_password_hash.assert_not_called()
    mock_uow.commit.assert_not_called()
    session_issuer.create_session.assert_not_called()


@pytest.mark.asyncio
async def test_password_over_bcrypt_limit(use_case, mock_uow):
    result = await use_case.execute("8" * 64, "p" * 73)

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    mock_uow.password_reset_tokens.list_unexpired.assert_not_called()


@pytest.mark.asyncio
async def test_unencodable_password_rejected(use_case, mock_uow):
    result = await use_case.execute("a" * 64, "abcd\ud800efgh")

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    mock_uow.password_reset_tokens.list_unexpired.assert_not_called()


@pytest.mark.asyncio
async def test_empty_token_rejected(use_case, mock_uow):
    result = await use_case.execute("", "NewSecurePass123!")

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    mock_uow.password_reset_tokens.list_unexpired.assert_not_called()


@pytest.mark.asyncio
async def test_user_deleted_after_token_issued(use_case, mock_uow, session_issuer):
    raw_token = "9" * 64
    mock_uow.password_reset_tokens.list_unexpired.return_value = [make_token(raw_token)]
    mock_uow.users.update_password_hash.return_value = False

    result = await use_case.execute(raw_token, "NewSecurePass123!")

    assert result.is_err()
    assert result.error.code == "INVALID_OR_EXPIRED_TOKEN"
    mock_uow.commit.assert_not_called()
    session_issuer.create_session.assert_not_called()


@pytest.mark.asyncio
async def test_store_failure_is_internal_error(use_case, mock_uow, session_issuer):
    raw_token = "0" * 64
    mock_uow.password_reset_tokens.list_unexpired.return_value = [make_token(raw_token)]
    mock_uow.password_reset_tokens.delete_all_for_user.side_effect = OperationalError(
        "DELETE", {}, Exception("db down")
    )

    result = await use_case.execute(raw_token, "NewSecurePass123!")

    assert result.is_err()
    assert result.error.code == "INTERNAL_ERROR"
    mock_uow.commit.assert_not_called()
    session_issuer.create_session.assert_not_called()
