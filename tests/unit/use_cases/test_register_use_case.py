from uuid import UUID

import pytest

from src.app.repositories.errors import DuplicateEmailError, RepositoryError
from src.app.use_cases.auth import RegisterCommand, RegisterUseCase
from src.domain.entities import Account


@pytest.mark.asyncio
async def test_successful_register(mock_uow, hasher):
    """New email creates an account and returns its public identity"""
    use_case = RegisterUseCase(mock_uow, hasher)
    command = RegisterCommand(name="Ada", email="ada@example.com", password="SecurePass123!")

    result = await use_case.execute(command)

    assert result.is_ok()
    response = result.value
    assert response.message == "User created successfully"
    assert response.account.name == "Ada"
    assert response.account.email == "ada@example.com"
    UUID(response.account.id)
    assert "password" not in response.model_dump_json()

    mock_uow.accounts.get_by_email.assert_called_once_with("ada@example.com")
    mock_uow.accounts.create.assert_called_once()
    mock_uow.commit.assert_called_once()

    created = mock_uow.accounts.create.call_args.args[0]
    assert created.password_hash != "SecurePass123!"
    assert hasher.verify("SecurePass123!", created.password_hash)
    assert created.reset_token is None
    assert created.reset_token_expires_at is None


@pytest.mark.asyncio
async def test_register_trims_name_and_email(mock_uow, hasher):
    use_case = RegisterUseCase(mock_uow, hasher)
    command = RegisterCommand(
        name="  Ada  ", email="  ada@example.com ", password=" SecurePass123! "
    )

    result = await use_case.execute(command)

    assert result.is_ok()
    created = mock_uow.accounts.create.call_args.args[0]
    assert created.name == "Ada"
    assert created.email == "ada@example.com"
    # Passwords are never trimmed
    assert hasher.verify(" SecurePass123! ", created.password_hash)


def test_register_command_rejects_long_name():
    with pytest.raises(ValueError):
        RegisterCommand(name="x" * 33, email="ada@example.com", password="SecurePass123!")


@pytest.mark.asyncio
async def test_register_duplicate_email(mock_uow, hasher):
    mock_uow.accounts.get_by_email.return_value = Account(
        name="Ada", email="ada@example.com", password_hash="$2b$04$existing"
    )
    use_case = RegisterUseCase(mock_uow, hasher)

    result = await use_case.execute(
        RegisterCommand(name="Other", email="ada@example.com", password="SecurePass123!")
    )

    assert result.is_err()
    assert result.error.code == "DUPLICATE_ACCOUNT"
    mock_uow.accounts.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_register_duplicate_detected_by_unique_constraint(mock_uow, hasher):
    """Concurrent insert that slips past the lookup still maps to DUPLICATE_ACCOUNT"""
    mock_uow.accounts.create.side_effect = DuplicateEmailError("ada@example.com")
    use_case = RegisterUseCase(mock_uow, hasher)

    result = await use_case.execute(
        RegisterCommand(name="Ada", email="ada@example.com", password="SecurePass123!")
    )

    assert result.error.code == "DUPLICATE_ACCOUNT"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_register_short_password(mock_uow, hasher):
    use_case = RegisterUseCase(mock_uow, hasher)

    result = await use_case.execute(
        RegisterCommand(name="Ada", email="ada@example.com", password="short")
    )

    assert result.error.code == "INVALID_PASSWORD"
    mock_uow.accounts.get_by_email.assert_not_called()


@pytest.mark.asyncio
async def test_register_repository_unavailable(mock_uow, hasher):
    mock_uow.accounts.get_by_email.side_effect = RepositoryError("get_by_email failed")
    use_case = RegisterUseCase(mock_uow, hasher)

    result = await use_case.execute(
        RegisterCommand(name="Ada", email="ada@example.com", password="SecurePass123!")
    )

    assert result.error.code == "REPOSITORY_UNAVAILABLE"
    assert "get_by_email" not in result.error.message
