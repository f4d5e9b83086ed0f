import logging

from src.app.repositories.errors import DuplicateEmailError, RepositoryError
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Account
from src.libs.result import Error, Result, Return
from .password_rules import validate_password
from .register_dto import AccountInfo, RegisterCommand, RegisterResponse

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[RegisterResponse] (public identity, never the hash)

    Business Logic:
    1. Validate password length
    2. Check if email already exists
    3. Hash password with bcrypt
    4. Create Account (unique index catches concurrent duplicates)
    5. Commit transaction
    """

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher):
        self.uow = uow
        self.hasher = hasher

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with trimmed name and email

        Returns:
            Result[RegisterResponse] with the new account identity,
            or Error(DUPLICATE_ACCOUNT | INVALID_PASSWORD | REPOSITORY_UNAVAILABLE)
        """
        password_validation = validate_password(command.password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            try:
                existing = await self.uow.accounts.get_by_email(command.email)
                if existing:
                    return Return.err(
                        Error("DUPLICATE_ACCOUNT", "User already exists")
                    )

                account = Account(
                    name=command.name,
                    email=command.email,
                    password_hash=self.hasher.hash(command.password),
                )
                account = await self.uow.accounts.create(account)
                await self.uow.commit()
            except DuplicateEmailError:
                return Return.err(Error("DUPLICATE_ACCOUNT", "User already exists"))
            except RepositoryError:
                logger.exception("Account registration failed")
                return Return.err(
                    Error("REPOSITORY_UNAVAILABLE", "Account storage is unavailable")
                )

            logger.info("Account registered: %s", account.id)

            return Return.ok(
                RegisterResponse(
                    message="User created successfully",
                    account=AccountInfo(
                        id=str(account.id),
                        name=account.name,
                        email=account.email,
                    ),
                )
            )
