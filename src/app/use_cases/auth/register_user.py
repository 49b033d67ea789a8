"""RegisterUser Use Case

Creates an account and returns an access token for it.
"""

import logging

from sqlalchemy.exc import IntegrityError

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_service import TokenService
from src.app.repositories.user_repository import UserRepository
from src.domain.user import User
from .dtos import RegisterCommandDTO, AuthResponseDTO
from .mappers import to_user_dto

logger = logging.getLogger(__name__)


def user_already_exists(email: str) -> Error:
    return Error(
        code="USER_ALREADY_EXISTS",
        message="User with this email already exists",
        reason=f"Email {email} is already registered",
    )


class RegisterUser:
    """
    Use Case: Register a new user

    Business Rules:
    1. Email is stored lower-cased and must be unique
    2. Password is stored only as a bcrypt hash
    3. Registration signs the user in (token returned)

    Flow:
    1. Check email is not taken
    2. Hash password
    3. Create user and commit
    4. Issue token
    """

    def __init__(
        self,
        uow: UnitOfWork,
        user_repo: UserRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
    ):
        self.uow = uow
        self.user_repo = user_repo
        self.password_hasher = password_hasher
        self.token_service = token_service

    async def execute(self, command: RegisterCommandDTO) -> Result[AuthResponseDTO]:
        email = command.email.strip().lower()

        try:
            # Step 1: Check email is not taken
            if await self.user_repo.get_by_email(email):
                return Return.err(user_already_exists(email))

            # Step 2: Hash password
            password_hash = self.password_hasher.hash(command.password)

            # Step 3: Create user and commit
            try:
                user = await self.user_repo.create(
                    User(
                        email=email,
                        password_hash=password_hash,
                        full_name=command.full_name or None,
                        company_name=command.company_name or None,
                    )
                )
                await self.uow.commit()
            except IntegrityError:
                await self.uow.rollback()
                return Return.err(user_already_exists(email))

            logger.info(f"Registered user {user.id}")

            # Step 4: Issue token
            token = self.token_service.issue(user.id, user.email)
            return Return.ok(AuthResponseDTO(access_token=token, user=to_user_dto(user)))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="REGISTER_USER_FAILED",
                    message="Failed to register user",
                    reason=str(e),
                )
            )
