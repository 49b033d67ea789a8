"""LoginUser Use Case"""

from libs.result import Result, Return, Error
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_service import TokenService
from src.app.repositories.user_repository import UserRepository
from .dtos import LoginCommandDTO, AuthResponseDTO
from .mappers import to_user_dto

INVALID_CREDENTIALS = Error(
    code="INVALID_CREDENTIALS",
    message="Invalid email or password",
    reason="Authentication failed",
)


class LoginUser:
    """
    Use Case: Exchange email and password for an access token

    Unknown email and wrong password yield the same error.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
    ):
        self.user_repo = user_repo
        self.password_hasher = password_hasher
        self.token_service = token_service

    async def execute(self, command: LoginCommandDTO) -> Result[AuthResponseDTO]:
        try:
            user = await self.user_repo.get_by_email(command.email.strip().lower())
            if not user:
                return Return.err(INVALID_CREDENTIALS)

            if not self.password_hasher.verify(command.password, user.password_hash):
                return Return.err(INVALID_CREDENTIALS)

            token = self.token_service.issue(user.id, user.email)
            return Return.ok(AuthResponseDTO(access_token=token, user=to_user_dto(user)))

        except Exception as e:
            return Return.err(
                Error(
                    code="LOGIN_FAILED",
                    message="Failed to log in",
                    reason=str(e),
                )
            )
