"""GetCurrentUser Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.user_repository import UserRepository
from .dtos import UserDTO
from .mappers import to_user_dto


class GetCurrentUser:
    """Use Case: Profile of the authenticated user"""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def execute(self, user_id: int) -> Result[UserDTO]:
        try:
            user = await self.user_repo.get_by_id(user_id)
            if not user:
                return Return.err(
                    Error(
                        code="USER_NOT_FOUND",
                        message=f"User {user_id} not found",
                        reason="Account no longer exists",
                    )
                )
            return Return.ok(to_user_dto(user))

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_CURRENT_USER_FAILED",
                    message="Failed to get current user",
                    reason=str(e),
                )
            )
