from src.domain.user import User
from .dtos import UserDTO


def to_user_dto(user: User) -> UserDTO:
    return UserDTO(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        company_name=user.company_name,
        created_at=user.created_at,
    )
