"""Authentication use cases"""
from .register_user import RegisterUser
from .login_user import LoginUser
from .get_current_user import GetCurrentUser
from .dtos import RegisterCommandDTO, LoginCommandDTO, UserDTO, AuthResponseDTO

__all__ = [
    "RegisterUser",
    "LoginUser",
    "GetCurrentUser",
    "RegisterCommandDTO",
    "LoginCommandDTO",
    "UserDTO",
    "AuthResponseDTO",
]
