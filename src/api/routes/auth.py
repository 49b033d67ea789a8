"""Authentication API Routes

Account registration, login and the current-user lookup. Tokens are
returned as `{"access_token", "token_type": "bearer", "user"}`.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.auth import get_current_user_id
from src.api.error import ClientError
from src.api.schemas.auth_request import RegisterRequestSchema, LoginRequestSchema
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_service import TokenService
from src.app.use_cases.auth import (
    RegisterUser,
    LoginUser,
    GetCurrentUser,
    RegisterCommandDTO,
    LoginCommandDTO,
    UserDTO,
    AuthResponseDTO,
)
from src.adapter.repositories import SqlAlchemyUserRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_password_hasher, get_token_service

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=AuthResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Account created",
            "content": {
                "application/json": {
                    "example": {
                        "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "token_type": "bearer",
                        "user": {
                            "id": 1,
                            "email": "owner@example.com",
                            "full_name": "Jane Owner",
                            "company_name": "Owner Studio",
                            "created_at": "2025-03-01T10:00:00"
                        }
                    }
                }
            }
        },
        409: {
            "description": "Email already registered",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "USER_ALREADY_EXISTS",
                            "message": "User with this email already exists"
                        }
                    }
                }
            }
        }
    }
)
async def register(
    request: RegisterRequestSchema,
    session: AsyncSession = Depends(get_session),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    token_service: TokenService = Depends(get_token_service)
):
    """Register a new account and return an access token."""
    use_case = RegisterUser(
        uow=SqlAlchemyUnitOfWork(session),
        user_repo=SqlAlchemyUserRepository(session),
        password_hasher=password_hasher,
        token_service=token_service,
    )
    result = await use_case.execute(RegisterCommandDTO(**request.model_dump()))

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.post(
    "/login",
    response_model=AuthResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        401: {
            "description": "Wrong email or password",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_CREDENTIALS",
                            "message": "Invalid email or password"
                        }
                    }
                }
            }
        }
    }
)
async def login(
    request: LoginRequestSchema,
    session: AsyncSession = Depends(get_session),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    token_service: TokenService = Depends(get_token_service)
):
    """Exchange email and password for an access token."""
    use_case = LoginUser(
        user_repo=SqlAlchemyUserRepository(session),
        password_hasher=password_hasher,
        token_service=token_service,
    )
    result = await use_case.execute(LoginCommandDTO(**request.model_dump()))

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.get("/me", response_model=UserDTO, status_code=status.HTTP_200_OK)
async def me(
    user_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session)
):
    """Return the authenticated user's profile."""
    use_case = GetCurrentUser(user_repo=SqlAlchemyUserRepository(session))
    result = await use_case.execute(user_id)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value
